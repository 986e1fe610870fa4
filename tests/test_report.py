"""Tests for report building, cell classification and column indexing."""

import pytest

from smartis_client import (
    CellType,
    MalformedReportError,
    NoDataError,
    Report,
    build_reports,
)
from smartis_client.report import Cell, classify_column


class TestClassifyColumn:
    """Column ids are classified by substring."""

    @pytest.mark.parametrize(
        "column_id, clean_id",
        [
            ("field_cf_group_5678_sum", "5678"),
            ("field_cf_group_42", "42"),
            ("field_cf_group_7_a_b_c", "7"),
        ],
    )
    def test_field_group(self, column_id, clean_id):
        assert classify_column(column_id) == (CellType.FIELD_CF_GROUP, clean_id)

    @pytest.mark.parametrize(
        "column_id, clean_id",
        [
            ("field_1234_count", "1234"),
            ("field_10", "10"),
            ("field_99_x_y", "99"),
            ("custom_field_77_x", "77"),
        ],
    )
    def test_field(self, column_id, clean_id):
        assert classify_column(column_id) == (CellType.FIELD, clean_id)

    @pytest.mark.parametrize("column_id", ["day", "cost", "placement_id", "utm_source", "fields"])
    def test_system_field(self, column_id):
        assert classify_column(column_id) == (CellType.SYSTEM_FIELD, "")

    def test_non_numeric_id_is_kept_verbatim(self):
        assert classify_column("field_abc_x") == (CellType.FIELD, "abc")

    def test_cell_is_classified_on_construction(self):
        cell = Cell("field_cf_group_5_total", 3)

        assert cell.type == CellType.FIELD_CF_GROUP
        assert cell.clean_id == "5"
        assert cell.value == 3
        assert cell.name == ""


class TestBuildReports:
    def test_one_report_per_metric(self):
        reports = build_reports(
            {
                "cost": [{"day": "2024-01-01", "field_10_x": 5}],
                "leads": [{"day": "2024-01-01"}, {"day": "2024-01-02"}],
            }
        )

        assert {r.metric for r in reports} == {"cost", "leads"}
        by_metric = {r.metric: r for r in reports}
        assert len(by_metric["cost"].rows) == 1
        assert len(by_metric["leads"].rows) == 2

    def test_cells_cover_all_keys(self):
        (report,) = build_reports({"cost": [{"day": "2024-01-01", "field_10_x": 5, "field_cf_group_3_y": None}]})

        row = report.rows[0]
        assert {c.column_id for c in row} == {"day", "field_10_x", "field_cf_group_3_y"}
        assert {c.type for c in row} == {CellType.SYSTEM_FIELD, CellType.FIELD, CellType.FIELD_CF_GROUP}
        assert all(c.name == "" for c in row)

    def test_values_are_not_coerced(self):
        (report,) = build_reports({"m": [{"a": 1, "b": 1.5, "c": "1", "d": None, "e": True}]})

        values = {c.column_id: c.value for c in report.rows[0]}
        assert values == {"a": 1, "b": 1.5, "c": "1", "d": None, "e": True}
        assert type(values["a"]) is int
        assert type(values["c"]) is str
        assert type(values["e"]) is bool

    def test_empty_reports_map_raises_no_data(self):
        with pytest.raises(NoDataError, match="no reports data"):
            build_reports({})

    def test_metric_with_no_rows_is_an_empty_report(self):
        reports = build_reports({"cost": [], "leads": [{"day": "2024-01-01"}]})

        by_metric = {r.metric: r for r in reports}
        assert by_metric["cost"].rows == []
        assert len(by_metric["leads"].rows) == 1

    def test_row_that_is_not_an_object_fails_whole_build(self):
        with pytest.raises(MalformedReportError):
            build_reports({"cost": [{"day": "2024-01-01"}], "leads": [{"day": "x"}, ["not", "a", "row"]]})

    def test_metric_that_is_not_a_list_fails(self):
        with pytest.raises(MalformedReportError, match="cost"):
            build_reports({"cost": {"day": "2024-01-01"}})


class TestMapColumns:
    def test_indexing_round_trip(self):
        (report,) = build_reports({"cost": [{"field_10_x": 5, "day": "2024-01-01"}]})

        assert report.is_mapped is False
        report.map_columns()

        assert report.is_mapped is True
        row = report.rows_mapped[0]
        assert row["field_10_x"].value == 5
        assert row["day"].value == "2024-01-01"

    def test_index_shares_cells_with_rows(self):
        (report,) = build_reports({"cost": [{"field_10_x": 5}]})
        report.map_columns()

        report.rows_mapped[0]["field_10_x"].name = "Deal source"

        assert report.rows[0][0].name == "Deal source"

    def test_repeated_indexing_does_not_duplicate_rows(self):
        (report,) = build_reports({"cost": [{"day": "a"}, {"day": "b"}]})

        report.map_columns()
        report.map_columns()

        assert len(report.rows_mapped) == 2
        assert report.is_mapped is True

    def test_duplicate_column_id_last_write_wins(self):
        first = Cell("day", "2024-01-01")
        second = Cell("day", "2024-01-02")
        report = Report("cost", rows=[[first, second]])

        report.map_columns()

        assert report.rows_mapped[0]["day"] is second

    def test_empty_report(self):
        report = Report("cost")

        report.map_columns()

        assert report.rows_mapped == []
        assert report.is_mapped is True
