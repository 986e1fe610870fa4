"""Tests for report payload serialization."""

from datetime import date, datetime

import pytest
from pydantic import ValidationError

from smartis_client import (
    Attribution,
    AttributionModel,
    Filter,
    FilterCategory,
    GroupBy,
    Payload,
    TypeReport,
)


def make_payload(**overrides):
    fields = dict(
        project="object_1",
        metrics=["cost", "leads", "deals"],
        datetime_from=date(2024, 3, 1),
        datetime_to=date(2024, 3, 7),
        group_by=GroupBy.CAMPAIGN,
        type_report=TypeReport.RAW,
        attribution=Attribution(model_id=AttributionModel.BY_POSITION_WITH_POSTVIEW, period=90),
    )
    fields.update(overrides)
    return Payload(**fields)


class TestPayload:
    def test_to_request(self):
        assert make_payload().to_request() == {
            "project": "object_1",
            "metrics": "cost;leads;deals",
            "datetimeFrom": "2024-03-01",
            "datetimeTo": "2024-03-07",
            "groupBy": "campaigns",
            "type": "raw",
            "attribution": {"model_id": 23, "period": 90, "with_direct": False},
        }

    def test_filters_and_fields_included_when_set(self):
        request = make_payload(
            filters=[Filter(name=FilterCategory.BY_CHANNEL, operator="=", value="15")],
            fields=["field_10", "day"],
        ).to_request()

        assert request["filters"] == [{"name": "1222", "operator": "=", "value": "15"}]
        assert request["fields"] == ["field_10", "day"]

    def test_single_day_range(self):
        request = make_payload(datetime_from=date(2024, 3, 1), datetime_to=date(2024, 3, 1)).to_request()

        assert request["datetimeFrom"] == request["datetimeTo"] == "2024-03-01"

    def test_reversed_range_rejected(self):
        with pytest.raises(ValidationError, match="after"):
            make_payload(datetime_from=date(2024, 3, 8), datetime_to=date(2024, 3, 7))

    def test_datetimes_are_truncated_to_days(self):
        payload = make_payload(
            datetime_from=datetime(2024, 3, 1, 23, 59), datetime_to=datetime(2024, 3, 2, 0, 1)
        )

        assert payload.datetime_from == date(2024, 3, 1)
        assert payload.to_request()["datetimeTo"] == "2024-03-02"

    def test_enum_values_from_strings(self):
        payload = make_payload(group_by="placement_id", type_report="aggregated")

        assert payload.group_by is GroupBy.PLACEMENT
        assert payload.to_request()["type"] == "aggregated"

    def test_unknown_attribution_model_rejected(self):
        with pytest.raises(ValidationError):
            Attribution(model_id=99, period=30)
