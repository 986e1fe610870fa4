"""Report rows and cells.

The API returns each report as a list of flat ``{column_id: value}`` objects.
A column id tells what kind of column it is:

    field_cf_group_5678_sum   CRM custom field group 5678
    field_1234_count          CRM custom field 1234
    day, cost, ...            plain system field

CRM columns carry no human readable title in the report itself. Titles are
fetched afterwards with one batched lookup per kind, see
``Report.resolve_column_names``.
"""

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from smartis_client.errors import MalformedReportError, MissingCredentialError, NoDataError

if TYPE_CHECKING:
    from smartis_client.api_clients import SmartisClient

logger = logging.getLogger(__name__)

FIELD_PREFIX = "field_"
FIELD_CF_GROUP_PREFIX = "field_cf_group_"


class CellType(str, Enum):
    SYSTEM_FIELD = "system_field"
    FIELD = "field"
    FIELD_CF_GROUP = "field_cf_group"


def classify_column(column_id: str) -> Tuple[CellType, str]:
    """Return the cell type and clean id encoded in a column id.

    The clean id is whatever follows the first occurrence of the prefix, up to
    the next underscore. It is not validated here; a non-numeric clean id only
    fails when its name is looked up.
    """
    if FIELD_CF_GROUP_PREFIX in column_id:
        rest = column_id.split(FIELD_CF_GROUP_PREFIX, 1)[1]
        return CellType.FIELD_CF_GROUP, rest.split("_", 1)[0]

    if FIELD_PREFIX in column_id:
        rest = column_id.split(FIELD_PREFIX, 1)[1]
        return CellType.FIELD, rest.split("_", 1)[0]

    return CellType.SYSTEM_FIELD, ""


class Cell:
    """One column value within one report row."""

    __slots__ = ("column_id", "type", "clean_id", "value", "name")

    def __init__(self, column_id: str, value: Any):
        self.column_id = column_id
        self.value = value
        self.name = ""
        self.type, self.clean_id = classify_column(column_id)

    def __repr__(self) -> str:
        return (
            f"Cell(column_id={self.column_id!r}, type={self.type.value}, "
            f"value={self.value!r}, name={self.name!r})"
        )


Row = List[Cell]
RowMapped = Dict[str, Cell]


class Report:
    """Rows of a single metric.

    ``rows`` keeps the order in which rows arrived. ``rows_mapped`` is filled by
    ``map_columns`` and indexes the very same ``Cell`` objects by column id.
    """

    def __init__(self, metric: str, rows: Optional[List[Row]] = None):
        self.metric = metric
        self.rows: List[Row] = rows if rows is not None else []
        self.rows_mapped: List[RowMapped] = []
        self._is_mapped = False
        self._names_resolved = False

    def __repr__(self) -> str:
        return f"Report(metric={self.metric!r}, rows={len(self.rows)})"

    @property
    def is_mapped(self) -> bool:
        return self._is_mapped

    @property
    def names_resolved(self) -> bool:
        return self._names_resolved

    @classmethod
    def from_raw(cls, metric: str, data: Any) -> "Report":
        """Build a report from the raw row list of one metric."""
        if not isinstance(data, list):
            raise MalformedReportError(
                f"invalid report data for metric '{metric}': expected a list of rows, got {type(data).__name__}"
            )

        rows: List[Row] = []
        for index, raw_row in enumerate(data):
            if not isinstance(raw_row, dict):
                raise MalformedReportError(
                    f"invalid report data for metric '{metric}': row {index} is {type(raw_row).__name__}, not an object"
                )
            rows.append([Cell(column_id, value) for column_id, value in raw_row.items()])

        return cls(metric, rows)

    def _crm_cells(self) -> Tuple[Dict[str, List[Cell]], Dict[str, List[Cell]]]:
        fields: Dict[str, List[Cell]] = {}
        groups: Dict[str, List[Cell]] = {}

        for row in self.rows:
            for cell in row:
                if cell.type == CellType.FIELD:
                    fields.setdefault(cell.clean_id, []).append(cell)
                elif cell.type == CellType.FIELD_CF_GROUP:
                    groups.setdefault(cell.clean_id, []).append(cell)

        return fields, groups

    def resolve_column_names(self, client: "SmartisClient") -> None:
        """Fill ``Cell.name`` for CRM custom field and field group columns.

        Issues at most one custom field lookup and one field group lookup.
        Ids the API does not return keep an empty name. Errors from either
        lookup propagate; names written before the failure stay in place.

        Raises:
            MissingCredentialError: If the client has no CRM token.
            MalformedReportError: If a CRM column carries a non-numeric id.
        """
        if not client.crm_token:
            raise MissingCredentialError()

        field_cells, group_cells = self._crm_cells()

        if field_cells:
            ids = _parse_clean_ids(field_cells)
            logger.info(f"Report: Resolving {len(ids)} CRM custom field names for '{self.metric}'")
            for field in client.get_crm_custom_fields(ids):
                for cell in field_cells.get(str(field.id), []):
                    cell.name = field.custom_field_title

        if group_cells:
            ids = _parse_clean_ids(group_cells)
            logger.info(f"Report: Resolving {len(ids)} CRM custom field group names for '{self.metric}'")
            for group in client.get_crm_custom_field_groups(ids):
                for cell in group_cells.get(str(group.id), []):
                    cell.name = group.title

        self._names_resolved = True

    def map_columns(self) -> None:
        """Index every row by column id into ``rows_mapped``."""
        self.rows_mapped = [{cell.column_id: cell for cell in row} for row in self.rows]
        self._is_mapped = True


def _parse_clean_ids(cells_by_id: Dict[str, List[Cell]]) -> List[int]:
    ids = []
    for clean_id, cells in cells_by_id.items():
        if not (clean_id.isascii() and clean_id.isdigit()):
            raise MalformedReportError(
                f"column '{cells[0].column_id}' has a non-numeric id: {clean_id!r}"
            )
        ids.append(int(clean_id))
    return ids


def build_reports(raw_reports: Dict[str, Any]) -> List[Report]:
    """Build one report per metric from the ``reports`` object of a response.

    Raises:
        NoDataError: If there are no metrics at all.
        MalformedReportError: If any metric or row has an unexpected shape.
    """
    if not raw_reports:
        raise NoDataError()

    reports = [Report.from_raw(metric, data) for metric, data in raw_reports.items()]
    logger.debug(f"Report: Built {len(reports)} reports, {sum(len(r.rows) for r in reports)} rows in total")
    return reports
