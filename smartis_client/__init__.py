"""Client for the Smartis.bi marketing analytics reporting API."""

from smartis_client.api_clients import SmartisClient
from smartis_client.config import SmartisSettings, get_settings
from smartis_client.entities import (
    Ad,
    Attribution,
    AttributionModel,
    Campaign,
    Channel,
    CrmCustomField,
    CrmCustomFieldGroup,
    Filter,
    FilterCategory,
    GroupBy,
    Grouping,
    Keyword,
    Metric,
    ModelAttribution,
    Payload,
    Placement,
    Project,
    TypeReport,
)
from smartis_client.errors import (
    APIError,
    InternalServerError,
    MalformedReportError,
    MalformedResponseError,
    MissingCredentialError,
    NoDataError,
    ResponseError,
    SmartisError,
    UnauthorizedError,
    UnknownStatusError,
)
from smartis_client.report import Cell, CellType, Report, build_reports

__all__ = [
    "SmartisClient",
    "SmartisSettings",
    "get_settings",
    "Ad",
    "Attribution",
    "AttributionModel",
    "Campaign",
    "Channel",
    "CrmCustomField",
    "CrmCustomFieldGroup",
    "Filter",
    "FilterCategory",
    "GroupBy",
    "Grouping",
    "Keyword",
    "Metric",
    "ModelAttribution",
    "Payload",
    "Placement",
    "Project",
    "TypeReport",
    "APIError",
    "InternalServerError",
    "MalformedReportError",
    "MalformedResponseError",
    "MissingCredentialError",
    "NoDataError",
    "ResponseError",
    "SmartisError",
    "UnauthorizedError",
    "UnknownStatusError",
    "Cell",
    "CellType",
    "Report",
    "build_reports",
]
