"""Request payloads, enumerations and reference entities of the Smartis API."""

from datetime import date, datetime
from enum import Enum, IntEnum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class AttributionModel(IntEnum):
    """Attribution algorithms accepted by the report endpoint."""

    LAST_CLICK = 1
    FIRST_CLICK = 2
    LINEAR = 3
    BY_POSITION = 4
    FIRST_COMMUNICATION = 5
    LINEAR_BY_COMMUNICATION = 6
    LINEAR_WITH_POSTVIEW = 10
    LAST_CLICK_WITH_POSTVIEW = 15
    FIRST_CLICK_WITH_POSTVIEW = 16
    NOT_FIRST_NOT_LAST_CLICK = 17
    LAST_COMMUNICATION = 22
    BY_POSITION_WITH_POSTVIEW = 23


class GroupBy(str, Enum):
    """Report grouping dimension."""

    AD = "ad_id"
    DAY = "day"
    PLACEMENT = "placement_id"
    CAMPAIGN = "campaigns"
    OBJECT = "smartis_object"


class FilterCategory(IntEnum):
    """Well-known filter parameter ids."""

    BY_SMARTIS_ID = 7071
    BY_CHANNEL = 1222
    BY_PLACEMENT = 1223


class TypeReport(str, Enum):
    RAW = "raw"
    AGGREGATED = "aggregated"


class SmartisModel(BaseModel):
    """Base model for decoded API records.

    Unknown keys are ignored and JSON nulls fall back to the field default,
    so a missing number reads as 0 and a missing string as "".
    """

    model_config = {
        "populate_by_name": True,
        "extra": "ignore",
        "coerce_numbers_to_str": True,
    }

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


# Outbound payload


class Filter(SmartisModel):
    name: str
    operator: str
    value: str

    @field_validator("name", mode="before")
    @classmethod
    def category_to_name(cls, v: Any) -> Any:
        if isinstance(v, FilterCategory):
            return str(v.value)
        return v


class Attribution(SmartisModel):
    model_config = {"protected_namespaces": ()}

    model_id: AttributionModel
    period: int = Field(..., ge=0, description="Lookback period in days")
    with_direct: bool = False


class Payload(SmartisModel):
    """Report request parameters.

    ``datetime_from`` and ``datetime_to`` are inclusive and must be ordered.
    """

    project: str
    metrics: List[str]
    datetime_from: date
    datetime_to: date
    group_by: GroupBy
    type_report: TypeReport
    filters: List[Filter] = Field(default_factory=list)
    fields: List[str] = Field(default_factory=list)
    attribution: Attribution

    @field_validator("datetime_from", "datetime_to", mode="before")
    @classmethod
    def truncate_datetime(cls, v: Any) -> Any:
        if isinstance(v, datetime):
            return v.date()
        return v

    @model_validator(mode="after")
    def check_date_range(self) -> "Payload":
        if self.datetime_from > self.datetime_to:
            raise ValueError(
                f"datetime_from ({self.datetime_from}) is after datetime_to ({self.datetime_to})"
            )
        return self

    def to_request(self) -> Dict[str, Any]:
        """Render the JSON body expected by ``reports/getReport``."""
        payload = {
            "project": self.project,
            "metrics": ";".join(self.metrics),
            "datetimeFrom": self.datetime_from.strftime("%Y-%m-%d"),
            "datetimeTo": self.datetime_to.strftime("%Y-%m-%d"),
            "groupBy": self.group_by.value,
            "type": self.type_report.value,
            "attribution": {
                "model_id": int(self.attribution.model_id),
                "period": self.attribution.period,
                "with_direct": self.attribution.with_direct,
            },
        }

        if self.filters:
            payload["filters"] = [f.model_dump() for f in self.filters]

        if self.fields:
            payload["fields"] = list(self.fields)

        return payload


# Reference entities


class ProjectField(SmartisModel):
    value: str = ""
    title: str = ""


class Project(SmartisModel):
    id: int = 0
    project: str = ""
    title: str = ""
    created_at: int = 0
    is_active: int = 0
    is_super_object: int = 0
    can_grouping_by_objects: int = 0
    project_fields: List[ProjectField] = Field(default_factory=list)


class Metric(SmartisModel):
    id: int = 0
    code: str = ""
    title: str = ""
    description: Optional[str] = None
    category_id: int = 0
    category_title: str = ""
    category_sort: int = 0
    is_system: int = 0
    m_parent: int = 0
    service_id: int = 0
    is_group: Optional[int] = None
    formule: Optional[str] = None
    calculate: str = ""
    date_create: int = 0
    enable_original_data: int = 0


class Grouping(SmartisModel):
    id: int = 0
    title: str = ""
    code: str = ""
    is_system: bool = False
    sort: int = 0
    client_id: int = 0


class ModelAttribution(SmartisModel):
    """Attribution model descriptor as listed by the API."""

    id: int = 0
    title: str = ""
    about: str = ""
    is_system: bool = False


class Channel(SmartisModel):
    id: int = 0
    title: str = ""
    name: Optional[str] = None
    is_active: bool = Field(default=False, alias="isActive")
    is_visible: bool = Field(default=False, alias="isVisible")
    is_default_for_channel: bool = False
    parent_channel_id: int = 0
    num_level: int = 0
    cat_id: str = ""
    service_id: Any = None
    client_id: int = 0
    grouping_id: int = 0
    class_data: Any = Field(default=None, alias="classData")
    get_data_method: Any = Field(default=None, alias="getDataMethod")
    date_create: str = ""
    sort: int = 0
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    deleted_at: Any = None
    category_title: Optional[str] = None


class PlacementChannel(SmartisModel):
    id: int = 0
    title: str = ""
    channel_id: int = 0


class Placement(SmartisModel):
    id: int = 0
    title: str = ""
    name: Optional[str] = None
    is_active: bool = Field(default=False, alias="isActive")
    is_visible: bool = Field(default=False, alias="isVisible")
    is_default_for_channel: bool = False
    parent_channel_id: int = 0
    num_level: int = 0
    cat_id: str = ""
    service_id: Optional[int] = None
    client_id: int = 0
    grouping_id: int = 0
    class_data: Optional[str] = Field(default=None, alias="classData")
    get_data_method: Any = Field(default=None, alias="getDataMethod")
    date_create: str = ""
    sort: int = 0
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    deleted_at: Any = None
    channel_id: int = 0
    channel: PlacementChannel = Field(default_factory=PlacementChannel)


class Campaign(SmartisModel):
    id: int = 0
    placement_id: int = 0
    title: str = ""
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class Ad(SmartisModel):
    id: int = 0
    external_id: str = ""
    placement_id: int = 0
    campaign_id: int = 0
    external_campaign_id: str = ""
    type: str = ""
    title: str = ""
    text: str = ""
    text1: str = ""
    text2: Optional[str] = None
    preview_url: Any = None
    href: Any = None
    device: Any = None
    created_at: str = ""


class Keyword(SmartisModel):
    id: int = 0
    keyword: str = ""


class CrmCustomField(SmartisModel):
    id: int = 0
    crm_account_id: int = 0
    element_type_id: int = 0
    custom_field_title: str = ""
    field_type_id: int = 0
    is_multiple: int = 0
    group_id: int = 0
    description: str = ""
    status: int = 0
    is_filter: int = 0
    filter_param_id: int = 0
    default_visibility: int = 0


class CrmCustomFieldGroup(SmartisModel):
    id: int = 0
    title: str = ""
    crm_account_id: int = 0
    default_visibility: int = 0
    sort: int = 0
