"""Decoders for Smartis API response bodies.

Most endpoints answer with ``{"<plural>": [ {...}, ... ]}``. Groupings and
attribution models are the exception: they come back keyed by id,
``{"<plural>": {"<id>": {...}, ...}}``, and are flattened to plain lists here
so callers only ever see lists.
"""

import json
import logging
from typing import Any, Dict, List, Type, TypeVar

from pydantic import Field, ValidationError, field_validator

from smartis_client.entities import Grouping, ModelAttribution, SmartisModel
from smartis_client.errors import MalformedReportError, MalformedResponseError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=SmartisModel)


def load_json(body: bytes, error_cls: Type[MalformedResponseError] = MalformedResponseError) -> Dict[str, Any]:
    """Parse a response body that must be a JSON object."""
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.error(f"Invalid JSON response body: {body[:500]!r}")
        raise error_cls(f"Invalid JSON response: {e}") from e

    if not isinstance(data, dict):
        logger.error(f"Unexpected response format. Expected an object. Type: {type(data).__name__}")
        raise error_cls(f"Unexpected response format: expected an object, got {type(data).__name__}")

    return data


def decode_list(body: bytes, key: str, model: Type[ModelT]) -> List[ModelT]:
    """Decode ``{"<key>": [ ... ]}`` into a list of ``model``. A missing key reads as empty."""
    data = load_json(body)
    items = data.get(key) or []

    if not isinstance(items, list):
        raise MalformedResponseError(f"Expected '{key}' to be a list, got {type(items).__name__}")

    try:
        return [model.model_validate(item) for item in items]
    except ValidationError as e:
        raise MalformedResponseError(f"Failed to decode '{key}': {e}") from e


def _keyed_values(data: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
    items = data.get(key) or {}

    # An empty collection is serialized by the API as [] rather than {}.
    if isinstance(items, dict):
        values = list(items.values())
    elif isinstance(items, list):
        values = items
    else:
        raise MalformedResponseError(f"Expected '{key}' to be an object, got {type(items).__name__}")

    for value in values:
        if not isinstance(value, dict):
            raise MalformedResponseError(f"Unexpected item in '{key}': {value!r}")

    return values


def _is_system(value: Any) -> bool:
    # is_system is sent as 0/1
    return value == 1


def decode_groupings(body: bytes) -> List[Grouping]:
    """Decode the id-keyed ``groupings`` object into a list."""
    data = load_json(body)
    try:
        return [
            Grouping.model_validate({**raw, "is_system": _is_system(raw.get("is_system"))})
            for raw in _keyed_values(data, "groupings")
        ]
    except ValidationError as e:
        raise MalformedResponseError(f"Failed to decode 'groupings': {e}") from e


def decode_model_attributions(body: bytes) -> List[ModelAttribution]:
    """Decode the id-keyed ``modelAttributions`` object into a list."""
    data = load_json(body)
    try:
        return [
            ModelAttribution.model_validate({**raw, "is_system": _is_system(raw.get("is_system"))})
            for raw in _keyed_values(data, "modelAttributions")
        ]
    except ValidationError as e:
        raise MalformedResponseError(f"Failed to decode 'modelAttributions': {e}") from e


class MetaInfo(SmartisModel):
    worktime: float = 0


class ReportsResponse(SmartisModel):
    """Envelope of the ``reports/getReport`` response."""

    reports: Dict[str, Any] = Field(default_factory=dict)
    meta_info: MetaInfo = Field(default_factory=MetaInfo, alias="metaInfo")
    warnings: List[Any] = Field(default_factory=list)

    @field_validator("reports", mode="before")
    @classmethod
    def empty_list_as_empty_map(cls, v: Any) -> Any:
        if isinstance(v, list) and not v:
            return {}
        return v


def decode_reports(body: bytes) -> ReportsResponse:
    data = load_json(body, error_cls=MalformedReportError)
    try:
        return ReportsResponse.model_validate(data)
    except ValidationError as e:
        raise MalformedReportError(f"Failed to decode reports response: {e}") from e
