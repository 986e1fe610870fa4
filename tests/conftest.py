"""Shared fixtures for smartis_client tests.

No test talks to the network: ``SmartisClient`` gets a ``Mock`` session whose
``post`` returns canned responses.
"""

import json
from datetime import date
from unittest.mock import Mock

import pytest

from smartis_client import (
    Attribution,
    AttributionModel,
    GroupBy,
    Payload,
    SmartisClient,
    TypeReport,
)


def _make_response(status_code=200, body=None):
    if body is None:
        content = b""
    elif isinstance(body, bytes):
        content = body
    elif isinstance(body, str):
        content = body.encode()
    else:
        content = json.dumps(body).encode()

    response = Mock()
    response.status_code = status_code
    response.content = content
    response.json.side_effect = lambda: json.loads(content)
    return response


@pytest.fixture
def make_response():
    """Factory for fake ``requests.Response`` objects."""
    return _make_response


@pytest.fixture
def session():
    return Mock()


@pytest.fixture
def client(session):
    return SmartisClient(api_key="test-api-key", crm_token="test-crm-token", session=session)


@pytest.fixture
def route(session):
    """Answer POSTs by endpoint suffix: ``route({"crm/crmCustomField/get": {...}})``."""

    def _route(responses):
        def _post(url, **kwargs):
            for endpoint, body in responses.items():
                if url.endswith(endpoint):
                    return _make_response(200, body)
            raise AssertionError(f"Unexpected request to {url}")

        session.post.side_effect = _post
        return session

    return _route


@pytest.fixture
def payload():
    return Payload(
        project="object_1",
        metrics=["cost", "leads"],
        datetime_from=date(2024, 1, 1),
        datetime_to=date(2024, 1, 31),
        group_by=GroupBy.DAY,
        type_report=TypeReport.AGGREGATED,
        attribution=Attribution(model_id=AttributionModel.LAST_CLICK, period=30, with_direct=True),
    )
