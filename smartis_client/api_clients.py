# api_clients.py
import json
import logging
from typing import Any, Dict, List, NamedTuple, Optional

import requests

from smartis_client.config import DEFAULT_BASE_URL, SmartisSettings, get_settings
from smartis_client.entities import (
    Ad,
    Campaign,
    Channel,
    CrmCustomField,
    CrmCustomFieldGroup,
    Grouping,
    Keyword,
    Metric,
    ModelAttribution,
    Payload,
    Placement,
    Project,
)
from smartis_client.errors import (
    APIError,
    InternalServerError,
    ResponseError,
    UnauthorizedError,
    UnknownStatusError,
)
from smartis_client.report import Report, build_reports
from smartis_client.responses import (
    decode_groupings,
    decode_list,
    decode_model_attributions,
    decode_reports,
)

logger = logging.getLogger(__name__)


class Method(NamedTuple):
    endpoint: str
    plural: str


GET_REPORTS = Method(endpoint="reports/getReport", plural="reports")
GET_PROJECTS = Method(endpoint="projects/get", plural="projects")
GET_METRICS = Method(endpoint="metrics/get", plural="metrics")
GET_GROUPINGS = Method(endpoint="reports/getGroupings", plural="groupings")
GET_ATTRIBUTIONS = Method(endpoint="reports/getModelAttributions", plural="modelAttributions")
GET_CHANNELS = Method(endpoint="reports/getChannels", plural="channels")
GET_PLACEMENTS = Method(endpoint="reports/getPlacements", plural="placements")
GET_CAMPAIGNS = Method(endpoint="reports/getCampaigns", plural="campaigns")
GET_ADS = Method(endpoint="reports/getAds", plural="ads")
GET_KEYWORDS = Method(endpoint="reports/getKeywords", plural="keywords")
GET_CRM_CUSTOM_FIELDS = Method(endpoint="crm/crmCustomField/get", plural="crmCustomFields")
GET_CRM_CUSTOM_FIELD_GROUPS = Method(endpoint="crm/crmCustomFieldGroup/get", plural="crmCustomFieldGroups")


def check_status(response: requests.Response) -> None:
    """Raise the error matching a non-2xx response.

    Only a JSON object with a string ``error`` counts as an API error
    message; ``{}``, ``null`` or a non-string ``error`` give
    ``UnknownStatusError``.
    """
    status = response.status_code
    if 200 <= status < 300:
        return

    if status == 500:
        raise InternalServerError()
    if status == 401:
        raise UnauthorizedError()

    try:
        error_json = response.json()
    except ValueError:
        error_json = None

    if isinstance(error_json, dict) and isinstance(error_json.get("error"), str):
        raise APIError(error_json["error"], status)

    raise UnknownStatusError(status)


class SmartisClient:
    """Client for the Smartis.bi reporting API.

    Every call is a blocking POST. ``session`` and ``timeout`` are passed
    straight to ``requests``; use them to bound or cancel in-flight calls.
    """

    BASE_URL = DEFAULT_BASE_URL

    def __init__(self, api_key, crm_token="", base_url=None, session=None, timeout=30.0):
        self.api_key = api_key
        self.crm_token = crm_token or ""
        self.base_url = (base_url or self.BASE_URL).rstrip("/") + "/"
        self.session = session or requests.Session()
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Optional[SmartisSettings] = None, session=None) -> "SmartisClient":
        settings = settings or get_settings()
        return cls(
            api_key=settings.api_key.get_secret_value(),
            crm_token=settings.crm_token.get_secret_value() if settings.crm_token else "",
            base_url=settings.base_url,
            session=session,
            timeout=settings.timeout,
        )

    def _url(self, method: Method) -> str:
        return f"{self.base_url}{method.endpoint}"

    def send(self, method: Method, data: Optional[Dict[str, Any]] = None) -> bytes:
        """POST ``data`` as JSON to ``method`` and return the raw response body.

        Raises:
            UnauthorizedError, InternalServerError, APIError, UnknownStatusError:
                On non-2xx responses.
            requests.RequestException: On connection failures and timeouts.
        """
        url = self._url(method)
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        body = json.dumps(data) if data is not None else None

        logger.info(f"SmartisClient: Requesting {method.plural} from {url}")
        logger.debug(f"SmartisClient: Request payload: {_redact(data)}")

        try:
            response = self.session.post(url, headers=headers, data=body, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"SmartisClient: Error requesting {url}: {e}")
            raise

        logger.info(f"SmartisClient: Response received. Status: {response.status_code}")

        try:
            check_status(response)
        except ResponseError as e:
            logger.error(f"SmartisClient: API Error ({e.status_code}) from {url}: {e.message}")
            raise

        return response.content

    def get_report(self, payload: Payload) -> List[Report]:
        """Fetch a report, one ``Report`` per requested metric.

        Raises:
            NoDataError: If the API returned no report data.
            MalformedReportError: If the report data has an unexpected shape.
        """
        body = self.send(GET_REPORTS, payload.to_request())
        data = decode_reports(body)

        for warning in data.warnings:
            logger.warning(f"SmartisClient: API warning for project '{payload.project}': {warning}")
        logger.debug(f"SmartisClient: Report worktime: {data.meta_info.worktime}")

        reports = build_reports(data.reports)
        logger.info(f"SmartisClient: Processed {len(reports)} reports.")
        return reports

    def get_projects(self) -> List[Project]:
        return decode_list(self.send(GET_PROJECTS), GET_PROJECTS.plural, Project)

    def get_metrics(self) -> List[Metric]:
        return decode_list(self.send(GET_METRICS), GET_METRICS.plural, Metric)

    def get_groupings(self) -> List[Grouping]:
        return decode_groupings(self.send(GET_GROUPINGS))

    def get_attributions(self) -> List[ModelAttribution]:
        return decode_model_attributions(self.send(GET_ATTRIBUTIONS))

    def get_channels(self) -> List[Channel]:
        return decode_list(self.send(GET_CHANNELS), GET_CHANNELS.plural, Channel)

    def get_placements(self) -> List[Placement]:
        return decode_list(self.send(GET_PLACEMENTS), GET_PLACEMENTS.plural, Placement)

    def get_campaigns(self, ids: List[int]) -> List[Campaign]:
        body = self.send(GET_CAMPAIGNS, {"ids": list(ids)})
        return decode_list(body, GET_CAMPAIGNS.plural, Campaign)

    def get_ads(self, ids: List[int]) -> List[Ad]:
        body = self.send(GET_ADS, {"ids": list(ids)})
        return decode_list(body, GET_ADS.plural, Ad)

    def get_keywords(self, ids: List[int]) -> List[Keyword]:
        body = self.send(GET_KEYWORDS, {"ids": list(ids)})
        return decode_list(body, GET_KEYWORDS.plural, Keyword)

    def get_crm_custom_fields(self, ids: List[int]) -> List[CrmCustomField]:
        body = self.send(GET_CRM_CUSTOM_FIELDS, {"ids": list(ids), "smartis_crm_token": self.crm_token})
        return decode_list(body, GET_CRM_CUSTOM_FIELDS.plural, CrmCustomField)

    def get_crm_custom_field_groups(self, ids: List[int]) -> List[CrmCustomFieldGroup]:
        body = self.send(GET_CRM_CUSTOM_FIELD_GROUPS, {"ids": list(ids), "smartis_crm_token": self.crm_token})
        return decode_list(body, GET_CRM_CUSTOM_FIELD_GROUPS.plural, CrmCustomFieldGroup)


def _redact(data: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if data and "smartis_crm_token" in data:
        return {**data, "smartis_crm_token": "***"}
    return data
