"""Fetch survey definitions from the survey API."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import quote, urlencode

import requests

from surveybull.config import DEFAULT_REQUEST_TIMEOUT, Settings
from surveybull.exceptions import InvalidSurveyPayload
from surveybull.survey_models import DEFAULT_SURVEY, Survey, parse_survey

logger = logging.getLogger(__name__)

SURVEY_PATH_TEMPLATE = "/api/surveys/json/{survey_id}"
TUNNEL_WARNING_PARAM = "ngrok-skip-browser-warning"

INVALID_STRUCTURE_MESSAGE = "Invalid survey data structure."
LOAD_FAILED_MESSAGE = "Failed to load survey data. Showing default survey."


@dataclass(frozen=True)
class FetchResult:
    """Outcome of a survey fetch, successful or substituted."""

    survey: Survey
    survey_id: Optional[str] = None
    error: Optional[str] = None
    is_fallback: bool = False


def survey_url(base_url: str, survey_id: str, *, skip_tunnel_warning: bool = False) -> str:
    """Return the endpoint that serves the survey identified by ``survey_id``."""

    path = SURVEY_PATH_TEMPLATE.format(survey_id=quote(str(survey_id).strip(), safe=""))
    url = f"{base_url.rstrip('/')}{path}"
    if skip_tunnel_warning:
        url = f"{url}?{urlencode({TUNNEL_WARNING_PARAM: 'true'})}"
    return url


def fetch_survey_payload(url: str, timeout: float = DEFAULT_REQUEST_TIMEOUT) -> Any:
    """Download and decode the survey JSON served at ``url``."""

    response = requests.get(url, headers={"Accept": "application/json"}, timeout=timeout)
    logger.debug("Survey endpoint %s responded with %s", url, response.status_code)
    response.raise_for_status()
    return response.json()


def default_result(survey_id: Optional[str] = None, error: Optional[str] = None) -> FetchResult:
    """Return a result carrying the default survey."""

    return FetchResult(survey=DEFAULT_SURVEY, survey_id=survey_id, error=error, is_fallback=True)


class SurveyFetcher:
    """Fetch surveys, degrading to :data:`DEFAULT_SURVEY` on any failure."""

    def __init__(
        self,
        base_url: str,
        *,
        skip_tunnel_warning: bool = False,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ) -> None:
        self.base_url = base_url
        self.skip_tunnel_warning = skip_tunnel_warning
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "SurveyFetcher":
        return cls(
            settings.api_base_url,
            skip_tunnel_warning=settings.skip_tunnel_warning,
            timeout=settings.request_timeout,
        )

    def url_for(self, survey_id: str) -> str:
        return survey_url(self.base_url, survey_id, skip_tunnel_warning=self.skip_tunnel_warning)

    def fetch(self, survey_id: Optional[str]) -> FetchResult:
        """Fetch ``survey_id`` once, substituting the default survey on failure."""

        if survey_id is None or not str(survey_id).strip():
            return default_result()

        survey_id = str(survey_id).strip()
        url = self.url_for(survey_id)
        logger.info("Fetching survey %s from %s", survey_id, url)

        try:
            payload = fetch_survey_payload(url, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error("Error fetching survey %s: %s", survey_id, exc)
            return default_result(survey_id, LOAD_FAILED_MESSAGE)
        except ValueError as exc:
            logger.error("Survey %s response is not valid JSON: %s", survey_id, exc)
            return default_result(survey_id, LOAD_FAILED_MESSAGE)

        try:
            survey = parse_survey(payload)
        except InvalidSurveyPayload as exc:
            logger.warning("Invalid survey data structure for %s: %s Using default data.", survey_id, exc)
            return default_result(survey_id, INVALID_STRUCTURE_MESSAGE)

        logger.info("Loaded survey %s with %d question(s)", survey_id, len(survey.questions))
        return FetchResult(survey=survey, survey_id=survey_id)


class SurveyLoader:
    """Adopt fetch results so that the most recent request always wins.

    Every request receives a ticket from :meth:`begin`. :meth:`complete` only
    adopts a result whose ticket is still the newest; anything older is dropped.
    """

    def __init__(self, fetcher: SurveyFetcher) -> None:
        self.fetcher = fetcher
        self._latest_ticket = 0
        self._pending: Dict[int, Optional[str]] = {}
        self.active: FetchResult = default_result()

    @property
    def latest_ticket(self) -> int:
        return self._latest_ticket

    @property
    def loading(self) -> bool:
        return self._latest_ticket in self._pending

    def begin(self, survey_id: Optional[str]) -> int:
        """Register a new request for ``survey_id`` and return its ticket."""

        self._latest_ticket += 1
        self._pending[self._latest_ticket] = survey_id
        return self._latest_ticket

    def complete(self, ticket: int, result: FetchResult) -> bool:
        """Adopt ``result`` if ``ticket`` is current; return whether it was adopted."""

        survey_id = self._pending.pop(ticket, None)
        if ticket != self._latest_ticket:
            logger.debug(
                "Discarding response for superseded survey request %s (ticket %d, latest %d)",
                survey_id,
                ticket,
                self._latest_ticket,
            )
            return False
        self.active = result
        return True

    def load(self, survey_id: Optional[str]) -> FetchResult:
        """Fetch ``survey_id`` and adopt it unless a newer request superseded it."""

        ticket = self.begin(survey_id)
        result = self.fetcher.fetch(survey_id)
        self.complete(ticket, result)
        return self.active


__all__ = [
    "FetchResult",
    "INVALID_STRUCTURE_MESSAGE",
    "LOAD_FAILED_MESSAGE",
    "SurveyFetcher",
    "SurveyLoader",
    "default_result",
    "fetch_survey_payload",
    "survey_url",
]
