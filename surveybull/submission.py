"""Submission state machine and the sinks that receive completed responses."""

from __future__ import annotations

import enum
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Protocol

import requests

from surveybull.config import DEFAULT_REQUEST_TIMEOUT, Settings
from surveybull.exceptions import InvalidEmailAddress, MissingRequiredFields, SubmissionError
from surveybull.form_state import FormData
from surveybull.survey_models import Survey

logger = logging.getLogger(__name__)

PARTICIPANT_FALLBACK = "Participant"


class SubmissionState(str, enum.Enum):
    EDITING = "editing"
    SUBMITTED = "submitted"


def confirmation_title(name: Optional[str]) -> str:
    """Return the heading of the thank-you dialog."""

    display_name = (name or "").strip() or PARTICIPANT_FALLBACK
    return f"Thank You, {display_name}!"


def build_submission_payload(survey: Survey, form_data: FormData) -> Dict[str, Any]:
    """Return the JSON document describing one completed response."""

    return {
        "id": uuid.uuid4().hex,
        "surveyId": survey.survey_id,
        "submittedAt": datetime.now(timezone.utc).isoformat(),
        "responses": form_data.as_dict(),
    }


class SubmissionSink(Protocol):
    """Receives a frozen copy of the form data when a survey is submitted."""

    def send(self, survey: Survey, form_data: FormData) -> None:
        ...


class LoggingSubmissionSink:
    """Record submissions in the application log without any network write."""

    def send(self, survey: Survey, form_data: FormData) -> None:
        logger.info("Survey %s submitted: %s", survey.survey_id, form_data.as_dict())


@dataclass
class HttpSubmissionSink:
    """POST submissions as JSON to a configured endpoint."""

    url: str
    timeout: float = DEFAULT_REQUEST_TIMEOUT

    def _headers(self) -> Dict[str, str]:
        return {"Accept": "application/json", "Content-Type": "application/json"}

    def send(self, survey: Survey, form_data: FormData) -> None:
        payload = build_submission_payload(survey, form_data)
        try:
            response = requests.post(
                self.url,
                headers=self._headers(),
                json=payload,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.error("Failed to deliver submission %s to %s: %s", payload["id"], self.url, exc)
            raise SubmissionError(f"Failed to store survey response: {exc}") from exc
        logger.info("Submission %s delivered to %s", payload["id"], self.url)


def sink_from_settings(settings: Settings) -> SubmissionSink:
    """Return the HTTP sink when a submission URL is configured, else the logging sink."""

    if settings.submission_url:
        return HttpSubmissionSink(url=settings.submission_url, timeout=settings.request_timeout)
    return LoggingSubmissionSink()


class SubmissionFlow:
    """``editing -> submitted -> editing`` lifecycle of one respondent form."""

    def __init__(self, sink: Optional[SubmissionSink] = None) -> None:
        self.sink: SubmissionSink = sink if sink is not None else LoggingSubmissionSink()
        self.state = SubmissionState.EDITING
        self.submitted: Optional[FormData] = None

    @property
    def is_submitted(self) -> bool:
        return self.state is SubmissionState.SUBMITTED

    def submit(self, survey: Survey, form_data: FormData) -> FormData:
        """Freeze ``form_data``, hand it to the sink and enter ``SUBMITTED``.

        Raises :class:`MissingRequiredFields` when name or email is blank,
        :class:`InvalidEmailAddress` when the email has no ``@`` and
        lets :class:`SubmissionError` from the sink propagate; in each case the
        flow stays in ``EDITING``.
        """

        if self.is_submitted and self.submitted is not None:
            return self.submitted

        missing = form_data.missing_required()
        if missing:
            raise MissingRequiredFields(missing)
        if not form_data.has_valid_email:
            raise InvalidEmailAddress(f"Invalid email address: {form_data.email.strip()}")

        frozen = form_data.snapshot()
        self.sink.send(survey, frozen)
        self.submitted = frozen
        self.state = SubmissionState.SUBMITTED
        return frozen

    def close(self) -> None:
        """Return to ``EDITING``; the caller resets the form data."""

        self.state = SubmissionState.EDITING
        self.submitted = None

    reset = close


__all__ = [
    "HttpSubmissionSink",
    "LoggingSubmissionSink",
    "PARTICIPANT_FALLBACK",
    "SubmissionFlow",
    "SubmissionSink",
    "SubmissionState",
    "build_submission_payload",
    "confirmation_title",
    "sink_from_settings",
]
