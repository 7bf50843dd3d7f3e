"""Exception types raised by the survey helpers."""

from __future__ import annotations

from typing import Iterable, Tuple


class SurveyBullError(Exception):
    """Base class for errors raised by the ``surveybull`` package."""


class InvalidSurveyPayload(SurveyBullError, ValueError):
    """The survey endpoint returned a body that is not a usable survey."""


class MissingRequiredFields(SurveyBullError):
    """A submission was attempted without the required identifying fields."""

    def __init__(self, labels: Iterable[str]) -> None:
        self.labels: Tuple[str, ...] = tuple(labels)
        super().__init__(f"Missing required fields: {', '.join(self.labels)}")


class InvalidEmailAddress(SurveyBullError):
    """The email field does not look like an address."""


class SubmissionError(SurveyBullError):
    """The configured submission sink could not deliver a response."""


__all__ = [
    "InvalidEmailAddress",
    "InvalidSurveyPayload",
    "MissingRequiredFields",
    "SubmissionError",
    "SurveyBullError",
]
