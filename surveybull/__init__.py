"""Library helpers for the Survey Bull survey-taking application."""

from .form_state import FormData  # noqa: F401
from .submission import SubmissionFlow, confirmation_title  # noqa: F401
from .survey_client import FetchResult, SurveyFetcher, SurveyLoader  # noqa: F401
from .survey_models import DEFAULT_SURVEY, Option, Question, Survey, parse_survey  # noqa: F401
