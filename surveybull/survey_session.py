"""Bind survey loading, form data and submission state to a session mapping.

The survey page passes ``st.session_state`` in; tests pass a plain ``dict``.
Widget callbacks call the methods here and the page re-renders from the
resulting state on the next run.
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from dataclasses import dataclass
from typing import Any, List, Optional

from surveybull.branding import DARK_THEME, DEFAULT_THEME, LIGHT_THEME
from surveybull.exceptions import InvalidEmailAddress, MissingRequiredFields, SubmissionError
from surveybull.form_state import FIXED_FIELDS, FormData, field_name
from surveybull.submission import SubmissionFlow, SubmissionSink
from surveybull.survey_client import FetchResult, SurveyFetcher, SurveyLoader, default_result
from surveybull.survey_models import Survey

logger = logging.getLogger(__name__)

LOADER_STATE_KEY = "survey_loader"
LOADED_ID_STATE_KEY = "survey_loaded_id"
FORM_DATA_STATE_KEY = "survey_form_data"
FLOW_STATE_KEY = "survey_submission_flow"
SUBMIT_ERROR_STATE_KEY = "survey_submit_error"
THEME_STATE_KEY = "survey_theme"
WIDGET_KEY_PREFIX = "survey_widget_"
REQUESTED_SURVEY_STATE_KEY = "survey_requested_id"
SURVEY_ID_QUERY_PARAM = "id"

INVALID_EMAIL_MESSAGE = "Please enter a valid email address."

_NOT_LOADED = object()


def widget_key(field: str) -> str:
    """Return the Streamlit widget key bound to form ``field``."""

    return f"{WIDGET_KEY_PREFIX}{field}"


@dataclass(frozen=True)
class QuestionView:
    """Everything the renderer needs to draw one radio group."""

    question_id: int
    field_name: str
    label: str
    options: List[str]
    index: Optional[int]


def question_views(survey: Survey, form_data: FormData) -> List[QuestionView]:
    """Return one view per question, in survey order."""

    views: List[QuestionView] = []
    for question in survey.questions:
        options = question.option_texts
        answer = form_data.answer_for(question.question_id)
        index = options.index(answer) if answer in options else None
        views.append(
            QuestionView(
                question_id=question.question_id,
                field_name=question.field_name,
                label=question.text,
                options=options,
                index=index,
            )
        )
    return views


class SurveySession:
    """Survey page state stored inside a mutable session mapping."""

    def __init__(self, state: MutableMapping) -> None:
        self.state = state

    # Survey loading -----------------------------------------------------

    def loader(self, fetcher: Optional[SurveyFetcher] = None) -> Optional[SurveyLoader]:
        loader = self.state.get(LOADER_STATE_KEY)
        if loader is None and fetcher is not None:
            loader = SurveyLoader(fetcher)
            self.state[LOADER_STATE_KEY] = loader
        elif loader is not None and fetcher is not None:
            loader.fetcher = fetcher
        return loader

    def ensure_survey(self, survey_id: Optional[str], fetcher: SurveyFetcher) -> FetchResult:
        """Load ``survey_id`` once per identifier change and reset the form on change."""

        loader = self.loader(fetcher)
        if self.state.get(LOADED_ID_STATE_KEY, _NOT_LOADED) == survey_id:
            return loader.active

        logger.info("Survey identifier changed to %r; resetting the form", survey_id)
        self._drop_widgets(self._question_fields())
        result = loader.load(survey_id)
        self.state[LOADED_ID_STATE_KEY] = survey_id
        self._reset_form()
        self.flow().close()
        return result

    @property
    def result(self) -> FetchResult:
        loader = self.loader()
        return loader.active if loader is not None else default_result()

    @property
    def survey(self) -> Survey:
        return self.result.survey

    # Form data ----------------------------------------------------------

    @property
    def form_data(self) -> FormData:
        form_data = self.state.get(FORM_DATA_STATE_KEY)
        if not isinstance(form_data, FormData):
            form_data = FormData()
            self.state[FORM_DATA_STATE_KEY] = form_data
        return form_data

    def _widget_value(self, field: str) -> Any:
        return self.state.get(widget_key(field))

    def _drop_widgets(self, fields: List[str]) -> None:
        for field in fields:
            self.state.pop(widget_key(field), None)

    def _question_fields(self) -> List[str]:
        return [question.field_name for question in self.survey.questions]

    def _reset_form(self) -> None:
        self.form_data.reset()
        self._drop_widgets([*FIXED_FIELDS, *self._question_fields()])
        self.state.pop(SUBMIT_ERROR_STATE_KEY, None)

    def update_field(self, name: str, value: Optional[str] = None) -> None:
        """Copy a name/email widget value (or ``value``) into the form data."""

        if value is None:
            value = self._widget_value(name) or ""
        self.form_data.set_field(name, value)

    def select_option(self, question_id: int, option_text: Optional[str] = None) -> None:
        """Record the option chosen for ``question_id``."""

        if option_text is None:
            option_text = self._widget_value(field_name(question_id))
        self.form_data.set_question_answer(question_id, option_text)

    def clear_responses(self) -> None:
        """Clear every question answer, keeping name and email."""

        self.form_data.clear_responses(self.survey.question_ids)
        self._drop_widgets(self._question_fields())

    # Submission ---------------------------------------------------------

    def flow(self, sink: Optional[SubmissionSink] = None) -> SubmissionFlow:
        flow = self.state.get(FLOW_STATE_KEY)
        if not isinstance(flow, SubmissionFlow):
            flow = SubmissionFlow(sink)
            self.state[FLOW_STATE_KEY] = flow
        elif sink is not None:
            flow.sink = sink
        return flow

    @property
    def is_submitted(self) -> bool:
        return self.flow().is_submitted

    @property
    def submit_error(self) -> Optional[str]:
        return self.state.get(SUBMIT_ERROR_STATE_KEY)

    def submit(self) -> bool:
        """Submit the current form; store a message and return ``False`` on failure."""

        self.state.pop(SUBMIT_ERROR_STATE_KEY, None)
        try:
            self.flow().submit(self.survey, self.form_data)
        except MissingRequiredFields as exc:
            self.state[SUBMIT_ERROR_STATE_KEY] = (
                f"Please fill in the required fields: {', '.join(exc.labels)}."
            )
            return False
        except InvalidEmailAddress:
            self.state[SUBMIT_ERROR_STATE_KEY] = INVALID_EMAIL_MESSAGE
            return False
        except SubmissionError as exc:
            self.state[SUBMIT_ERROR_STATE_KEY] = str(exc)
            return False
        return True

    def close(self) -> None:
        """Dismiss the confirmation and restore the initial form."""

        self.flow().close()
        self._reset_form()

    # Theme --------------------------------------------------------------

    @property
    def theme(self) -> str:
        return self.state.get(THEME_STATE_KEY, DEFAULT_THEME)

    def toggle_theme(self) -> str:
        theme = LIGHT_THEME if self.theme == DARK_THEME else DARK_THEME
        self.state[THEME_STATE_KEY] = theme
        return theme


__all__ = [
    "REQUESTED_SURVEY_STATE_KEY",
    "SURVEY_ID_QUERY_PARAM",
    "QuestionView",
    "SurveySession",
    "question_views",
    "widget_key",
]
