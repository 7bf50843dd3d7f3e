"""Survey definitions and helpers for turning API payloads into them."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Set, Tuple

from surveybull.exceptions import InvalidSurveyPayload

logger = logging.getLogger(__name__)

QUESTION_FIELD_PREFIX = "question_"
DEFAULT_QUESTION_TYPE = "radio"
UNTITLED_SURVEY = "Survey"


@dataclass(frozen=True)
class Option:
    """A selectable answer for a single-choice question."""

    option_id: int
    text: str


@dataclass(frozen=True)
class Question:
    """A prompt with a fixed, ordered set of options."""

    question_id: int
    text: str
    options: Tuple[Option, ...] = ()
    type: str = DEFAULT_QUESTION_TYPE

    @property
    def field_name(self) -> str:
        """Return the form field key used to store the answer."""

        return f"{QUESTION_FIELD_PREFIX}{self.question_id}"

    @property
    def option_texts(self) -> List[str]:
        return [option.text for option in self.options]


@dataclass(frozen=True)
class Survey:
    """A named collection of questions presented to a respondent."""

    survey_id: int
    title: str
    description: str
    questions: Tuple[Question, ...] = field(default_factory=tuple)

    @property
    def question_ids(self) -> List[int]:
        return [question.question_id for question in self.questions]


def _coerce_int(value: Any) -> Optional[int]:
    """Return ``value`` as an ``int`` or ``None`` when it is not numeric."""

    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    return None


def _clean_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _parse_options(raw_options: Any) -> Tuple[Option, ...]:
    """Convert option payloads into :class:`Option` entries.

    Both the full ``{"optionId": 1, "text": "..."}`` shape and the simplified
    bare-string shape are accepted. Bare strings receive 1-based identifiers in
    list order.
    """

    if not isinstance(raw_options, list):
        return ()

    options: List[Option] = []
    for position, raw in enumerate(raw_options, start=1):
        if isinstance(raw, str):
            text = raw.strip()
            option_id: Optional[int] = position
        elif isinstance(raw, Mapping):
            text = _clean_text(raw.get("text"))
            option_id = _coerce_int(raw.get("optionId", raw.get("id")))
            if option_id is None:
                option_id = position
        else:
            continue
        if not text:
            continue
        options.append(Option(option_id=option_id, text=text))
    return tuple(options)


def _parse_question(raw: Any) -> Optional[Question]:
    """Return a :class:`Question` for ``raw`` or ``None`` if it is unusable."""

    if not isinstance(raw, Mapping):
        logger.warning("Skipping survey question that is not an object: %r", raw)
        return None

    question_id = _coerce_int(raw.get("questionId", raw.get("id")))
    if question_id is None:
        logger.warning("Skipping survey question without an identifier: %r", raw)
        return None

    text = _clean_text(raw.get("text", raw.get("question")))
    question_type = _clean_text(raw.get("type")) or DEFAULT_QUESTION_TYPE
    return Question(
        question_id=question_id,
        text=text,
        options=_parse_options(raw.get("options")),
        type=question_type,
    )


def parse_survey(payload: Any) -> Survey:
    """Build a :class:`Survey` from a decoded survey API response.

    Raises :class:`InvalidSurveyPayload` when ``payload`` is not an object or
    its ``questions`` field is missing or not a list.
    """

    if not isinstance(payload, Mapping):
        raise InvalidSurveyPayload("Survey payload is not a JSON object.")

    raw_questions = payload.get("questions")
    if not isinstance(raw_questions, list):
        raise InvalidSurveyPayload("Survey payload has no 'questions' list.")

    questions: List[Question] = []
    seen: Set[int] = set()
    for raw in raw_questions:
        question = _parse_question(raw)
        if question is None:
            continue
        if question.question_id in seen:
            logger.warning("Skipping duplicate survey question %s", question.question_id)
            continue
        seen.add(question.question_id)
        questions.append(question)

    survey_id = _coerce_int(payload.get("surveyId"))
    return Survey(
        survey_id=survey_id if survey_id is not None else 0,
        title=_clean_text(payload.get("title")) or UNTITLED_SURVEY,
        description=_clean_text(payload.get("description")),
        questions=tuple(questions),
    )


def _default_question(question_id: int, text: str, options: Tuple[str, ...]) -> Question:
    return Question(
        question_id=question_id,
        text=text,
        options=tuple(
            Option(option_id=index, text=option) for index, option in enumerate(options, start=1)
        ),
    )


# Shown whenever live survey data cannot be retrieved.
DEFAULT_SURVEY = Survey(
    survey_id=0,
    title="Developer Survey",
    description="Fallback data: Explore your programming preferences",
    questions=(
        _default_question(
            1,
            "What is your preferred programming paradigm?",
            ("Object-Oriented", "Functional", "Procedural", "Hybrid"),
        ),
        _default_question(
            2,
            "How often do you contribute to open-source projects?",
            ("Frequently", "Occasionally", "Rarely", "Never"),
        ),
        _default_question(
            3,
            "Which development environment do you prefer?",
            ("IDE", "Text Editor", "Online IDE", "Command Line"),
        ),
    ),
)


__all__ = [
    "DEFAULT_SURVEY",
    "Option",
    "Question",
    "QUESTION_FIELD_PREFIX",
    "Survey",
    "UNTITLED_SURVEY",
    "parse_survey",
]
