"""In-memory respondent form data."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from surveybull.branding import EMAIL_LABEL, NAME_LABEL
from surveybull.survey_models import QUESTION_FIELD_PREFIX

NAME_FIELD = "name"
EMAIL_FIELD = "email"
FIXED_FIELDS = (NAME_FIELD, EMAIL_FIELD)
FIELD_LABELS = {NAME_FIELD: NAME_LABEL, EMAIL_FIELD: EMAIL_LABEL}


def field_name(question_id: int) -> str:
    """Return the ``question_<id>`` key for ``question_id``."""

    return f"{QUESTION_FIELD_PREFIX}{question_id}"


def parse_field_name(name: str) -> Optional[int]:
    """Return the question identifier encoded in ``name``, if any."""

    if not name.startswith(QUESTION_FIELD_PREFIX):
        return None
    suffix = name[len(QUESTION_FIELD_PREFIX):]
    if not suffix.lstrip("-").isdigit():
        return None
    return int(suffix)


@dataclass
class FormData:
    """The respondent's identifying fields and per-question answers.

    ``answers`` only holds questions the respondent has touched: a key appears
    once an option is selected, and stays (with ``None``) after a clear.
    """

    name: str = ""
    email: str = ""
    answers: Dict[int, Optional[str]] = field(default_factory=dict)

    def set_field(self, name: str, value: str) -> None:
        """Overwrite one of the fixed fields."""

        if name not in FIXED_FIELDS:
            raise KeyError(f"Unknown form field: {name}")
        setattr(self, name, "" if value is None else str(value))

    def set_question_answer(self, question_id: int, option_text: Optional[str]) -> None:
        self.answers[question_id] = option_text

    def answer_for(self, question_id: int) -> Optional[str]:
        return self.answers.get(question_id)

    def clear_responses(self, question_ids: Iterable[int]) -> None:
        """Set every listed question's answer to ``None``, keeping name and email."""

        for question_id in question_ids:
            self.answers[question_id] = None

    def reset(self) -> None:
        """Restore the initial two-field state."""

        self.name = ""
        self.email = ""
        self.answers = {}

    def snapshot(self) -> "FormData":
        return FormData(name=self.name, email=self.email, answers=dict(self.answers))

    def as_dict(self) -> Dict[str, Optional[str]]:
        """Return the flat ``{"name", "email", "question_<id>"}`` view."""

        flat: Dict[str, Optional[str]] = {NAME_FIELD: self.name, EMAIL_FIELD: self.email}
        for question_id, value in self.answers.items():
            flat[field_name(question_id)] = value
        return flat

    def missing_required(self) -> List[str]:
        """Return labels of required fields that are blank."""

        return [
            FIELD_LABELS[key]
            for key in FIXED_FIELDS
            if not getattr(self, key).strip()
        ]

    @property
    def has_valid_email(self) -> bool:
        """Return ``True`` when ``email`` has text on both sides of an ``@``."""

        local, at, domain = self.email.strip().rpartition("@")
        return bool(at and local and domain)


__all__ = [
    "EMAIL_FIELD",
    "FIXED_FIELDS",
    "FormData",
    "NAME_FIELD",
    "field_name",
    "parse_field_name",
]
