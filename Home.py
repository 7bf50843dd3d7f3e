"""Streamlit landing page introducing Survey Bull."""

from __future__ import annotations

import streamlit as st

from surveybull.branding import (
    APP_NAME,
    GET_STARTED_LABEL,
    WELCOME_HEADING,
    WELCOME_TEXT,
    feature_list,
)
from surveybull.config import configure_logging, load_settings
from surveybull.survey_session import REQUESTED_SURVEY_STATE_KEY
from surveybull.ui_theme import apply_app_theme, page_header, render_card

SURVEY_PAGE = "pages/01_Survey.py"
FEATURE_COLUMNS = 3


def _switch_to_survey(survey_id: str) -> None:
    """Navigate to the survey page, remembering ``survey_id`` if one was entered."""

    cleaned = survey_id.strip()
    if cleaned:
        st.session_state[REQUESTED_SURVEY_STATE_KEY] = cleaned
    else:
        st.session_state.pop(REQUESTED_SURVEY_STATE_KEY, None)
    if hasattr(st, "switch_page"):
        try:
            st.switch_page(SURVEY_PAGE)
        except Exception:  # pragma: no cover - streamlit navigation fallback
            st.info("Use the navigation menu to open the Survey page.")
    else:
        st.info("Use the navigation menu to open the Survey page.")


def main() -> None:
    """Render the landing page."""

    configure_logging(load_settings().log_level)
    apply_app_theme(APP_NAME, page_icon="🐂")
    page_header(WELCOME_HEADING, WELCOME_TEXT)

    features = feature_list()
    for start in range(0, len(features), FEATURE_COLUMNS):
        columns = st.columns(FEATURE_COLUMNS)
        for column, (icon, title, description) in zip(columns, features[start:start + FEATURE_COLUMNS]):
            with column:
                render_card(description, title, icon=icon)

    st.markdown("---")
    survey_id = st.text_input(
        "Survey ID",
        key="home_survey_id",
        placeholder="Leave blank to try the sample survey",
    )
    if st.button(GET_STARTED_LABEL, type="primary"):
        _switch_to_survey(survey_id)

    st.page_link(SURVEY_PAGE, label="Open the survey", icon="🗒️")


if __name__ == "__main__":
    main()
