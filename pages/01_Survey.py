"""Streamlit page that renders a survey fetched from the survey API."""

from __future__ import annotations

from html import escape as html_escape
from typing import Optional

import streamlit as st

from surveybull.branding import (
    APP_NAME,
    APP_TAGLINE,
    CLEAR_RESPONSES_LABEL,
    CLOSE_LABEL,
    DARK_THEME,
    EMAIL_LABEL,
    LOADING_MESSAGE,
    NAME_LABEL,
    SUBMIT_LABEL,
)
from surveybull.config import configure_logging, load_settings
from surveybull.form_state import EMAIL_FIELD, NAME_FIELD
from surveybull.submission import confirmation_title, sink_from_settings
from surveybull.survey_client import SurveyFetcher
from surveybull.survey_session import (
    REQUESTED_SURVEY_STATE_KEY,
    SURVEY_ID_QUERY_PARAM,
    SurveySession,
    question_views,
    widget_key,
)
from surveybull.ui_theme import apply_app_theme, nav_brand, page_header

PAGE_ICON = "🐂"


def _get_query_param(name: str) -> Optional[str]:
    """Return the first query parameter value if present."""

    params = st.query_params
    values = params.get(name)
    if not values:
        return None
    if isinstance(values, list):
        return next((str(value) for value in values if value is not None), None)
    return str(values)


def _set_query_param(name: str, value: str) -> None:
    """Persist ``value`` in the query string under ``name``."""

    params = st.query_params
    params[name] = value


def requested_survey_id() -> Optional[str]:
    """Return the survey identifier from the URL, falling back to the home page choice."""

    survey_id = _get_query_param(SURVEY_ID_QUERY_PARAM)
    if survey_id:
        return survey_id.strip() or None

    chosen = st.session_state.get(REQUESTED_SURVEY_STATE_KEY)
    if isinstance(chosen, str) and chosen.strip():
        _set_query_param(SURVEY_ID_QUERY_PARAM, chosen.strip())
        return chosen.strip()
    return None


def render_navigation(session: SurveySession) -> None:
    """Render the brand link and the light/dark theme toggle."""

    brand_col, toggle_col = st.columns([6, 1])
    with brand_col:
        nav_brand()
    with toggle_col:
        st.button(
            "☀️" if session.theme == DARK_THEME else "🌙",
            key="survey_theme_toggle",
            help="Toggle theme",
            on_click=session.toggle_theme,
        )


def render_survey_form(session: SurveySession) -> None:
    """Render the respondent form for the active survey."""

    survey = session.survey
    form_data = session.form_data
    frozen = session.is_submitted

    page_header(survey.title, survey.description or None)

    st.text_input(
        f"👤 {NAME_LABEL} *",
        value=form_data.name,
        key=widget_key(NAME_FIELD),
        on_change=session.update_field,
        args=(NAME_FIELD,),
        disabled=frozen,
    )
    st.text_input(
        f"✉️ {EMAIL_LABEL} *",
        value=form_data.email,
        key=widget_key(EMAIL_FIELD),
        on_change=session.update_field,
        args=(EMAIL_FIELD,),
        disabled=frozen,
    )

    for view in question_views(survey, form_data):
        if not view.options:
            st.warning(f"Question '{view.label or view.field_name}' has no options configured.")
            continue
        st.radio(
            view.label or view.field_name,
            view.options,
            index=view.index,
            key=widget_key(view.field_name),
            on_change=session.select_option,
            args=(view.question_id,),
            disabled=frozen,
        )

    if session.submit_error:
        st.error(session.submit_error)

    clear_col, submit_col = st.columns(2)
    with clear_col:
        st.button(
            f"🗑️ {CLEAR_RESPONSES_LABEL}",
            key="survey_clear_responses",
            on_click=session.clear_responses,
            disabled=frozen,
        )
    with submit_col:
        st.button(
            SUBMIT_LABEL,
            key="survey_submit",
            type="primary",
            on_click=session.submit,
            disabled=frozen,
            width="stretch",
        )


def show_confirmation(session: SurveySession) -> None:
    """Open the thank-you dialog for the submitted response."""

    submitted = session.flow().submitted
    name = submitted.name if submitted is not None else ""

    @st.dialog(confirmation_title(name), on_dismiss=session.close)
    def _confirmation() -> None:
        st.markdown(
            f"""
            <div class="app-confirmation">
                <div class="app-confirmation__icon">✔</div>
                <p class="app-confirmation__brand">{html_escape(APP_NAME)}</p>
                <p>{html_escape(APP_TAGLINE)}</p>
            </div>
            """,
            unsafe_allow_html=True,
        )
        if st.button(CLOSE_LABEL, key="survey_close_confirmation", type="primary", width="stretch"):
            session.close()
            st.rerun()

    _confirmation()


def main() -> None:
    """Render the survey page."""

    settings = load_settings()
    configure_logging(settings.log_level)

    session = SurveySession(st.session_state)
    apply_app_theme("Survey", page_icon=PAGE_ICON, theme=session.theme)
    render_navigation(session)

    fetcher = SurveyFetcher.from_settings(settings)
    with st.spinner(LOADING_MESSAGE):
        result = session.ensure_survey(requested_survey_id(), fetcher)
    session.flow(sink_from_settings(settings))

    if result.error:
        st.error(result.error)

    render_survey_form(session)

    if session.is_submitted:
        show_confirmation(session)


if __name__ == "__main__":
    main()
