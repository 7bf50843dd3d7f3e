"""Shared visual identity for the Survey Bull pages, in light and dark variants."""

from __future__ import annotations

from html import escape as html_escape
from typing import Dict, Optional

import streamlit as st

from surveybull.branding import APP_NAME, DARK_THEME, LIGHT_THEME


_PALETTES: Dict[str, Dict[str, str]] = {
    LIGHT_THEME: {
        "background": "#FFFFFF",
        "surface": "rgba(255, 255, 255, 0.95)",
        "text": "#111827",
        "muted": "#15803D",
        "option_text": "#374151",
        "border": "#86EFAC",
        "shadow": "0 16px 36px rgba(15, 23, 42, 0.08)",
    },
    DARK_THEME: {
        "background": "#0B1410",
        "surface": "rgba(17, 24, 20, 0.95)",
        "text": "#F3F4F6",
        "muted": "#86EFAC",
        "option_text": "#D1D5DB",
        "border": "#166534",
        "shadow": "0 16px 36px rgba(0, 0, 0, 0.45)",
    },
}

_THEME_CSS = """
<style>
:root {{
    --app-accent: #16A34A;
    --app-accent-dark: #15803D;
    --app-background: {background};
    --app-surface: {surface};
    --app-text: {text};
    --app-muted: {muted};
    --app-option-text: {option_text};
    --app-border: {border};
    --app-shadow: {shadow};
}}

@keyframes app-fade-in {{
    from {{ opacity: 0; transform: translateY(20px); }}
    to {{ opacity: 1; transform: translateY(0); }}
}}

html, body, [data-testid="stAppViewContainer"] {{
    background: var(--app-background);
    color: var(--app-text);
    font-family: "Inter", "Segoe UI", system-ui, -apple-system, sans-serif;
}}

[data-testid="stHeader"] {{
    background: var(--app-surface);
    border-bottom: 1px solid var(--app-border);
}}

.block-container {{
    max-width: 48rem;
    padding-top: 2rem;
    padding-bottom: 4rem;
}}

.app-nav {{
    display: flex;
    align-items: center;
    justify-content: space-between;
    padding: 0.75rem 0;
    border-bottom: 1px solid var(--app-border);
    margin-bottom: 1.5rem;
}}

.app-nav__brand {{
    font-weight: 700;
    color: var(--app-accent);
    text-decoration: none;
}}

.app-header {{
    padding: 1.5rem 1.75rem;
    background: var(--app-surface);
    border: 1px solid var(--app-border);
    border-radius: 1rem;
    box-shadow: var(--app-shadow);
    margin-bottom: 1.5rem;
    animation: app-fade-in 0.5s ease-out;
}}

.app-header__title {{
    margin: 0;
    font-size: 2rem;
    font-weight: 700;
    color: var(--app-accent);
}}

.app-header__subtitle {{
    margin: 0.35rem 0 0 0;
    color: var(--app-muted);
}}

.app-card {{
    background: var(--app-surface);
    border: 1px solid var(--app-border);
    border-radius: 1rem;
    box-shadow: var(--app-shadow);
    padding: 1.25rem 1.5rem;
    margin-bottom: 1rem;
    animation: app-fade-in 0.5s ease-out;
}}

.app-card__title {{
    margin: 0 0 0.5rem 0;
    font-size: 1.2rem;
    font-weight: 700;
    color: var(--app-accent);
}}

.app-card p {{
    margin: 0;
    color: var(--app-option-text);
}}

[data-testid="stWidgetLabel"] p {{
    color: var(--app-muted);
    font-weight: 600;
}}

[role="radiogroup"] label p {{
    color: var(--app-option-text);
}}

.stButton>button,
button[kind="primary"] {{
    border-radius: 0.5rem !important;
    font-weight: 600 !important;
}}

button[kind="primary"] {{
    background: var(--app-accent) !important;
    border-color: var(--app-accent) !important;
    color: #fff !important;
}}

button[kind="primary"]:hover {{
    background: var(--app-accent-dark) !important;
}}

.app-confirmation {{
    text-align: center;
}}

.app-confirmation__icon {{
    font-size: 3.5rem;
    color: var(--app-accent);
}}

.app-confirmation__brand {{
    font-size: 1.1rem;
    font-weight: 600;
    margin-bottom: 0.5rem;
}}
</style>
"""


def theme_css(theme: str = LIGHT_THEME) -> str:
    """Return the ``<style>`` block for ``theme`` (unknown themes fall back to light)."""

    palette = _PALETTES.get(theme, _PALETTES[LIGHT_THEME])
    return _THEME_CSS.format(**palette)


def apply_app_theme(
    page_title: str,
    page_icon: Optional[str] = None,
    *,
    theme: str = LIGHT_THEME,
) -> None:
    """Set up consistent page configuration and inject the themed CSS."""

    st.set_page_config(
        page_title=f"{page_title} · {APP_NAME}" if page_title != APP_NAME else APP_NAME,
        page_icon=page_icon,
        layout="centered",
    )
    st.markdown(theme_css(theme), unsafe_allow_html=True)


def page_header(title: str, subtitle: Optional[str] = None) -> None:
    """Render a card-style header with a title and optional subtitle."""

    subtitle_markup = (
        f"<p class='app-header__subtitle'>{html_escape(subtitle)}</p>" if subtitle else ""
    )
    st.markdown(
        f"""
        <div class="app-header">
            <h1 class="app-header__title">{html_escape(title)}</h1>
            {subtitle_markup}
        </div>
        """,
        unsafe_allow_html=True,
    )


def render_card(content: str, title: Optional[str] = None, *, icon: Optional[str] = None) -> None:
    """Render a short text ``content`` inside a themed surface."""

    icon_markup = f"{icon} " if icon else ""
    heading = (
        f"<h3 class='app-card__title'>{icon_markup}{html_escape(title)}</h3>" if title else ""
    )
    st.markdown(
        f"<div class='app-card'>{heading}<p>{html_escape(content)}</p></div>",
        unsafe_allow_html=True,
    )


def nav_brand() -> None:
    """Render the brand link shown at the top of every page."""

    st.markdown(
        f"<div class='app-nav'><a class='app-nav__brand' href='/' target='_self'>{APP_NAME}</a></div>",
        unsafe_allow_html=True,
    )
