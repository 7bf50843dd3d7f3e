"""Copy and defaults shared between the landing page and the survey page."""

from __future__ import annotations

from typing import List, Tuple

APP_NAME = "Survey Bull"
APP_TAGLINE = "Your go-to survey tool for the USF community."
WELCOME_HEADING = f"Welcome to {APP_NAME}!"
WELCOME_TEXT = (
    "Your go-to platform for creating, sharing, and analyzing surveys with ease."
)
GET_STARTED_LABEL = "Get Started"

LIGHT_THEME = "light"
DARK_THEME = "dark"
DEFAULT_THEME = LIGHT_THEME

NAME_LABEL = "Name"
EMAIL_LABEL = "Email"
CLEAR_RESPONSES_LABEL = "Clear Responses"
SUBMIT_LABEL = "Submit Survey"
CLOSE_LABEL = "Close"
LOADING_MESSAGE = "Loading survey data..."

FEATURES: Tuple[Tuple[str, str, str], ...] = (
    (
        "✅",
        "Easy to Use",
        "Create and distribute surveys in minutes with our intuitive interface.",
    ),
    (
        "📈",
        "Real-Time Analytics",
        "Get instant feedback and analyze responses to improve your offerings.",
    ),
    (
        "⚙️",
        "Customizable",
        "Tailor your surveys with various question types and design options to fit your needs.",
    ),
    (
        "🌐",
        "Accessible Anywhere",
        "Reach participants on any device, ensuring higher response rates.",
    ),
    (
        "🔒",
        "Secure & Private",
        "Your data is safe with us. We prioritize user privacy and data security.",
    ),
)


def feature_list() -> List[Tuple[str, str, str]]:
    """Return a mutable list of the landing page feature cards."""

    return list(FEATURES)
