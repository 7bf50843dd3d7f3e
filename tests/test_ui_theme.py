"""Tests for the themed CSS helpers."""

from __future__ import annotations

import importlib


def test_theme_css_switches_palette():
    ui_theme = importlib.import_module("surveybull.ui_theme")

    light = ui_theme.theme_css("light")
    dark = ui_theme.theme_css("dark")

    assert "--app-background: #FFFFFF;" in light
    assert "--app-background: #0B1410;" in dark
    assert light.strip().startswith("<style>")


def test_unknown_theme_falls_back_to_light():
    ui_theme = importlib.import_module("surveybull.ui_theme")

    assert ui_theme.theme_css("sepia") == ui_theme.theme_css("light")


def test_render_card_escapes_content(monkeypatch):
    ui_theme = importlib.import_module("surveybull.ui_theme")
    rendered = []
    monkeypatch.setattr(ui_theme.st, "markdown", lambda body, **kwargs: rendered.append(body))

    ui_theme.render_card("Safe & sound", "Secure & Private", icon="🔒")

    assert rendered == [
        "<div class='app-card'><h3 class='app-card__title'>🔒 Secure &amp; Private</h3>"
        "<p>Safe &amp; sound</p></div>"
    ]
