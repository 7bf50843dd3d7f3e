"""Tests for the submission state machine and sinks."""

from __future__ import annotations

import importlib

import pytest
import requests


class RecordingSink:
    def __init__(self):
        self.sent = []

    def send(self, survey, form_data):
        self.sent.append((survey, form_data))


def _modules():
    submission = importlib.import_module("surveybull.submission")
    form_state = importlib.import_module("surveybull.form_state")
    models = importlib.import_module("surveybull.survey_models")
    return submission, form_state, models


def test_confirmation_title_falls_back_to_participant():
    submission, _, _ = _modules()

    assert submission.confirmation_title("Ada") == "Thank You, Ada!"
    assert submission.confirmation_title("  ") == "Thank You, Participant!"
    assert submission.confirmation_title(None) == "Thank You, Participant!"


def test_submit_freezes_form_and_enters_submitted():
    """A complete form is handed to the sink and the flow flips to submitted."""

    submission, form_state, models = _modules()
    sink = RecordingSink()
    flow = submission.SubmissionFlow(sink)
    form = form_state.FormData(name="Ada", email="ada@example.org")
    form.set_question_answer(1, "Functional")

    frozen = flow.submit(models.DEFAULT_SURVEY, form)
    form.set_question_answer(1, "Hybrid")

    assert flow.state is submission.SubmissionState.SUBMITTED
    assert flow.is_submitted is True
    assert frozen.answer_for(1) == "Functional"
    assert sink.sent == [(models.DEFAULT_SURVEY, frozen)]


def test_submit_requires_name_and_email():
    submission, form_state, models = _modules()
    exceptions = importlib.import_module("surveybull.exceptions")
    sink = RecordingSink()
    flow = submission.SubmissionFlow(sink)

    with pytest.raises(exceptions.MissingRequiredFields) as excinfo:
        flow.submit(models.DEFAULT_SURVEY, form_state.FormData(name="Ada"))

    assert excinfo.value.labels == ("Email",)
    assert flow.state is submission.SubmissionState.EDITING
    assert sink.sent == []


def test_submit_rejects_email_without_at_sign():
    submission, form_state, models = _modules()
    exceptions = importlib.import_module("surveybull.exceptions")
    sink = RecordingSink()
    flow = submission.SubmissionFlow(sink)

    with pytest.raises(exceptions.InvalidEmailAddress):
        flow.submit(models.DEFAULT_SURVEY, form_state.FormData(name="Ada", email="ada.example.org"))

    assert flow.state is submission.SubmissionState.EDITING
    assert sink.sent == []


def test_second_submit_is_a_no_op():
    submission, form_state, models = _modules()
    sink = RecordingSink()
    flow = submission.SubmissionFlow(sink)
    form = form_state.FormData(name="Ada", email="ada@example.org")

    first = flow.submit(models.DEFAULT_SURVEY, form)
    second = flow.submit(models.DEFAULT_SURVEY, form)

    assert first is second
    assert len(sink.sent) == 1


def test_close_returns_to_editing():
    submission, form_state, models = _modules()
    flow = submission.SubmissionFlow(RecordingSink())
    flow.submit(models.DEFAULT_SURVEY, form_state.FormData(name="Ada", email="ada@example.org"))

    flow.close()

    assert flow.state is submission.SubmissionState.EDITING
    assert flow.submitted is None


def test_default_sink_only_logs(caplog):
    submission, form_state, models = _modules()
    flow = submission.SubmissionFlow()

    with caplog.at_level("INFO", logger="surveybull.submission"):
        flow.submit(models.DEFAULT_SURVEY, form_state.FormData(name="Ada", email="ada@example.org"))

    assert isinstance(flow.sink, submission.LoggingSubmissionSink)
    assert "Survey 0 submitted" in caplog.text


def test_http_sink_posts_flat_form_data(monkeypatch):
    """The HTTP sink sends the flat form view alongside the survey identifier."""

    submission, form_state, models = _modules()
    captured = {}

    class DummyResponse:
        status_code = 201

        def raise_for_status(self):
            return None

    def fake_post(url, headers=None, json=None, timeout=None):
        captured.update({"url": url, "headers": headers, "json": json, "timeout": timeout})
        return DummyResponse()

    monkeypatch.setattr(submission.requests, "post", fake_post)
    form = form_state.FormData(name="Ada", email="ada@example.org")
    form.set_question_answer(2, "Rarely")

    submission.HttpSubmissionSink("https://responses.example/api", timeout=2).send(models.DEFAULT_SURVEY, form)

    assert captured["url"] == "https://responses.example/api"
    assert captured["timeout"] == 2
    assert captured["headers"]["Content-Type"] == "application/json"
    body = captured["json"]
    assert body["surveyId"] == 0
    assert body["responses"] == {"name": "Ada", "email": "ada@example.org", "question_2": "Rarely"}
    assert body["id"]
    assert body["submittedAt"]


def test_http_sink_failure_raises_submission_error(monkeypatch):
    submission, form_state, models = _modules()
    exceptions = importlib.import_module("surveybull.exceptions")

    def fake_post(url, headers=None, json=None, timeout=None):
        raise requests.ConnectionError("refused")

    monkeypatch.setattr(submission.requests, "post", fake_post)
    flow = submission.SubmissionFlow(submission.HttpSubmissionSink("https://responses.example/api"))

    with pytest.raises(exceptions.SubmissionError):
        flow.submit(models.DEFAULT_SURVEY, form_state.FormData(name="Ada", email="ada@example.org"))

    assert flow.state is submission.SubmissionState.EDITING


def test_sink_from_settings_picks_http_sink_when_configured():
    submission, _, _ = _modules()
    config = importlib.import_module("surveybull.config")

    http_sink = submission.sink_from_settings(
        config.Settings(submission_url="https://responses.example/api", request_timeout=6.0)
    )
    log_sink = submission.sink_from_settings(config.Settings())

    assert isinstance(http_sink, submission.HttpSubmissionSink)
    assert http_sink.timeout == 6.0
    assert isinstance(log_sink, submission.LoggingSubmissionSink)
