"""Tests for the Sentry event filters and the capture helper."""

import logging
import sys

from quill.core.errors import ForbiddenError
from quill.integrations.sentry import (
    _filter_events,
    _filter_transactions,
    capture_exception,
    init_sentry,
)


def _exc_info(error):
    try:
        raise error
    except Exception:
        return sys.exc_info()


class TestFilterEvents:
    def test_drops_expected_failures(self):
        hint = {"exc_info": _exc_info(ForbiddenError())}

        assert _filter_events({"level": "error"}, hint) is None

    def test_keeps_unexpected_errors(self):
        event = {"level": "error"}
        hint = {"exc_info": _exc_info(RuntimeError("boom"))}

        assert _filter_events(event, hint) is event

    def test_scrubs_credentials(self):
        event = {
            "request": {
                "headers": {"Authorization": "Bearer abc", "Cookie": "s=1", "Accept": "*/*"},
                "data": {"email": "a@x.com", "password": "secret1"},
            },
        }

        filtered = _filter_events(event, {})

        assert filtered["request"]["headers"] == {
            "Authorization": "[Filtered]",
            "Cookie": "[Filtered]",
            "Accept": "*/*",
        }
        assert filtered["request"]["data"] == {"email": "a@x.com", "password": "[Filtered]"}


class TestFilterTransactions:
    def test_drops_health_checks(self):
        assert _filter_transactions({"transaction": "/health"}, {}) is None
        assert _filter_transactions({"transaction": "health_check"}, {}) is None

    def test_keeps_other_transactions(self):
        event = {"transaction": "list_posts"}

        assert _filter_transactions(event, {}) is event


class TestCapture:
    def test_disabled_without_dsn(self, settings):
        assert init_sentry(settings) is False

    def test_capture_logs_when_disabled(self, caplog):
        with caplog.at_level(logging.ERROR, logger="quill.integrations.sentry"):
            event_id = capture_exception(RuntimeError("boom"), path="/boom")

        assert event_id is None
        assert "Unhandled error" in caplog.text
