"""Unit tests for the notifier and token store collaborators."""

import logging

import pytest

from envelope_client.integration.notifier import LoggingNotifier
from envelope_client.integration.token_store import InMemoryTokenStore


class TestLoggingNotifier:
    def test_levels(self, caplog: pytest.LogCaptureFixture):
        notifier = LoggingNotifier("test.notifications")

        with caplog.at_level(logging.INFO, logger="test.notifications"):
            notifier.success("saved")
            notifier.info("heads up")
            notifier.error("failed(500)")

        assert [(r.levelno, r.getMessage()) for r in caplog.records] == [
            (logging.INFO, "success: saved"),
            (logging.INFO, "info: heads up"),
            (logging.ERROR, "error: failed(500)"),
        ]


class TestInMemoryTokenStore:
    def test_set_get_remove(self):
        store = InMemoryTokenStore()
        store.set("access_token", "abc")

        assert store.get("access_token") == "abc"
        store.remove("access_token")
        assert store.get("access_token") is None

    def test_remove_missing_key_is_noop(self):
        InMemoryTokenStore().remove("nonexistent")  # Should not raise

    def test_initial_values_are_copied(self):
        initial = {"access_token": "abc"}
        store = InMemoryTokenStore(initial)
        store.remove("access_token")

        assert initial == {"access_token": "abc"}
