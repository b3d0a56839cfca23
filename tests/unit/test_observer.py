"""Unit tests for diagnostic observers."""

import logging

from scraper.observer import RecordingObserver, log_observer, notify


class TestNotify:
    """Tests for notify."""

    def test_delivers_event(self):
        observer = RecordingObserver()
        notify(observer, "strategy_started", strategy="domCards")
        assert observer.events == [("strategy_started", {"strategy": "domCards"})]
        assert observer.names() == ["strategy_started"]

    def test_failing_observer_is_contained(self, caplog):
        def broken(event, details):
            raise ValueError("observer bug")

        with caplog.at_level(logging.ERROR, logger="scraper"):
            notify(broken, "record_rejected", missing=["id"])

        assert "event='observer_failed'" in caplog.text
        assert "failed_event='record_rejected'" in caplog.text

    def test_defaults_to_log_observer(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="scraper"):
            notify(None, "dom_cards", cards=3)

        assert caplog.records[0].getMessage() == "event='dom_cards' cards=3"
        assert caplog.records[0].levelno == logging.DEBUG

    def test_log_observer_quiet_above_debug(self, caplog):
        with caplog.at_level(logging.INFO, logger="scraper"):
            log_observer("free_text_scan", {"count": 0})
        assert caplog.records == []
