from __future__ import annotations

import logging

import pytest

from manifestor.trace import Span, traced

logger = logging.getLogger("manifestor.tests")


def test_traced_logs_start_and_end(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="manifestor.tests"):
        with traced(logger, "Extract module data") as span:
            span.extra["actions"] = 3

    messages = [record.getMessage() for record in caplog.records]
    assert messages[0] == "Start: Extract module data"
    assert messages[1].startswith("End: Extract module data")
    assert span.ended_at is not None
    assert span.duration_ms >= 0.0
    assert span.as_dict()["extra"] == {"actions": 3}


def test_traced_closes_span_on_error(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="manifestor.tests"):
        with pytest.raises(RuntimeError):
            with traced(logger, "failing phase") as span:
                raise RuntimeError("boom")

    assert span.ended_at is not None
    assert caplog.records[-1].getMessage().startswith("End: failing phase")


def test_open_span_has_zero_duration() -> None:
    span = Span.start("pending")

    assert span.duration_ms == 0.0
    assert span.as_dict()["time"]["end"] is None
