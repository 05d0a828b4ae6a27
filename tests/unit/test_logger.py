import logging

import pytest

from app.logging.logger import Log, _ContextFormatter


class TestLog:
    def test_info_emits_through_rfp_logger(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="rfp"):
            Log.info("Run started", documents=2)

        (record,) = caplog.records
        assert record.name == "rfp"
        assert record.getMessage() == "Run started"
        assert record.context == {"documents": 2}

    def test_exception_attaches_traceback(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.ERROR, logger="rfp"):
            try:
                raise RuntimeError("boom")
            except RuntimeError:
                Log.exception("Run failed")

        (record,) = caplog.records
        assert record.exc_info is not None


class TestContextFormatter:
    def _record(self, context: dict[str, object]) -> logging.LogRecord:
        record = logging.LogRecord("rfp", logging.INFO, __file__, 1, "OCR done", None, None)
        record.context = context
        return record

    def test_appends_context_pairs(self) -> None:
        line = _ContextFormatter("%(message)s").format(
            self._record({"document": "a.pdf", "pages": 3})
        )
        assert line == "OCR done | document=a.pdf pages=3"

    def test_plain_message_without_context(self) -> None:
        assert _ContextFormatter("%(message)s").format(self._record({})) == "OCR done"
