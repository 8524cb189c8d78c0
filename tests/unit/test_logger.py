import logging

import pytest

from docview.logging.logger import Log


class TestTimed:
    def test_logs_label_and_completion(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="docview"):
            with Log.timed("Converting 3 pages to png"):
                pass

        messages = [record.getMessage() for record in caplog.records]
        assert messages[0] == "Converting 3 pages to png"
        assert messages[1].startswith("Completed in ")

    def test_skips_completion_when_block_raises(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="docview"):
            with pytest.raises(RuntimeError):
                with Log.timed("Searching 3 pages"):
                    raise RuntimeError("boom")

        assert not any("Completed" in record.getMessage() for record in caplog.records)
