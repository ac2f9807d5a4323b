"""로깅 설정 단위 테스트"""

import json

import pytest

from sdpattr.common.logger import (
    get_logger,
    log_with_context,
    reorder_keys,
    setup_logging,
    setup_logging_from_config,
)
from sdpattr.config.models import LogFormat, LogLevel, LoggingConfig


@pytest.fixture
def restore_logging():
    yield
    setup_logging(level="INFO", format_type="text")


class TestReorderKeys:
    """키 재정렬 프로세서"""

    def test_priority_keys_first(self):
        event_dict = {
            "zeta": 1,
            "offending_text": "x",
            "event": "sdp_attribute_skipped",
            "alpha": 2,
            "timestamp": "t",
            "level": "warning",
        }

        ordered = reorder_keys(None, "warning", event_dict)

        assert list(ordered) == ["timestamp", "level", "event", "offending_text", "alpha", "zeta"]


class TestSetupLogging:
    """structlog 설정"""

    def test_json_file_output(self, tmp_path, restore_logging):
        log_file = tmp_path / "logs" / "sdpattr.log"
        config = LoggingConfig(
            level=LogLevel.DEBUG,
            format=LogFormat.JSON,
            output="file",
            file_path=str(log_file),
        )

        setup_logging_from_config(config)
        get_logger("test").info("sdp_parsed", media_count=2, note="한글")

        record = json.loads(log_file.read_text(encoding="utf-8").strip().splitlines()[-1])
        assert record["event"] == "sdp_parsed"
        assert record["level"] == "info"
        assert record["media_count"] == 2
        assert record["note"] == "한글"
        assert list(record)[:3] == ["timestamp", "level", "event"]

    def test_level_filtering(self, tmp_path, restore_logging):
        log_file = tmp_path / "app.log"
        setup_logging(level="WARNING", format_type="json", output="file", file_path=str(log_file))

        logger = log_with_context(session_id="abc")
        logger.info("ignored")
        logger.warning("kept")

        lines = log_file.read_text(encoding="utf-8").strip().splitlines()
        assert len(lines) == 1
        record = json.loads(lines[0])
        assert record["event"] == "kept"
        assert record["session_id"] == "abc"
