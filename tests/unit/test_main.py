"""Main Entry Point 단위 테스트"""

import json

import pytest
import yaml

from sdpattr.common.logger import setup_logging
from sdpattr.main import main

SAMPLE_SDP = """v=0
o=- 4611731400430051336 2 IN IP4 127.0.0.1
s=-
t=0 0
a=group:BUNDLE 0
a=X-nat:0
m=audio 9 UDP/TLS/RTP/SAVPF 111
c=IN IP4 0.0.0.0
a=mid:0
a=rtpmap:111 opus/48000/2
a=candidate:1 1 udp 2113937151 192.168.1.4 50000 typ host generation 0 network-cost 999
"""


@pytest.fixture
def restore_logging():
    yield
    setup_logging(level="INFO", format_type="text")


@pytest.fixture
def sdp_file(tmp_path):
    path = tmp_path / "offer.sdp"
    path.write_text(SAMPLE_SDP, encoding="utf-8")
    return str(path)


def _write_config(tmp_path, mode: str) -> tuple:
    log_file = tmp_path / "logs" / "sdpattr.log"
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.dump({
        "parser": {"mode": mode, "max_warnings": 10},
        "logging": {
            "level": "DEBUG",
            "format": "json",
            "output": "file",
            "file_path": str(log_file),
        },
    }), encoding="utf-8")
    return str(config_path), log_file


def _events(log_file) -> list:
    return [json.loads(line)["event"] for line in log_file.read_text(encoding="utf-8").splitlines()]


class TestMain:
    """설정 → 파서 정책 / 로깅 적용"""

    def test_lenient_config(self, tmp_path, sdp_file, capsys, restore_logging):
        """lenient 설정: 알 수 없는 속성은 경고, candidate 는 확장만 제외하고 유지"""
        config_path, log_file = _write_config(tmp_path, "lenient")

        assert main([sdp_file, "--config", config_path]) == 0

        out = capsys.readouterr().out.splitlines()
        assert "session: Group" in out
        assert "m=audio 9 UDP/TLS/RTP/SAVPF: Mid, Rtpmap, Candidate" in out
        assert [line for line in out if line.startswith("warning:")] == [
            "warning: line 6: unsupported attribute value: 'X-nat'",
            "warning: line 11: Unknown candidate extension name: 'generation'",
            "warning: line 11: Unknown candidate extension name: 'network-cost'",
        ]

        # 로깅 설정이 파일 출력으로 적용됨
        events = _events(log_file)
        assert events.count("sdp_attribute_skipped") == 3
        assert events[-1] == "sdp_parsed"

    def test_strict_config(self, tmp_path, sdp_file, capsys, restore_logging):
        """strict 설정: 첫 번째 unsupported 속성에서 실패"""
        config_path, log_file = _write_config(tmp_path, "strict")

        assert main([sdp_file, "--config", config_path]) == 2

        assert "line 6" in capsys.readouterr().err
        assert "sdp_parse_failed" in _events(log_file)

    def test_cli_mode_override(self, tmp_path, sdp_file, capsys, restore_logging):
        """--mode 가 설정 파일보다 우선"""
        config_path, _ = _write_config(tmp_path, "strict")

        assert main([sdp_file, "--config", config_path, "--mode", "lenient"]) == 0
        assert "session: Group" in capsys.readouterr().out.splitlines()

    def test_env_mode_override(self, tmp_path, sdp_file, monkeypatch, restore_logging):
        """SDPATTR_PARSER_MODE 환경 변수 오버라이드"""
        config_path, _ = _write_config(tmp_path, "lenient")
        monkeypatch.setenv("SDPATTR_PARSER_MODE", "strict")

        assert main([sdp_file, "--config", config_path]) == 2

    def test_missing_config(self, tmp_path, sdp_file, capsys):
        assert main([sdp_file, "--config", str(tmp_path / "missing.yaml")]) == 1
        assert "설정 로드 실패" in capsys.readouterr().err

    def test_invalid_config(self, sdp_file, invalid_config_file, capsys):
        assert main([sdp_file, "--config", invalid_config_file]) == 1

    def test_missing_sdp_file(self, tmp_path, restore_logging):
        config_path, log_file = _write_config(tmp_path, "lenient")

        assert main([str(tmp_path / "missing.sdp"), "--config", config_path]) == 2
        assert "sdp_read_failed" in _events(log_file)
