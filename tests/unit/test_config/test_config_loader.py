"""설정 로더 단위 테스트"""

import pytest
from pathlib import Path
from pydantic import ValidationError

from sdpattr.common.exceptions import ConfigurationError
from sdpattr.config.config_loader import ConfigLoader, load_config
from sdpattr.config.models import Config, ParseMode, LogLevel, LogFormat, LoggingConfig


class TestConfigLoader:
    """ConfigLoader 테스트"""

    def test_load_valid_config(self, temp_config_file):
        """정상 설정 파일 로드 테스트"""
        loader = ConfigLoader(temp_config_file)
        config = loader.load()

        assert isinstance(config, Config)
        assert config.parser.mode == ParseMode.STRICT
        assert config.parser.max_warnings == 10
        assert config.logging.level == LogLevel.DEBUG
        assert config.logging.format == LogFormat.TEXT

    def test_load_empty_config_uses_defaults(self, empty_config_file):
        """빈 설정 파일은 기본값 사용"""
        config = load_config(empty_config_file)

        assert config.parser.mode == ParseMode.LENIENT
        assert config.parser.max_warnings == 100
        assert config.logging.output == "stdout"

    def test_load_nonexistent_file(self):
        """존재하지 않는 파일 로드 시 에러 테스트"""
        loader = ConfigLoader("/nonexistent/config.yaml")

        with pytest.raises(FileNotFoundError) as exc_info:
            loader.load()

        assert "설정 파일을 찾을 수 없습니다" in str(exc_info.value)

    def test_load_invalid_config(self, invalid_config_file):
        """잘못된 설정 검증 테스트"""
        loader = ConfigLoader(invalid_config_file)

        with pytest.raises(ValidationError):
            loader.load()

    def test_load_non_mapping_config(self, tmp_path):
        """최상위가 리스트인 YAML"""
        path = tmp_path / "config.yaml"
        path.write_text("- parser\n- logging\n", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            ConfigLoader(str(path)).load()

    def test_env_override_mode(self, temp_config_file, monkeypatch):
        """환경 변수로 파서 모드 오버라이드"""
        monkeypatch.setenv("SDPATTR_PARSER_MODE", "lenient")

        config = ConfigLoader(temp_config_file).load()

        assert config.parser.mode == ParseMode.LENIENT

    def test_env_override_multi_word_key(self, temp_config_file, monkeypatch):
        """밑줄이 포함된 키 오버라이드 (정수 변환)"""
        monkeypatch.setenv("SDPATTR_PARSER_MAX_WARNINGS", "3")

        config = ConfigLoader(temp_config_file).load()

        assert config.parser.max_warnings == 3

    def test_env_config_path(self, temp_config_file, monkeypatch):
        """SDPATTR_CONFIG_PATH 로 기본 경로 지정"""
        monkeypatch.setenv("SDPATTR_CONFIG_PATH", temp_config_file)

        loader = ConfigLoader()

        assert loader.config_path == temp_config_file
        assert loader.load().parser.mode == ParseMode.STRICT

    def test_default_config_path(self):
        """기본 경로는 프로젝트 루트/config/config.yaml"""
        loader = ConfigLoader()

        assert Path(loader.config_path).parts[-2:] == ("config", "config.yaml")

    def test_env_unknown_section_ignored(self, temp_config_file, monkeypatch):
        """Config 에 없는 섹션의 환경 변수는 무시"""
        monkeypatch.setenv("SDPATTR_SIP_LISTEN_PORT", "5060")
        monkeypatch.setenv("SDPATTR_DEBUG", "true")

        config = ConfigLoader(temp_config_file).load()

        assert config.parser.mode == ParseMode.STRICT
        assert not hasattr(config, "sip")


class TestConvertEnvValue:
    """환경 변수 값 변환"""

    @pytest.mark.parametrize("raw,expected", [
        ("true", True),
        ("No", False),
        ("42", 42),
        ("0.5", 0.5),
        ("strict", "strict"),
    ])
    def test_convert(self, raw, expected):
        assert ConfigLoader._convert_env_value(raw) == expected


class TestLoggingConfig:
    """LoggingConfig 검증"""

    def test_invalid_output(self):
        with pytest.raises(ValidationError):
            LoggingConfig(output="syslog")

    def test_file_output(self):
        config = LoggingConfig(output="file", file_path="logs/test.log")
        assert config.output == "file"
