"""설정 로더 모듈

YAML 설정 파일을 읽어 Config 로 검증한다.
SDPATTR_<SECTION>_<KEY> 환경 변수가 파일 값보다 우선한다.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from sdpattr.common.exceptions import ConfigurationError
from sdpattr.common.logger import get_logger
from .models import Config

logger = get_logger(__name__)

ENV_PREFIX = "SDPATTR_"
CONFIG_PATH_ENV = "SDPATTR_CONFIG_PATH"

# 프로젝트 루트/config/config.yaml
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "config.yaml"


class ConfigLoader:
    """설정 로더

    경로 우선순위: 인자 > SDPATTR_CONFIG_PATH > DEFAULT_CONFIG_PATH
    """

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or os.getenv(CONFIG_PATH_ENV) or str(DEFAULT_CONFIG_PATH)

    def load(self) -> Config:
        """설정 파일 로드 및 검증

        Returns:
            Config: 검증된 설정 객체

        Raises:
            FileNotFoundError: 설정 파일이 없는 경우
            ConfigurationError: 최상위 YAML 구조가 매핑이 아닌 경우
            ValidationError: 파서/로깅 설정 값이 허용 범위를 벗어난 경우
            yaml.YAMLError: YAML 문법 오류
        """
        raw_config = self._read_yaml()
        sections = self._apply_env_overrides(raw_config)

        try:
            config = Config(**sections)
        except ValidationError as e:
            logger.error("config_validation_failed",
                         path=self.config_path,
                         fields=[".".join(str(loc) for loc in err["loc"]) for err in e.errors()])
            raise

        logger.debug("config_loaded",
                     path=self.config_path,
                     mode=config.parser.mode.value,
                     max_warnings=config.parser.max_warnings)
        return config

    def _read_yaml(self) -> Dict[str, Any]:
        if not Path(self.config_path).exists():
            raise FileNotFoundError(
                f"설정 파일을 찾을 수 없습니다: {self.config_path}\n"
                f"config/config.example.yaml을 복사하여 config/config.yaml을 생성하세요."
            )

        with open(self.config_path, 'r', encoding='utf-8') as f:
            raw_config = yaml.safe_load(f)

        # 빈 파일은 기본값
        if raw_config is None:
            return {}
        if not isinstance(raw_config, dict):
            raise ConfigurationError(f"설정 파일 최상위는 매핑이어야 합니다: {self.config_path}")
        return raw_config

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """환경 변수로 설정 오버라이드

        예: SDPATTR_PARSER_MAX_WARNINGS=3 → config["parser"]["max_warnings"] = 3
        Config 에 없는 섹션(parser, logging 외)은 무시
        """
        for env_key, env_value in os.environ.items():
            if not env_key.startswith(ENV_PREFIX) or env_key == CONFIG_PATH_ENV:
                continue

            section, _, key = env_key[len(ENV_PREFIX):].lower().partition('_')
            if not key or section not in Config.model_fields:
                continue

            section_config = config.setdefault(section, {})
            if isinstance(section_config, dict):
                section_config[key] = self._convert_env_value(env_value)

        return config

    @staticmethod
    def _convert_env_value(value: str) -> Any:
        """환경 변수 문자열을 bool / int / float / str 로 변환"""
        if value.lower() in ('true', 'yes'):
            return True
        if value.lower() in ('false', 'no'):
            return False

        for cast in (int, float):
            try:
                return cast(value)
            except ValueError:
                pass

        return value


def load_config(config_path: Optional[str] = None) -> Config:
    """설정 파일 로드 편의 함수"""
    return ConfigLoader(config_path).load()
