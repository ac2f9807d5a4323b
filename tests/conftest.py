"""pytest 설정 파일

공통 fixtures 및 테스트 설정
"""

import os
import pytest
import tempfile
import yaml
from pathlib import Path


def _write_yaml(data) -> str:
    with tempfile.NamedTemporaryFile(
        mode='w',
        suffix='.yaml',
        delete=False,
        encoding='utf-8'
    ) as f:
        yaml.dump(data, f)
        return f.name


@pytest.fixture
def temp_config_file():
    """임시 설정 파일 fixture"""
    config_data = {
        "parser": {
            "mode": "strict",
            "max_warnings": 10,
        },
        "logging": {
            "level": "DEBUG",
            "format": "text",
        },
    }

    temp_path = _write_yaml(config_data)
    yield temp_path

    # 정리
    Path(temp_path).unlink(missing_ok=True)


@pytest.fixture
def invalid_config_file():
    """잘못된 설정 파일 fixture"""
    config_data = {
        "parser": {
            "mode": "forgiving",  # 없는 모드
            "max_warnings": -1,   # 음수
        },
    }

    temp_path = _write_yaml(config_data)
    yield temp_path

    Path(temp_path).unlink(missing_ok=True)


@pytest.fixture
def empty_config_file():
    """빈 설정 파일 fixture (기본값 사용)"""
    with tempfile.NamedTemporaryFile(
        mode='w',
        suffix='.yaml',
        delete=False,
        encoding='utf-8'
    ) as f:
        temp_path = f.name

    yield temp_path

    Path(temp_path).unlink(missing_ok=True)


@pytest.fixture(autouse=True)
def clear_sdpattr_env(monkeypatch):
    """외부 SDPATTR_* 환경 변수가 테스트에 섞이지 않도록 제거"""
    for key in list(os.environ):
        if key.startswith("SDPATTR_"):
            monkeypatch.delenv(key, raising=False)
