"""구조화된 로깅 설정

structlog을 사용한 JSON 구조화 로깅
"""

import sys
import json
import structlog
from typing import Any, Dict, IO, Optional
from pathlib import Path

from sdpattr.config.models import LogLevel, LogFormat, LoggingConfig

_LEVELS = {
    "DEBUG": 10,
    "INFO": 20,
    "WARNING": 30,
    "ERROR": 40,
    "CRITICAL": 50,
}

# 앞에 배치할 필드
_PRIORITY_KEYS = [
    "timestamp",
    "level",
    "event",
    "line_number",
    "kind",
    "keyword",
    "offending_text",
    "media_type",
]


def reorder_keys(logger: Any, method_name: str, event_dict: Dict) -> Dict:
    """로그 키 순서를 가독성 좋게 재정렬하는 프로세서

    우선순위 키를 먼저, 나머지는 알파벳 순
    """
    ordered = {key: event_dict[key] for key in _PRIORITY_KEYS if key in event_dict}
    for key in sorted(k for k in event_dict if k not in ordered):
        ordered[key] = event_dict[key]
    return ordered


def _json_serializer(event_dict: Dict, **kwargs: Any) -> str:
    # 비ASCII 문자를 이스케이프하지 않고 그대로 출력
    return json.dumps(event_dict, ensure_ascii=False, default=str)


def setup_logging(
    level: str = "INFO",
    format_type: str = "json",
    output: str = "stdout",
    file_path: Optional[str] = None,
) -> None:
    """로깅 설정 초기화

    Args:
        level: 로그 레벨 (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: 로그 포맷 (json, text)
        output: 로그 출력 (stdout, file)
        file_path: output=file 일 때 로그 파일 경로 (기본: logs/sdpattr.log)
    """
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        reorder_keys,
    ]

    if format_type == LogFormat.JSON.value:
        processors.append(structlog.processors.JSONRenderer(serializer=_json_serializer))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    log_stream: IO[str]
    if output == "file":
        log_file_path = Path(file_path or "logs/sdpattr.log")
        log_file_path.parent.mkdir(parents=True, exist_ok=True)
        # 라인 버퍼링
        log_stream = open(log_file_path, "a", encoding="utf-8", buffering=1)
    else:
        log_stream = sys.stdout

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(_log_level_to_int(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=log_stream),
        cache_logger_on_first_use=False,
    )


def setup_logging_from_config(config: LoggingConfig) -> None:
    """LoggingConfig 모델로 로깅 설정"""
    level = config.level.value if isinstance(config.level, LogLevel) else config.level
    format_type = config.format.value if isinstance(config.format, LogFormat) else config.format
    setup_logging(level=level, format_type=format_type, output=config.output, file_path=config.file_path)


def _log_level_to_int(level: str) -> int:
    """로그 레벨 문자열을 정수로 변환"""
    return _LEVELS.get(level.upper(), 20)  # 기본값: INFO


def get_logger(name: str) -> structlog.BoundLogger:
    """로거 인스턴스 반환

    Args:
        name: 로거 이름 (일반적으로 __name__)

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("sdp_parsed", media_count=2)
    """
    return structlog.get_logger(name)


def log_with_context(**context: Any) -> structlog.BoundLogger:
    """컨텍스트가 바인딩된 로거 반환

    Example:
        >>> logger = log_with_context(session_id="abc-123")
        >>> logger.warning("sdp_attribute_skipped", keyword="x-foo")
    """
    return structlog.get_logger().bind(**context)
