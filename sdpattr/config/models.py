"""설정 모델 정의

Pydantic을 사용한 타입 안전 설정 검증 모델
"""

from typing import Optional
from enum import Enum
from pydantic import BaseModel, Field, field_validator


class ParseMode(str, Enum):
    """속성 에러 처리 정책"""
    STRICT = "strict"      # 모든 속성 에러를 그대로 raise
    LENIENT = "lenient"    # Unsupported 속성은 경고로 기록하고 계속


class LogLevel(str, Enum):
    """로그 레벨"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """로그 포맷"""
    JSON = "json"
    TEXT = "text"


class ParserConfig(BaseModel):
    """SDP 파서 설정"""
    mode: ParseMode = Field(default=ParseMode.LENIENT, description="속성 에러 처리 정책 (strict, lenient)")
    max_warnings: int = Field(default=100, ge=0, le=10000, description="세션당 보관할 최대 경고 수")


class LoggingConfig(BaseModel):
    """로깅 설정"""
    level: LogLevel = Field(default=LogLevel.INFO, description="로그 레벨")
    format: LogFormat = Field(default=LogFormat.JSON, description="로그 포맷")
    output: str = Field(default="stdout", description="로그 출력 (stdout, file)")
    file_path: Optional[str] = Field(default=None, description="로그 파일 경로 (output=file)")

    @field_validator('output')
    @classmethod
    def validate_output(cls, v: str) -> str:
        """output 값 검증"""
        if v not in ("stdout", "file"):
            raise ValueError(f"output must be 'stdout' or 'file' (got {v!r})")
        return v


class Config(BaseModel):
    """전체 설정 모델"""
    parser: ParserConfig = Field(default_factory=ParserConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"validate_assignment": True}
