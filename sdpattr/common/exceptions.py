"""커스텀 예외 클래스

SDP 속성 파서의 모든 커스텀 예외 정의
"""

from typing import Optional


class SDPAttrError(Exception):
    """Base exception for all sdpattr errors"""
    pass


# Configuration Exceptions
class ConfigurationError(SDPAttrError):
    """설정 관련 에러"""
    pass


# Parsing Exceptions
class SDPParsingError(SDPAttrError):
    """SDP 파싱 실패

    Attributes:
        message: 짧은 진단 메시지
        offending_text: 문제가 된 원본 텍스트
        line_number: SDP 문서 내 라인 번호 (문서 파서가 채움)
    """

    def __init__(
        self,
        message: str,
        offending_text: str = "",
        line_number: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.offending_text = offending_text
        self.line_number = line_number

    def __str__(self) -> str:
        text = self.message
        if self.offending_text:
            text = f"{text}: {self.offending_text!r}"
        if self.line_number is not None:
            text = f"line {self.line_number}: {text}"
        return text


class NetworkParseError(SDPParsingError):
    """네트워크 타입 / 주소 타입 / 주소 파싱 실패"""
    pass


class SDPAttributeError(SDPParsingError):
    """a= 속성 파싱 에러"""
    pass


class MalformedAttributeError(SDPAttributeError):
    """문법 위반 (속성을 표현할 수 없음)"""
    pass


class UnsupportedAttributeError(SDPAttributeError):
    """지원하지 않는 키워드 / 확장

    관대한(lenient) 호출자는 해당 속성만 건너뛰고 계속할 수 있다.
    """
    pass
