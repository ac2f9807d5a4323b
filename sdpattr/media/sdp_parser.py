"""SDP Parser

Session Description Protocol 파싱
a= 라인은 attribute_parser 로 전달하여 타입이 지정된 Attribute 로 변환한다.
"""

from typing import List, Optional

from sdpattr.common.exceptions import (
    NetworkParseError,
    SDPAttributeError,
    SDPParsingError,
    UnsupportedAttributeError,
)
from sdpattr.common.logger import get_logger
from sdpattr.config.models import ParseMode, ParserConfig
from sdpattr.media.attribute_models import Attribute
from sdpattr.media.attribute_parser import (
    CANDIDATE_MIN_TOKENS,
    parse_attribute_line,
    split_attribute_line,
)
from sdpattr.media.attribute_types import AttributeKind
from sdpattr.media.network import parse_addr_type, parse_net_type
from sdpattr.media.sdp_models import MediaDescription, SDPSession

logger = get_logger(__name__)


class SDPParser:
    """SDP 파서

    RFC 4566 기반 SDP 파싱
    """

    @staticmethod
    def parse(sdp: str, config: Optional[ParserConfig] = None) -> SDPSession:
        """SDP 문자열 파싱

        Args:
            sdp: SDP 문자열
            config: 파서 설정 (None 이면 기본값, lenient)

        Returns:
            SDPSession 객체

        Raises:
            SDPParsingError: 파싱 실패 (속성 에러는 line_number 가 채워진 하위 클래스)
        """
        if not sdp or not sdp.strip():
            raise SDPParsingError("Empty SDP string")

        config = config or ParserConfig()
        session = SDPSession(raw_sdp=sdp)
        current_media: Optional[MediaDescription] = None

        for line_number, raw_line in enumerate(sdp.splitlines(), start=1):
            line = raw_line.strip()
            if not line or '=' not in line:
                continue

            field_type, field_value = line.split('=', 1)

            if field_type == 'v':
                session.version = field_value

            elif field_type == 'o':
                session.origin = field_value

            elif field_type == 's':
                session.session_name = field_value

            elif field_type == 'c':
                address = SDPParser._parse_connection_line(field_value, line_number)
                if current_media:
                    current_media.connection_address = address
                else:
                    session.connection_address = address

            elif field_type == 't':
                session.timing = field_value

            elif field_type == 'm':
                current_media = SDPParser._parse_media_line(field_value, line_number)
                session.media_descriptions.append(current_media)

            elif field_type == 'a':
                attribute = SDPParser._parse_attribute(field_value, line_number, session, config)
                if attribute is None:
                    continue
                if current_media:
                    current_media.attributes.append(attribute)
                else:
                    session.attributes.append(attribute)

        logger.debug("sdp_parsed",
                     media_count=len(session.media_descriptions),
                     session_attributes=len(session.attributes),
                     warnings=len(session.warnings))

        return session

    @staticmethod
    def _parse_attribute(
        value: str,
        line_number: int,
        session: SDPSession,
        config: ParserConfig,
    ) -> Optional[Attribute]:
        """속성 라인 파싱

        lenient 모드에서는 UnsupportedAttributeError 를 session.warnings 에 기록한다.
        알 수 없는 candidate 확장은 해당 (이름, 값) 쌍만 빼고 다시 파싱하고,
        그 외 알 수 없는 속성은 None 반환

        Raises:
            SDPAttributeError: malformed 속성, 또는 strict 모드의 unsupported 속성
        """
        try:
            return parse_attribute_line(value)
        except SDPAttributeError as e:
            e.line_number = line_number
            if config.mode != ParseMode.LENIENT or not isinstance(e, UnsupportedAttributeError):
                logger.debug("sdp_attribute_rejected",
                             line_number=line_number,
                             offending_text=e.offending_text,
                             error=e.message)
                raise

            if len(session.warnings) < config.max_warnings:
                session.warnings.append(e)
            logger.warning("sdp_attribute_skipped",
                           line_number=line_number,
                           offending_text=e.offending_text,
                           error=e.message)

            remaining = SDPParser._without_candidate_extension(value, e.offending_text)
            if remaining is None:
                return None
            return SDPParser._parse_attribute(remaining, line_number, session, config)

    @staticmethod
    def _without_candidate_extension(value: str, name: str) -> Optional[str]:
        """candidate 라인에서 name 확장 쌍을 제거한 라인 반환

        candidate 가 아니거나 해당 확장이 없으면 None
        """
        keyword, payload = split_attribute_line(value)
        if keyword.lower() != AttributeKind.CANDIDATE.value:
            return None

        tokens = payload.split()
        # 필수 8 토큰 뒤의 확장 쌍만 검사
        for index in range(CANDIDATE_MIN_TOKENS, len(tokens) - 1, 2):
            if tokens[index] == name:
                del tokens[index:index + 2]
                return f"{keyword}:{' '.join(tokens)}"
        return None

    @staticmethod
    def _parse_connection_line(value: str, line_number: int) -> str:
        """Connection 라인 파싱

        예: IN IP4 192.168.1.100 (멀티캐스트는 224.2.1.1/127 형태 그대로 보관)

        Returns:
            주소 문자열
        """
        parts = value.split()
        if len(parts) != 3:
            raise SDPParsingError("Invalid connection line", value, line_number)
        try:
            parse_net_type(parts[0])
            parse_addr_type(parts[1])
        except NetworkParseError as e:
            raise SDPParsingError(e.message, e.offending_text, line_number) from e
        return parts[2]

    @staticmethod
    def _parse_media_line(value: str, line_number: int) -> MediaDescription:
        """미디어 라인 파싱

        예: audio 5004 RTP/AVP 0 8 101

        Raises:
            SDPParsingError: 파싱 실패
        """
        parts = value.split()
        if len(parts) < 4:
            raise SDPParsingError("Invalid media line", value, line_number)

        media_type = parts[0]

        # <port>/<number of ports> 형식은 포트만 사용
        port_token = parts[1].split('/', 1)[0]
        if not (port_token.isascii() and port_token.isdigit()):
            raise SDPParsingError("Invalid port in media line", parts[1], line_number)
        port_digits = port_token.lstrip('0') or '0'
        if len(port_digits) > 5 or int(port_digits) > 65535:
            raise SDPParsingError("Invalid port in media line", parts[1], line_number)

        formats: List[str] = parts[3:]

        return MediaDescription(
            media_type=media_type,
            port=int(port_digits),
            protocol=parts[2],
            formats=formats,
        )
