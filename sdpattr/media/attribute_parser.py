"""SDP 속성 파서

a= 라인 값을 AttributeKind 별 문법으로 파싱하여 Attribute 로 변환
RFC 4566, RFC 8445 (ICE), RFC 5888 (group), RFC 8285 (extmap), RFC 3605 (rtcp) 등

모든 함수는 순수 함수이며 I/O 나 공유 상태가 없다.
"""

import re
from typing import Callable, Dict, Optional, Tuple

from sdpattr.common.exceptions import (
    MalformedAttributeError,
    NetworkParseError,
    UnsupportedAttributeError,
)
from sdpattr.media.attribute_models import (
    Attribute,
    AttributeValue,
    Candidate,
    CandidateTcpType,
    CandidateTransport,
    CandidateType,
    Direction,
    ExtMap,
    Fingerprint,
    Fmtp,
    Group,
    GroupSemantics,
    Msid,
    Rtcp,
    RtcpFb,
    RtpMap,
    SctpMap,
    SetupRole,
    Simulcast,
    SimulcastAlternatives,
    SimulcastId,
    Ssrc,
)
from sdpattr.media.attribute_types import AttributeKind, classify
from sdpattr.media.network import (
    IPAddress,
    parse_addr_type,
    parse_net_type,
    parse_unicast_address,
    parse_unicast_address_unknown_type,
)

U32_MAX = 0xFFFFFFFF
U64_MAX = 0xFFFFFFFFFFFFFFFF
PORT_MAX = 65535

_UINT_RE = re.compile(r"\+?([0-9]+)")

# u64 최대값의 자릿수
_UINT_MAX_DIGITS = 20

_CANDIDATE_TRANSPORTS = {t.value: t for t in CandidateTransport}
_CANDIDATE_TYPES = {t.value: t for t in CandidateType}
_CANDIDATE_TCP_TYPES = {t.value: t for t in CandidateTcpType}
_DIRECTIONS = {d.value: d for d in Direction}
_GROUP_SEMANTICS = {s.value: s for s in GroupSemantics}
_SETUP_ROLES = {r.value: r for r in SetupRole}
_SIMULCAST_DIRECTIONS = {"send": Direction.SENDONLY, "recv": Direction.RECVONLY}

SCTPMAP_PROTOCOL = "webrtc-datachannel"

# <foundation> <component> <transport> <priority> <address> <port> typ <type>
CANDIDATE_MIN_TOKENS = 8


# --- 숫자 / 주소 헬퍼 -------------------------------------------------------

def _parse_uint(token: str, what: str, maximum: int = U32_MAX) -> int:
    """부호 없는 정수 파싱

    Raises:
        MalformedAttributeError: 숫자가 아니거나 maximum 초과
    """
    match = _UINT_RE.fullmatch(token)
    if match is None:
        raise MalformedAttributeError(f"{what} must be an unsigned integer", token)
    digits = match.group(1).lstrip("0") or "0"
    if len(digits) > _UINT_MAX_DIGITS:
        raise MalformedAttributeError(f"{what} is out of range", token)
    number = int(digits)
    if number > maximum:
        raise MalformedAttributeError(f"{what} is out of range", token)
    return number


def _parse_port(token: str, what: str) -> int:
    """u32 로 파싱한 뒤 16비트 범위 확인"""
    port = _parse_uint(token, what)
    if port > PORT_MAX:
        raise MalformedAttributeError(f"{what} can only be a 16bit number", token)
    return port


def _parse_address(token: str) -> IPAddress:
    """주소 패밀리를 추정하여 파싱 (raddr, candidate 주소)"""
    try:
        return parse_unicast_address_unknown_type(token)
    except NetworkParseError as e:
        raise MalformedAttributeError(e.message, e.offending_text) from e


# --- kind 별 파서 --------------------------------------------------------------

def _parse_flag(kind: AttributeKind, value: str) -> None:
    if value:
        raise MalformedAttributeError(
            f"{kind.display} attribute is not allowed to have a value", value
        )
    return None


def _parse_string(kind: AttributeKind, value: str) -> str:
    # msid-semantic, ssrc-group 은 더 이상 권장되지 않아 원문 그대로 보관
    return value


def _parse_ice_options(kind: AttributeKind, value: str) -> Tuple[str, ...]:
    return tuple(value.split())


def _parse_sctp_port(kind: AttributeKind, value: str) -> int:
    return _parse_port(value, "Sctp-Port port")


def _parse_candidate(kind: AttributeKind, value: str) -> Candidate:
    """ICE candidate 파싱

    <foundation> <component> <transport> <priority> <address> <port> typ <type>
    [raddr <addr>] [rport <port>] [tcptype <active|passive|so>]

    Raises:
        MalformedAttributeError: 필수 토큰 누락 / 값 오류
        UnsupportedAttributeError: 알 수 없는 확장 키워드
    """
    tokens = value.split()
    if len(tokens) < CANDIDATE_MIN_TOKENS:
        raise MalformedAttributeError("Candidate needs to have minimum eight tokens", value)

    foundation = tokens[0]
    component = _parse_uint(tokens[1], "Candidate component")

    transport = _CANDIDATE_TRANSPORTS.get(tokens[2].lower())
    if transport is None:
        raise MalformedAttributeError("Unknown candidate transport value", tokens[2])

    priority = _parse_uint(tokens[3], "Candidate priority", U64_MAX)
    address = _parse_address(tokens[4])
    port = _parse_port(tokens[5], "ICE candidate port")

    if tokens[6].lower() != "typ":
        raise MalformedAttributeError("Candidate attribute token must be 'typ'", tokens[6])

    candidate_type = _CANDIDATE_TYPES.get(tokens[7].lower())
    if candidate_type is None:
        raise MalformedAttributeError("Unknown candidate type value", tokens[7])

    remote_address: Optional[IPAddress] = None
    remote_port: Optional[int] = None
    tcp_type: Optional[CandidateTcpType] = None

    # 확장은 (이름, 값) 쌍으로 소비. 짝이 없는 마지막 토큰은 무시
    index = CANDIDATE_MIN_TOKENS
    while len(tokens) > index + 1:
        name, ext_value = tokens[index].lower(), tokens[index + 1]
        if name == "raddr":
            remote_address = _parse_address(ext_value)
        elif name == "rport":
            remote_port = _parse_port(ext_value, "ICE candidate rport")
        elif name == "tcptype":
            tcp_type = _CANDIDATE_TCP_TYPES.get(ext_value.lower())
            if tcp_type is None:
                raise MalformedAttributeError("Unknown tcptype value in candidate line", ext_value)
        else:
            raise UnsupportedAttributeError("Unknown candidate extension name", tokens[index])
        index += 2

    return Candidate(
        foundation=foundation,
        component=component,
        transport=transport,
        priority=priority,
        address=address,
        port=port,
        candidate_type=candidate_type,
        remote_address=remote_address,
        remote_port=remote_port,
        tcp_type=tcp_type,
    )


def _parse_extmap(kind: AttributeKind, value: str) -> ExtMap:
    """<id>[/<direction>] <url>"""
    tokens = value.split()
    if len(tokens) != 2:
        raise MalformedAttributeError("Extmap needs to have two tokens", value)

    direction: Optional[Direction] = None
    if '/' in tokens[0]:
        id_token, direction_token = tokens[0].split('/', 1)
        direction = _DIRECTIONS.get(direction_token.lower())
        if direction is None:
            raise MalformedAttributeError("Unsupported direction in extmap value", direction_token)
    else:
        id_token = tokens[0]

    return ExtMap(
        id=_parse_uint(id_token, "Extmap id"),
        direction=direction,
        url=tokens[1],
    )


def _parse_fingerprint(kind: AttributeKind, value: str) -> Fingerprint:
    tokens = value.split()
    if len(tokens) != 2:
        raise MalformedAttributeError("Fingerprint needs to have two tokens", value)
    return Fingerprint(hash_algorithm=tokens[0], fingerprint=tokens[1])


def _parse_fmtp(kind: AttributeKind, value: str) -> Fmtp:
    """<payload type> <param>[;<param>]...

    파라미터는 해석하지 않고 원본 값을 ';' 로만 분리
    """
    tokens = value.split()
    if len(tokens) != 2:
        raise MalformedAttributeError("Fmtp needs to have two tokens", value)
    return Fmtp(
        payload_type=_parse_uint(tokens[0], "Fmtp payload type"),
        tokens=tuple(value.split(';')),
    )


def _parse_group(kind: AttributeKind, value: str) -> Group:
    tokens = value.split()
    if not tokens:
        raise MalformedAttributeError("Group attribute is missing semantics token", value)

    semantics = _GROUP_SEMANTICS.get(tokens[0].upper())
    if semantics is None:
        raise MalformedAttributeError("Unsupported group semantics", tokens[0])
    return Group(semantics=semantics, tags=tuple(tokens[1:]))


def _parse_msid(kind: AttributeKind, value: str) -> Msid:
    tokens = value.split()
    if not tokens:
        raise MalformedAttributeError("Msid attribute is missing msid-id token", value)
    # 세 번째 이후 토큰은 무시
    appdata = tokens[1] if len(tokens) > 1 else None
    return Msid(id=tokens[0], appdata=appdata)


def _parse_rtcp(kind: AttributeKind, value: str) -> Rtcp:
    """<port> <nettype> <addrtype> <unicast-address>"""
    tokens = value.split()
    if len(tokens) != 4:
        raise MalformedAttributeError("Rtcp needs to have four tokens", value)

    port = _parse_port(tokens[0], "Rtcp port")
    try:
        net_type = parse_net_type(tokens[1])
        addr_type = parse_addr_type(tokens[2])
        unicast_address = parse_unicast_address(addr_type, tokens[3])
    except NetworkParseError as e:
        raise MalformedAttributeError(e.message, e.offending_text) from e

    return Rtcp(
        port=port,
        net_type=net_type,
        addr_type=addr_type,
        unicast_address=unicast_address,
    )


def _parse_rtcp_fb(kind: AttributeKind, value: str) -> RtcpFb:
    parts = value.split(None, 1)
    if len(parts) != 2:
        raise MalformedAttributeError("Rtcp-Fb needs a payload type and a feedback type", value)
    return RtcpFb(
        payload_type=_parse_uint(parts[0], "Rtcp-Fb payload type"),
        feedback_type=parts[1],
    )


def _parse_rtpmap(kind: AttributeKind, value: str) -> RtpMap:
    """<payload type> <encoding name>[/<clock rate>[/<channels>]]"""
    tokens = value.split()
    if len(tokens) != 2:
        raise MalformedAttributeError("Rtpmap needs to have two tokens", value)

    payload_type = _parse_uint(tokens[0], "Rtpmap payload type")
    codec = tokens[1].split('/')
    if len(codec) > 3:
        raise MalformedAttributeError("Rtpmap codec token can max 3 subtokens", tokens[1])

    frequency: Optional[int] = None
    channels: Optional[int] = None
    if len(codec) > 1:
        frequency = _parse_uint(codec[1], "Rtpmap frequency")
    if len(codec) > 2:
        channels = _parse_uint(codec[2], "Rtpmap channels")

    return RtpMap(
        payload_type=payload_type,
        codec_name=codec[0],
        frequency=frequency,
        channels=channels,
    )


def _parse_sctpmap(kind: AttributeKind, value: str) -> SctpMap:
    """<port> webrtc-datachannel <streams>"""
    tokens = value.split()
    if len(tokens) != 3:
        raise MalformedAttributeError("Sctpmap needs to have three tokens", value)

    port = _parse_port(tokens[0], "Sctpmap port")
    if tokens[1].lower() != SCTPMAP_PROTOCOL:
        raise MalformedAttributeError("Unsupported sctpmap type token", tokens[1])
    return SctpMap(port=port, channels=_parse_uint(tokens[2], "Sctpmap channels"))


def _parse_setup(kind: AttributeKind, value: str) -> SetupRole:
    role = _SETUP_ROLES.get(value.lower())
    if role is None:
        raise MalformedAttributeError("Unsupported setup value", value)
    return role


def _parse_simulcast_alternatives(id_list: str) -> Tuple[SimulcastAlternatives, ...]:
    return tuple(
        SimulcastAlternatives(ids=tuple(SimulcastId.from_token(t) for t in alternative.split(',')))
        for alternative in id_list.split(';')
    )


def _parse_simulcast(kind: AttributeKind, value: str) -> Simulcast:
    """(send|recv) <id list> [(send|recv) <id list>]

    같은 방향이 두 번 나오면 나중 값으로 덮어쓴다.
    """
    tokens = value.split()
    if not tokens:
        raise MalformedAttributeError("Simulcast attribute is missing send/recv value", value)

    send: Tuple[SimulcastAlternatives, ...] = ()
    receive: Tuple[SimulcastAlternatives, ...] = ()

    index = 0
    while index < len(tokens):
        direction = _SIMULCAST_DIRECTIONS.get(tokens[index].lower())
        if direction is None:
            raise MalformedAttributeError(
                "Unsupported send/recv value in simulcast attribute", tokens[index]
            )
        if index + 1 >= len(tokens):
            raise MalformedAttributeError("Simulcast attribute is missing id list", value)

        alternatives = _parse_simulcast_alternatives(tokens[index + 1])
        if direction is Direction.SENDONLY:
            send = alternatives
        else:
            receive = alternatives
        index += 2

    return Simulcast(send=send, receive=receive)


def _parse_ssrc(kind: AttributeKind, value: str) -> Ssrc:
    """<ssrc-id> [<attribute>[:<value>]]"""
    tokens = value.split()
    if not tokens:
        raise MalformedAttributeError("Ssrc attribute is missing ssrc-id value", value)

    ssrc_id = _parse_uint(tokens[0], "Ssrc id")
    attribute: Optional[str] = None
    attribute_value: Optional[str] = None
    if len(tokens) > 1:
        if ':' in tokens[1]:
            attribute, attribute_value = tokens[1].split(':', 1)
        else:
            attribute = tokens[1]

    return Ssrc(id=ssrc_id, attribute=attribute, value=attribute_value)


_Parser = Callable[[AttributeKind, str], Optional[AttributeValue]]

_PARSERS: Dict[AttributeKind, _Parser] = {
    AttributeKind.BUNDLE_ONLY: _parse_flag,
    AttributeKind.CANDIDATE: _parse_candidate,
    AttributeKind.END_OF_CANDIDATES: _parse_flag,
    AttributeKind.EXTMAP: _parse_extmap,
    AttributeKind.FINGERPRINT: _parse_fingerprint,
    AttributeKind.FMTP: _parse_fmtp,
    AttributeKind.GROUP: _parse_group,
    AttributeKind.ICE_LITE: _parse_flag,
    AttributeKind.ICE_OPTIONS: _parse_ice_options,
    AttributeKind.ICE_PWD: _parse_string,
    AttributeKind.ICE_UFRAG: _parse_string,
    AttributeKind.INACTIVE: _parse_flag,
    AttributeKind.MID: _parse_string,
    AttributeKind.MSID: _parse_msid,
    AttributeKind.MSID_SEMANTIC: _parse_string,
    AttributeKind.RID: _parse_string,
    AttributeKind.RECVONLY: _parse_flag,
    AttributeKind.RTCP: _parse_rtcp,
    AttributeKind.RTCP_FB: _parse_rtcp_fb,
    AttributeKind.RTCP_MUX: _parse_flag,
    AttributeKind.RTCP_RSIZE: _parse_flag,
    AttributeKind.RTPMAP: _parse_rtpmap,
    AttributeKind.SCTPMAP: _parse_sctpmap,
    AttributeKind.SCTP_PORT: _parse_sctp_port,
    AttributeKind.SENDONLY: _parse_flag,
    AttributeKind.SENDRECV: _parse_flag,
    AttributeKind.SETUP: _parse_setup,
    AttributeKind.SIMULCAST: _parse_simulcast,
    AttributeKind.SSRC: _parse_ssrc,
    AttributeKind.SSRC_GROUP: _parse_string,
}


# --- public API ----------------------------------------------------------------

def parse(kind: AttributeKind, value: str) -> Attribute:
    """kind 문법에 따라 속성 값 파싱

    Args:
        kind: 속성 종류
        value: ':' 뒤의 값 (호출자가 앞뒤 공백 제거)

    Returns:
        Attribute

    Raises:
        MalformedAttributeError: 문법 위반
        UnsupportedAttributeError: 지원하지 않는 확장
    """
    return Attribute(kind=kind, value=_PARSERS[kind](kind, value))


def split_attribute_line(line: str) -> Tuple[str, str]:
    """a= 값을 (키워드, 값) 으로 분리

    예: "rtpmap:0 PCMU/8000" → ("rtpmap", "0 PCMU/8000"), "recvonly" → ("recvonly", "")
    """
    if ':' in line:
        keyword, value = line.split(':', 1)
        return keyword, value.strip()
    return line, ""


def parse_attribute_line(line: str) -> Attribute:
    """a= 뒤의 텍스트 전체를 파싱

    Args:
        line: 예) "rtcp-fb:101 ccm fir"

    Returns:
        Attribute

    Raises:
        UnsupportedAttributeError: 알 수 없는 키워드 / 확장
        MalformedAttributeError: 문법 위반
    """
    keyword, value = split_attribute_line(line)
    return parse(classify(keyword), value)
