"""SDP 속성 데이터 모델

a= 라인 파싱 결과를 담는 불변 데이터 클래스
Attribute.kind 가 value 의 타입을 결정한다 (kind 별 타입은 VALUE_TYPES 참고)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from sdpattr.media.attribute_types import AttributeKind
from sdpattr.media.network import AddrType, IPAddress, NetType


class CandidateTransport(str, Enum):
    """ICE candidate 트랜스포트"""
    UDP = "udp"
    TCP = "tcp"


class CandidateType(str, Enum):
    """ICE candidate 타입 (RFC 8445)"""
    HOST = "host"
    SRFLX = "srflx"
    PRFLX = "prflx"
    RELAY = "relay"


class CandidateTcpType(str, Enum):
    """ICE-TCP candidate 역할 (RFC 6544)"""
    ACTIVE = "active"
    PASSIVE = "passive"
    SIMULTANEOUS = "so"


class Direction(str, Enum):
    """extmap / simulcast 방향"""
    RECVONLY = "recvonly"
    SENDONLY = "sendonly"
    SENDRECV = "sendrecv"


class GroupSemantics(str, Enum):
    """a=group semantics (RFC 5888 외)"""
    LIP_SYNCHRONIZATION = "LS"
    FLOW_IDENTIFICATION = "FID"
    SINGLE_RESERVATION_FLOW = "SRF"
    ALTERNATE_NETWORK_ADDRESS_TYPE = "ANAT"
    FORWARD_ERROR_CORRECTION = "FEC"
    DECODING_DEPENDENCY = "DDP"
    BUNDLE = "BUNDLE"


class SetupRole(str, Enum):
    """a=setup 역할 (RFC 4145)"""
    ACTIVE = "active"
    ACTPASS = "actpass"
    HOLDCONN = "holdconn"
    PASSIVE = "passive"


@dataclass(frozen=True)
class Candidate:
    """ICE candidate

    예: a=candidate:1 1 UDP 1685987071 24.23.204.141 54609 typ srflx raddr 192.168.1.4 rport 61665
    """
    foundation: str
    component: int                # u32
    transport: CandidateTransport
    priority: int                 # u64
    address: IPAddress
    port: int                     # 0 ~ 65535
    candidate_type: CandidateType
    remote_address: Optional[IPAddress] = None   # raddr
    remote_port: Optional[int] = None            # rport
    tcp_type: Optional[CandidateTcpType] = None  # tcptype


@dataclass(frozen=True)
class ExtMap:
    """RTP 헤더 확장 매핑 (RFC 8285)

    예: a=extmap:1/sendonly urn:ietf:params:rtp-hdrext:ssrc-audio-level
    """
    id: int
    direction: Optional[Direction]
    url: str


@dataclass(frozen=True)
class Fingerprint:
    """DTLS 인증서 fingerprint (hex 문자열은 검증하지 않음)"""
    hash_algorithm: str
    fingerprint: str


@dataclass(frozen=True)
class Fmtp:
    """포맷 파라미터

    tokens 는 원본 값을 ';' 로 자른 조각들 (첫 조각에 payload type 포함)
    """
    payload_type: int
    tokens: Tuple[str, ...]


@dataclass(frozen=True)
class Group:
    """미디어 그룹 (예: BUNDLE 0 1)"""
    semantics: GroupSemantics
    tags: Tuple[str, ...]


@dataclass(frozen=True)
class Msid:
    """미디어 스트림 ID"""
    id: str
    appdata: Optional[str] = None


@dataclass(frozen=True)
class Rtcp:
    """RTCP 포트/주소 (RFC 3605)"""
    port: int
    net_type: NetType
    addr_type: AddrType
    unicast_address: IPAddress


@dataclass(frozen=True)
class RtcpFb:
    """RTCP feedback (RFC 4585), feedback_type 은 파싱하지 않은 나머지 문자열"""
    payload_type: int
    feedback_type: str


@dataclass(frozen=True)
class RtpMap:
    """RTP payload 매핑

    예: a=rtpmap:109 opus/48000/2
    """
    payload_type: int
    codec_name: str
    frequency: Optional[int] = None
    channels: Optional[int] = None


@dataclass(frozen=True)
class SctpMap:
    """SCTP 포트 매핑 (webrtc-datachannel)"""
    port: int
    channels: int


@dataclass(frozen=True)
class SimulcastId:
    """simulcast 스트림 ID ('~' 접두사는 일시정지)"""
    id: str
    paused: bool = False

    @classmethod
    def from_token(cls, token: str) -> "SimulcastId":
        if token.startswith("~"):
            return cls(id=token[1:], paused=True)
        return cls(id=token, paused=False)


@dataclass(frozen=True)
class SimulcastAlternatives:
    """',' 로 나열된 대체 스트림 목록"""
    ids: Tuple[SimulcastId, ...]


@dataclass(frozen=True)
class Simulcast:
    """simulcast 송수신 목록 (';' 로 구분된 alternatives 의 나열)"""
    send: Tuple[SimulcastAlternatives, ...] = ()
    receive: Tuple[SimulcastAlternatives, ...] = ()


@dataclass(frozen=True)
class Ssrc:
    """동기화 소스

    예: a=ssrc:2655508255 cname:{735484ea-4f6c-f74a-bd66-7425f8476c2e}
    """
    id: int
    attribute: Optional[str] = None
    value: Optional[str] = None


AttributeValue = Union[
    str,
    int,
    Tuple[str, ...],
    Candidate,
    ExtMap,
    Fingerprint,
    Fmtp,
    Group,
    Msid,
    Rtcp,
    RtcpFb,
    RtpMap,
    SctpMap,
    SetupRole,
    Simulcast,
    Ssrc,
]


@dataclass(frozen=True)
class Attribute:
    """파싱된 a= 속성

    value 는 flag 속성이면 None
    """
    kind: AttributeKind
    value: Optional[AttributeValue] = None

    @property
    def name(self) -> str:
        """표시용 속성 이름"""
        return self.kind.display

    def __repr__(self) -> str:
        return f"Attribute(kind={self.kind.display}, value={self.value!r})"


# kind 별 value 타입 (flag 속성은 NoneType)
VALUE_TYPES = {
    AttributeKind.BUNDLE_ONLY: type(None),
    AttributeKind.CANDIDATE: Candidate,
    AttributeKind.END_OF_CANDIDATES: type(None),
    AttributeKind.EXTMAP: ExtMap,
    AttributeKind.FINGERPRINT: Fingerprint,
    AttributeKind.FMTP: Fmtp,
    AttributeKind.GROUP: Group,
    AttributeKind.ICE_LITE: type(None),
    AttributeKind.ICE_OPTIONS: tuple,
    AttributeKind.ICE_PWD: str,
    AttributeKind.ICE_UFRAG: str,
    AttributeKind.INACTIVE: type(None),
    AttributeKind.MID: str,
    AttributeKind.MSID: Msid,
    AttributeKind.MSID_SEMANTIC: str,
    AttributeKind.RID: str,
    AttributeKind.RECVONLY: type(None),
    AttributeKind.RTCP: Rtcp,
    AttributeKind.RTCP_FB: RtcpFb,
    AttributeKind.RTCP_MUX: type(None),
    AttributeKind.RTCP_RSIZE: type(None),
    AttributeKind.RTPMAP: RtpMap,
    AttributeKind.SCTPMAP: SctpMap,
    AttributeKind.SCTP_PORT: int,
    AttributeKind.SENDONLY: type(None),
    AttributeKind.SENDRECV: type(None),
    AttributeKind.SETUP: SetupRole,
    AttributeKind.SIMULCAST: Simulcast,
    AttributeKind.SSRC: Ssrc,
    AttributeKind.SSRC_GROUP: str,
}
