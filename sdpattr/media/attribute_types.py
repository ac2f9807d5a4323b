"""SDP 속성 종류 카탈로그

a= 라인 키워드 → AttributeKind 분류 및 표시용 이름
"""

from enum import Enum
from typing import Dict, FrozenSet

from sdpattr.common.exceptions import UnsupportedAttributeError


class AttributeKind(str, Enum):
    """지원하는 a= 속성 종류

    값은 소문자 키워드 (매칭은 대소문자 무시)
    """
    BUNDLE_ONLY = "bundle-only"
    CANDIDATE = "candidate"
    END_OF_CANDIDATES = "end-of-candidates"
    EXTMAP = "extmap"
    FINGERPRINT = "fingerprint"
    FMTP = "fmtp"
    GROUP = "group"
    ICE_LITE = "ice-lite"
    ICE_OPTIONS = "ice-options"
    ICE_PWD = "ice-pwd"
    ICE_UFRAG = "ice-ufrag"
    INACTIVE = "inactive"
    MID = "mid"
    MSID = "msid"
    MSID_SEMANTIC = "msid-semantic"
    RID = "rid"
    RECVONLY = "recvonly"
    RTCP = "rtcp"
    RTCP_FB = "rtcp-fb"
    RTCP_MUX = "rtcp-mux"
    RTCP_RSIZE = "rtcp-rsize"
    RTPMAP = "rtpmap"
    SCTPMAP = "sctpmap"
    SCTP_PORT = "sctp-port"
    SENDONLY = "sendonly"
    SENDRECV = "sendrecv"
    SETUP = "setup"
    SIMULCAST = "simulcast"
    SSRC = "ssrc"
    SSRC_GROUP = "ssrc-group"

    @property
    def display(self) -> str:
        """표시용 이름 (예: Rtcp-Fb)"""
        return _DISPLAY_NAMES[self]

    @property
    def is_flag(self) -> bool:
        """값을 가질 수 없는 속성 여부"""
        return self in FLAG_KINDS


_DISPLAY_NAMES: Dict[AttributeKind, str] = {
    AttributeKind.BUNDLE_ONLY: "Bundle-Only",
    AttributeKind.CANDIDATE: "Candidate",
    AttributeKind.END_OF_CANDIDATES: "End-Of-Candidates",
    AttributeKind.EXTMAP: "Extmap",
    AttributeKind.FINGERPRINT: "Fingerprint",
    AttributeKind.FMTP: "Fmtp",
    AttributeKind.GROUP: "Group",
    AttributeKind.ICE_LITE: "Ice-Lite",
    AttributeKind.ICE_OPTIONS: "Ice-Options",
    AttributeKind.ICE_PWD: "Ice-Pwd",
    AttributeKind.ICE_UFRAG: "Ice-Ufrag",
    AttributeKind.INACTIVE: "Inactive",
    AttributeKind.MID: "Mid",
    AttributeKind.MSID: "Msid",
    AttributeKind.MSID_SEMANTIC: "Msid-Semantic",
    AttributeKind.RID: "Rid",
    AttributeKind.RECVONLY: "Recvonly",
    AttributeKind.RTCP: "Rtcp",
    AttributeKind.RTCP_FB: "Rtcp-Fb",
    AttributeKind.RTCP_MUX: "Rtcp-Mux",
    AttributeKind.RTCP_RSIZE: "Rtcp-Rsize",
    AttributeKind.RTPMAP: "Rtpmap",
    AttributeKind.SCTPMAP: "Sctpmap",
    AttributeKind.SCTP_PORT: "Sctp-Port",
    AttributeKind.SENDONLY: "Sendonly",
    AttributeKind.SENDRECV: "Sendrecv",
    AttributeKind.SETUP: "Setup",
    AttributeKind.SIMULCAST: "Simulcast",
    AttributeKind.SSRC: "Ssrc",
    AttributeKind.SSRC_GROUP: "Ssrc-Group",
}

FLAG_KINDS: FrozenSet[AttributeKind] = frozenset({
    AttributeKind.BUNDLE_ONLY,
    AttributeKind.END_OF_CANDIDATES,
    AttributeKind.ICE_LITE,
    AttributeKind.INACTIVE,
    AttributeKind.RECVONLY,
    AttributeKind.RTCP_MUX,
    AttributeKind.RTCP_RSIZE,
    AttributeKind.SENDONLY,
    AttributeKind.SENDRECV,
})

_KEYWORDS: Dict[str, AttributeKind] = {kind.value: kind for kind in AttributeKind}


def classify(keyword: str) -> AttributeKind:
    """키워드를 AttributeKind 로 분류

    Args:
        keyword: a= 라인의 ':' 앞부분

    Returns:
        AttributeKind

    Raises:
        UnsupportedAttributeError: 알 수 없는 키워드
    """
    # ASCII 대소문자만 무시 (유니코드 case folding 은 적용하지 않음)
    kind = _KEYWORDS.get(keyword.lower()) if keyword.isascii() else None
    if kind is None:
        raise UnsupportedAttributeError("unsupported attribute value", keyword)
    return kind


def display(kind: AttributeKind) -> str:
    """표시용 이름 반환"""
    return _DISPLAY_NAMES[kind]
