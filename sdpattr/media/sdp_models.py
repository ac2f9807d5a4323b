"""SDP 데이터 모델

Session Description 파싱 결과를 담는 데이터 클래스
a= 라인은 타입이 지정된 Attribute 로 보관한다.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from sdpattr.common.exceptions import SDPAttributeError
from sdpattr.media.attribute_models import Attribute
from sdpattr.media.attribute_types import AttributeKind


def _find_all(attributes: List[Attribute], kind: AttributeKind) -> List[Attribute]:
    return [attr for attr in attributes if attr.kind is kind]


@dataclass
class MediaDescription:
    """미디어 설명 (m= line)

    예: m=audio 9 UDP/TLS/RTP/SAVPF 109 9 0 8
    """
    media_type: str          # audio, video, application
    port: int                # 미디어 포트
    protocol: str            # RTP/AVP, UDP/TLS/RTP/SAVPF, etc.
    formats: List[str]       # payload types / sctp format

    # 미디어 레벨 속성 (a= lines, 등장 순서 유지)
    attributes: List[Attribute] = field(default_factory=list)

    # Connection 주소 (c= line, 미디어별로 있을 수 있음)
    connection_address: Optional[str] = None

    def get_attributes(self, kind: AttributeKind) -> List[Attribute]:
        """kind 에 해당하는 속성 전체"""
        return _find_all(self.attributes, kind)

    def get_attribute(self, kind: AttributeKind) -> Optional[Attribute]:
        """kind 에 해당하는 첫 번째 속성"""
        found = self.get_attributes(kind)
        return found[0] if found else None

    def __repr__(self) -> str:
        return (f"MediaDescription(type={self.media_type}, port={self.port}, "
                f"formats={self.formats}, attributes={len(self.attributes)})")


@dataclass
class SDPSession:
    """SDP 세션 정보

    전체 SDP를 파싱한 결과
    """
    # Session 레벨 정보
    version: str = "0"                        # v=
    origin: Optional[str] = None              # o=
    session_name: str = "-"                   # s=
    connection_address: Optional[str] = None  # c= (세션 레벨)
    timing: str = "0 0"                       # t=

    # 미디어 설명 리스트
    media_descriptions: List[MediaDescription] = field(default_factory=list)

    # 세션 레벨 속성
    attributes: List[Attribute] = field(default_factory=list)

    # lenient 모드에서 건너뛴 속성 에러
    warnings: List[SDPAttributeError] = field(default_factory=list)

    # 원본 SDP (디버깅용)
    raw_sdp: Optional[str] = None

    def get_media_by_type(self, media_type: str) -> Optional[MediaDescription]:
        """미디어 타입으로 검색

        Args:
            media_type: audio, video, application 등

        Returns:
            첫 번째 MediaDescription 또는 None
        """
        for media in self.media_descriptions:
            if media.media_type == media_type:
                return media
        return None

    def has_audio(self) -> bool:
        """오디오 포함 여부"""
        return self.get_media_by_type("audio") is not None

    def has_video(self) -> bool:
        """비디오 포함 여부"""
        return self.get_media_by_type("video") is not None

    def get_attributes(self, kind: AttributeKind) -> List[Attribute]:
        """세션 레벨 속성 검색"""
        return _find_all(self.attributes, kind)

    def get_attribute(self, kind: AttributeKind) -> Optional[Attribute]:
        """세션 레벨 첫 번째 속성"""
        found = self.get_attributes(kind)
        return found[0] if found else None

    def get_media_connection_address(self, media: MediaDescription) -> Optional[str]:
        """미디어의 connection 주소 (미디어 레벨 우선)

        RFC 4566: 미디어 레벨 connection이 세션 레벨을 override
        """
        return media.connection_address or self.connection_address
