"""AttributeKind 카탈로그 단위 테스트"""

import pytest

from sdpattr.common.exceptions import UnsupportedAttributeError
from sdpattr.media.attribute_types import FLAG_KINDS, AttributeKind, classify, display


class TestClassify:
    """키워드 분류"""

    def test_catalog_size(self):
        assert len(AttributeKind) == 30
        assert len(FLAG_KINDS) == 9

    @pytest.mark.parametrize("kind", list(AttributeKind))
    def test_display_round_trip(self, kind):
        """classify(display(k)) == k"""
        assert classify(display(kind)) is kind
        assert classify(display(kind).upper()) is kind
        assert classify(kind.value) is kind

    @pytest.mark.parametrize("keyword,expected", [
        ("RTCP-FB", AttributeKind.RTCP_FB),
        ("Ice-Ufrag", AttributeKind.ICE_UFRAG),
        ("end-of-candidates", AttributeKind.END_OF_CANDIDATES),
        ("SSRC-GROUP", AttributeKind.SSRC_GROUP),
    ])
    def test_case_insensitive(self, keyword, expected):
        assert classify(keyword) is expected

    @pytest.mark.parametrize("keyword", ["x-nat", "rtcp-", "rtp", "", "candidates", " mid"])
    def test_unknown_keyword(self, keyword):
        """알 수 없는 키워드는 Unsupported (prefix/fuzzy 매칭 없음)"""
        with pytest.raises(UnsupportedAttributeError) as exc_info:
            classify(keyword)

        assert exc_info.value.offending_text == keyword

    def test_non_ascii_keyword(self):
        with pytest.raises(UnsupportedAttributeError):
            classify("MİD")


class TestDisplay:
    """표시용 이름"""

    @pytest.mark.parametrize("kind,expected", [
        (AttributeKind.BUNDLE_ONLY, "Bundle-Only"),
        (AttributeKind.RTCP_FB, "Rtcp-Fb"),
        (AttributeKind.MSID_SEMANTIC, "Msid-Semantic"),
        (AttributeKind.SCTP_PORT, "Sctp-Port"),
        (AttributeKind.END_OF_CANDIDATES, "End-Of-Candidates"),
    ])
    def test_display(self, kind, expected):
        assert display(kind) == expected
        assert kind.display == expected

    def test_is_flag(self):
        assert AttributeKind.RTCP_MUX.is_flag
        assert not AttributeKind.MID.is_flag
