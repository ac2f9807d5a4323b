"""SDP 네트워크 프리미티브

<nettype> <addrtype> <unicast-address> 토큰 파싱 (RFC 4566 c=, a=rtcp, a=candidate)
"""

import ipaddress
from enum import Enum
from typing import Union

from sdpattr.common.exceptions import NetworkParseError

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


class NetType(str, Enum):
    """네트워크 타입 (RFC 4566은 IN만 정의)"""
    INTERNET = "IN"


class AddrType(str, Enum):
    """주소 타입"""
    IP4 = "IP4"
    IP6 = "IP6"


def parse_net_type(value: str) -> NetType:
    """nettype 토큰 파싱 (대소문자 무시)

    Raises:
        NetworkParseError: IN 이 아닌 경우
    """
    if value.upper() != NetType.INTERNET.value:
        raise NetworkParseError("nettype needs to be IN", value)
    return NetType.INTERNET


def parse_addr_type(value: str) -> AddrType:
    """addrtype 토큰 파싱 (대소문자 무시)

    Raises:
        NetworkParseError: IP4 / IP6 가 아닌 경우
    """
    try:
        return AddrType(value.upper())
    except ValueError:
        raise NetworkParseError("address type needs to be IP4 or IP6", value)


def parse_unicast_address(addr_type: AddrType, value: str) -> IPAddress:
    """리터럴 IP 주소 파싱 후 addrtype 과 패밀리 일치 여부 검증

    Args:
        addr_type: 기대하는 주소 타입
        value: 주소 토큰

    Returns:
        IPv4Address 또는 IPv6Address

    Raises:
        NetworkParseError: 주소가 아니거나 패밀리가 다른 경우
    """
    try:
        address = ipaddress.ip_address(value)
    except ValueError:
        raise NetworkParseError("Failed to parse unicast address attribute", value)

    # zone id (fe80::1%eth0) 는 리터럴 주소로 보지 않음
    if isinstance(address, ipaddress.IPv6Address) and address.scope_id is not None:
        raise NetworkParseError("Failed to parse unicast address attribute", value)

    expected = 4 if addr_type is AddrType.IP4 else 6
    if address.version != expected:
        raise NetworkParseError(
            "Failed to parse unicast address attribute. addrtype does not match address.",
            value,
        )
    return address


def parse_unicast_address_unknown_type(value: str) -> IPAddress:
    """addrtype 없이 주소 파싱

    '.' 이 있으면 IP4, 없으면 IP6 로 간주한다.
    ::ffff:1.2.3.4 같은 IPv4-mapped IPv6 리터럴은 IP4 로 분류되어 실패한다.
    """
    if '.' in value:
        return parse_unicast_address(AddrType.IP4, value)
    return parse_unicast_address(AddrType.IP6, value)
