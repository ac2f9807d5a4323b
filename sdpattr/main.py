"""sdpattr - Main Entry Point

SDP 파일을 읽어 속성 파싱 결과를 출력한다.
설정 파일(parser, logging)과 CLI 인자로 파서 정책과 로깅을 결정한다.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from sdpattr.common.exceptions import ConfigurationError, SDPParsingError
from sdpattr.common.logger import get_logger, setup_logging_from_config
from sdpattr.config.config_loader import load_config
from sdpattr.config.models import Config, LogLevel, ParseMode
from sdpattr.media.sdp_models import SDPSession
from sdpattr.media.sdp_parser import SDPParser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="sdpattr",
        description="SDP a= 속성 파서",
    )
    parser.add_argument("sdp_file", help="SDP 파일 경로 ('-' 는 stdin)")
    parser.add_argument("-c", "--config", help="설정 파일 경로 (기본: SDPATTR_CONFIG_PATH 또는 config/config.yaml)")
    parser.add_argument("--mode", choices=[m.value for m in ParseMode], help="파서 모드 오버라이드")
    parser.add_argument("--log-level", choices=[lv.value for lv in LogLevel], help="로그 레벨 오버라이드")
    parser.add_argument("--version", action="version", version="%(prog)s 0.1.0")
    return parser.parse_args(argv)


def load_configuration(config_path: Optional[str] = None) -> Config:
    """설정 로드

    Raises:
        ConfigurationError: 파일이 없거나 검증에 실패한 경우
    """
    try:
        return load_config(config_path)
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(str(e)) from e


def apply_cli_overrides(config: Config, args: argparse.Namespace) -> Config:
    """CLI 인자로 설정 오버라이드"""
    if args.mode:
        config.parser.mode = ParseMode(args.mode)
    if args.log_level:
        config.logging.level = LogLevel(args.log_level)
    return config


def read_sdp(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def format_session(session: SDPSession) -> List[str]:
    """파싱 결과 요약 (속성은 표시 이름 순서대로)"""
    lines = [f"session: {', '.join(attr.name for attr in session.attributes) or '-'}"]
    for media in session.media_descriptions:
        names = ", ".join(attr.name for attr in media.attributes) or "-"
        lines.append(f"m={media.media_type} {media.port} {media.protocol}: {names}")
    for warning in session.warnings:
        lines.append(f"warning: {warning}")
    return lines


def main(argv: Optional[List[str]] = None) -> int:
    """메인 함수

    Returns:
        int: 종료 코드 (0 성공, 1 설정 오류, 2 파싱 오류)
    """
    args = parse_args(argv)

    try:
        config = apply_cli_overrides(load_configuration(args.config), args)
    except ConfigurationError as e:
        print(f"설정 로드 실패: {e}", file=sys.stderr)
        return 1

    setup_logging_from_config(config.logging)
    logger = get_logger(__name__)

    try:
        session = SDPParser.parse(read_sdp(args.sdp_file), config.parser)
    except OSError as e:
        logger.error("sdp_read_failed", path=args.sdp_file, error=str(e))
        return 2
    except SDPParsingError as e:
        logger.error("sdp_parse_failed",
                     path=args.sdp_file,
                     line_number=e.line_number,
                     offending_text=e.offending_text,
                     error=e.message)
        print(f"error: {e}", file=sys.stderr)
        return 2

    for line in format_session(session):
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
