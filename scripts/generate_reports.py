#!/usr/bin/env python3
"""
generate API 호출 스크립트.

템플릿 + 데이터 파일을 서버로 보내고 reports.zip을 저장.

사용법:
    uv run python scripts/generate_reports.py letter.docx people.xlsx
    uv run python scripts/generate_reports.py letter.docx people.csv --format both -o out.zip
    uv run python scripts/generate_reports.py letter.docx people.csv --server http://localhost:3000
"""

import argparse
import logging
import sys
from pathlib import Path

from src.client.api import GenerateClient, GenerateRequestError

# 로깅 설정
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="템플릿 + 데이터 → reports.zip")
    parser.add_argument("template", type=Path, help="DOCX 템플릿")
    parser.add_argument("data", type=Path, help="CSV/XLSX 데이터 파일")
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=["docx", "pdf", "both"],
        default=None,
        help="출력 형식 (기본: 서버 기본값 docx)",
    )
    parser.add_argument("-o", "--output", type=Path, default=Path("reports.zip"), help="저장 경로")
    parser.add_argument("--server", default="http://localhost:3000", help="서버 주소")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    for path in (args.template, args.data):
        if not path.is_file():
            logger.error(f"파일 없음: {path}")
            return 1

    try:
        with GenerateClient(args.server) as client:
            content = client.generate(args.template, args.data, args.output_format)
    except GenerateRequestError as e:
        logger.error(f"생성 실패 ({e.status_code}): {e.message}")
        if e.detail:
            logger.error(f"  detail: {e.detail}")
        if e.row_index is not None:
            logger.error(f"  row: {e.row_index}")
        return 1

    args.output.write_bytes(content)
    logger.info(f"저장됨: {args.output} ({len(content) / 1024:.1f} KB)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
