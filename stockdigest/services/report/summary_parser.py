"""상승률 TOP30 정리 구간 파서

정리 구간은 별도 구분자 없이 아래처럼 카테고리 줄과 종목 줄이 번갈아 나옵니다.

    로봇
    A종목, B종목, C종목 (3)
    반도체
    D종목, E종목 등 (2)
    개별주

다음 줄에 쉼표가 있거나 "(N)" 으로 끝나면 현재 줄을 카테고리로 보고 두 줄을 함께 소비합니다.
그 외에 개별주/기타 줄은 제목만 있는 구간으로 남기고, 나머지 줄은 버립니다.
"""

import re
from typing import Dict, List, Mapping, Optional, Sequence

from stockdigest.schemas.report import (
    CategoryBlock,
    HeadingBlock,
    Section,
    StockDetail,
    StockEntry,
)
from stockdigest.services.report.classifier import classify_category

SUMMARY_HEADERS = ("상승률TOP30 정리", "상승률 TOP30 정리", "상승률TOP30정리")
HEADING_MARKERS = ("개별주", "기타")

COUNT_SUFFIX = re.compile(r"\(\d+\)$")
STOCK_SEPARATOR = re.compile(r",|등")


def locate_summary(text: str) -> Optional[str]:
    """정리 구간 헤더 뒤의 텍스트. 헤더 후보는 우선순위 순서로 찾는다."""
    for header in SUMMARY_HEADERS:
        start = text.find(header)
        if start != -1:
            return text[start + len(header):]
    return None


def split_lines(text: str) -> List[str]:
    return [line.strip() for line in text.split("\n") if line.strip()]


def is_stock_list_line(line: str) -> bool:
    return "," in line or COUNT_SUFFIX.search(line) is not None


def parse_stock_names(line: str) -> List[str]:
    """종목 줄 -> 중복 없는 종목명 목록 (처음 등장 순서 유지)"""
    cleaned = COUNT_SUFFIX.sub("", line)
    names = [part.strip() for part in STOCK_SEPARATOR.split(cleaned)]
    return list(dict.fromkeys(name for name in names if name))


def build_category(
    label: str,
    stock_line: str,
    details: Mapping[str, StockDetail],
) -> Optional[CategoryBlock]:
    """상세 정보가 있는 종목만 남긴 카테고리. 남는 종목이 없으면 None"""
    names = [name for name in parse_stock_names(stock_line) if name in details]
    if not names:
        return None

    stocks = [
        StockEntry(
            name=name,
            rate=details[name].rate,
            market_cap_text=details[name].market_cap_text,
        )
        for name in names
    ]
    return CategoryBlock(label=label, emoji=classify_category(label), stocks=stocks)


def walk_sections(lines: Sequence[str], details: Mapping[str, StockDetail]) -> List[Section]:
    sections: List[Section] = []
    i = 0
    while i < len(lines):
        line = lines[i]
        if i + 1 < len(lines) and is_stock_list_line(lines[i + 1]):
            block = build_category(line, lines[i + 1], details)
            if block is not None:
                sections.append(block)
            i += 2
            continue

        if any(marker in line for marker in HEADING_MARKERS):
            sections.append(HeadingBlock(label=line))
        i += 1
    return sections


def parse_summary(text: str, details: Dict[str, StockDetail]) -> Optional[List[Section]]:
    """정리 구간을 구간 목록으로 변환. 헤더가 없으면 None"""
    summary = locate_summary(text)
    if summary is None:
        return None
    return walk_sections(split_lines(summary), details)
