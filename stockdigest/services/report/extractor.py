"""종목 상세 추출

리포트 본문의 번호 목록에서 종목별 상승률과 시총을 뽑아냅니다.

    1. 종목명 (12.3%) : 카테고리, 시총 1500억, ...

각 필드는 한 줄 안에서만 매칭합니다.
"""

import re
from typing import Dict, Iterator, NamedTuple

from stockdigest.schemas.report import StockDetail

LINE_ITEM_PATTERN = re.compile(
    r"(?P<index>\d+)\.[ \t]+"
    r"(?P<name>[^(\n]+?)[ \t]+"
    r"\((?P<rate>[^)\n]+)\)[ \t]+:[ \t]+"
    r"(?P<category>[^,\n]+),[ \t]*"
    r"(?P<cap>(?:[^,\n]|(?<=\d),(?=\d))+)"  # 2,000억 같은 자릿수 쉼표는 허용
)

MARKET_CAP_PREFIXES = ("시총", "cap:")


class LineItem(NamedTuple):
    index: int
    name: str
    rate: str
    category: str
    market_cap_text: str


def strip_cap_prefix(text: str) -> str:
    text = text.strip()
    for prefix in MARKET_CAP_PREFIXES:
        if text.startswith(prefix):
            return text[len(prefix):].strip()
    return text


def iter_line_items(text: str) -> Iterator[LineItem]:
    """번호 목록 항목을 등장 순서대로 반환"""
    for match in LINE_ITEM_PATTERN.finditer(text):
        yield LineItem(
            index=int(match.group("index")),
            name=match.group("name").strip(),
            rate=match.group("rate").strip(),
            category=match.group("category").strip(),
            market_cap_text=strip_cap_prefix(match.group("cap")),
        )


def extract_stock_details(text: str) -> Dict[str, StockDetail]:
    """종목명 -> StockDetail 매핑

    같은 종목이 여러 번 나오면 처음 것만 등록한다.
    뒤쪽 중복 항목은 잘리거나 깨진 경우가 많다.
    """
    details: Dict[str, StockDetail] = {}
    for item in iter_line_items(text):
        if not item.name or item.name in details:
            continue
        details[item.name] = StockDetail(
            name=item.name,
            rate=item.rate,
            market_cap_text=item.market_cap_text,
        )
    return details
