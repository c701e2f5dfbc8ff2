"""시총 필터 (화면 표시용)

"1조 500억" 같은 조/억 단위 시총 텍스트를 억 단위 정수로 바꾸고,
기준 미만 종목과 그 결과 비게 된 카테고리를 제거합니다.
저장된 리포트는 건드리지 않고 복사본을 돌려줍니다.
"""

import re

from stockdigest.schemas.report import CategoryBlock, Report

JO_IN_UK = 10000  # 1조 = 10,000억

MARKET_CAP_PATTERN = re.compile(
    r"^\s*(?:시총\s*)?"
    r"(?:(?P<jo>[0-9][0-9,]*)\s*조)?\s*"
    r"(?:(?P<uk>[0-9][0-9,]*)\s*억?)?"
)


def _to_int(value: str) -> int:
    digits = value.replace(",", "")
    return int(digits) if digits else 0


def parse_market_cap(text: str) -> int:
    """시총 텍스트 -> 억 단위 정수. 해석할 수 없으면 0"""
    if not text:
        return 0
    match = MARKET_CAP_PATTERN.match(text)
    if not match:
        return 0
    jo = _to_int(match.group("jo") or "")
    uk = _to_int(match.group("uk") or "")
    return jo * JO_IN_UK + uk


def filter_by_market_cap(report: Report, threshold: int) -> Report:
    """기준(억) 미만 종목을 뺀 리포트 복사본. 제목 구간은 그대로 둔다."""
    sections = []
    for section in report.sections:
        if not isinstance(section, CategoryBlock):
            sections.append(section)
            continue
        stocks = [s for s in section.stocks if parse_market_cap(s.market_cap_text) >= threshold]
        if stocks:
            sections.append(section.model_copy(update={"stocks": stocks}))
    return report.model_copy(update={"sections": sections})
