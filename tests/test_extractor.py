"""종목 상세 추출 테스트"""

from stockdigest.services.report.extractor import (
    extract_stock_details,
    iter_line_items,
    strip_cap_prefix,
)


def test_line_item_fields():
    items = list(iter_line_items("1. ABC (12.3%) : 로봇, 시총 1500억"))

    assert len(items) == 1
    item = items[0]
    assert item.index == 1
    assert item.name == "ABC"
    assert item.rate == "12.3%"
    assert item.category == "로봇"
    assert item.market_cap_text == "1500억"


def test_cap_with_thousands_separator(report_text):
    details = extract_stock_details(report_text)

    assert details["레인보우로보틱스"].market_cap_text == "3조 2,000억"
    assert details["한미반도체"].market_cap_text == "1조 500억"


def test_first_occurrence_wins(report_text):
    details = extract_stock_details(report_text)

    # 4번 항목의 중복 레인보우로보틱스는 무시된다
    assert details["레인보우로보틱스"].rate == "29.9%"
    assert list(details) == ["레인보우로보틱스", "한미반도체", "알테오젠", "에코프로"]


def test_fields_do_not_span_lines():
    text = "1. ABC (12.3%) : 로봇\n2. DEF (3.1%) : 반도체, 시총 800억"
    details = extract_stock_details(text)

    assert "ABC" not in details
    assert details["DEF"].market_cap_text == "800억"


def test_strip_cap_prefix():
    assert strip_cap_prefix(" 시총 1500억 ") == "1500억"
    assert strip_cap_prefix("cap: 1조") == "1조"
    assert strip_cap_prefix("1500억") == "1500억"
    # 중간에 나오는 접두어는 건드리지 않는다
    assert strip_cap_prefix("약 시총 1500억") == "약 시총 1500억"


def test_no_items():
    assert extract_stock_details("오늘은 휴장입니다.") == {}
