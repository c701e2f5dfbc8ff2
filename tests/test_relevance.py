"""키워드 관련성 필터 테스트"""

from stockdigest.services.report.relevance import is_relevant

from tests.conftest import KEYWORDS


def test_title_phrase_is_relevant():
    assert is_relevant("몽당연필의 장마감 시황 (1/2)", KEYWORDS)


def test_top30_variants_are_relevant():
    assert is_relevant("오늘의 상승률TOP30 입니다", KEYWORDS)
    assert is_relevant("상승률 TOP30 정리", KEYWORDS)
    assert is_relevant("TOP30 정보 작성자: 몽당연필", KEYWORDS)


def test_unrelated_and_empty_messages_are_dropped():
    assert not is_relevant("오늘 점심 메뉴 추천", KEYWORDS)
    assert not is_relevant("", KEYWORDS)


def test_no_fuzzy_matching():
    # 공백/대소문자가 다르면 매칭하지 않는다
    assert not is_relevant("상승률 top30", KEYWORDS)
    assert not is_relevant("몽당연필의장마감시황", KEYWORDS)
