"""머리말/꼬리말 제거 테스트"""

import pytest

from stockdigest.services.report.trimmer import trim_boundaries

from tests.conftest import TITLE

DISCLAIMER = "[주의사항]"


@pytest.mark.parametrize("k", [1, 2, 3])
def test_content_starts_after_last_title_occurrence(k):
    text = "\n".join([f"인용 {i} {TITLE}" for i in range(k)]) + "\n본문 시작\n1. 종목"
    trimmed = trim_boundaries(text, TITLE, DISCLAIMER)

    assert trimmed == "본문 시작\n1. 종목"
    assert not trimmed.startswith(TITLE)


def test_trim_is_invariant_to_title_count():
    body = "\n본문\n상승률TOP30 정리"
    once = trim_boundaries(f"머리말 {TITLE}{body}", TITLE)
    twice = trim_boundaries(f"{TITLE} 머리말 {TITLE}{body}", TITLE)

    assert once == twice == "본문\n상승률TOP30 정리"


def test_missing_title_passes_text_through():
    text = "상승률TOP30 정리\n로봇\nA, B (2)"
    assert trim_boundaries(text, TITLE, DISCLAIMER) == text


def test_footer_is_cut_at_disclaimer():
    text = f"{TITLE}\n본문\n{DISCLAIMER}\n투자 책임은 본인에게"
    assert trim_boundaries(text, TITLE, DISCLAIMER) == "본문"


def test_footer_is_cut_even_without_title():
    text = f"본문\n{DISCLAIMER}\n꼬리말"
    assert trim_boundaries(text, TITLE, DISCLAIMER) == "본문"
