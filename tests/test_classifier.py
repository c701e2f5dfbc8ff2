"""카테고리 이모지 분류 테스트"""

import pytest

from stockdigest.services.report.classifier import DEFAULT_EMOJI, EMOJI_RULES, classify_category


@pytest.mark.parametrize(
    "label,emoji",
    [
        ("로봇", "🤖"),
        ("반도체", "💽"),
        ("제약/바이오", "💊"),
        ("자율주행", "🚗"),
        ("조선", "🚢"),
        ("우주항공", "🚀"),
        ("2차전지", "⚡"),
        ("AI 소프트웨어", "🧠"),
        ("방산", "⚔️"),
        ("개별 이슈", "✨"),
        ("신규상장", "🔥"),
    ],
)
def test_keyword_match(label, emoji):
    assert classify_category(label) == emoji


def test_first_rule_wins():
    # 로봇 규칙이 반도체 규칙보다 앞에 있다
    assert classify_category("로봇 반도체") == "🤖"
    # 에너지는 배터리 규칙에 먼저 걸린다
    assert classify_category("에너지") == "⚡"
    # 같은 라벨에 우주/항공 키워드가 있으면 보안보다 앞선다
    assert classify_category("드론") == "🔒"
    assert classify_category("항공 드론") == "🚀"


def test_default_emoji():
    assert classify_category("음식료") == DEFAULT_EMOJI
    assert classify_category("") == DEFAULT_EMOJI


def test_rule_order_is_fixed():
    emojis = [emoji for _, emoji in EMOJI_RULES]
    assert emojis[:3] == ["🤖", "💽", "💊"]
    assert emojis[-2:] == ["✨", "🔥"]
