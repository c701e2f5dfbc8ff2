from typing import Tuple

DEFAULT_EMOJI = "📈"

# 순서가 곧 우선순위. 앞에서 먼저 걸린 규칙이 적용된다.
EMOJI_RULES: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("로봇",), "🤖"),
    (("반도체",), "💽"),
    (("제약", "바이오"), "💊"),
    (("자동차", "자율주행", "모빌리티"), "🚗"),
    (("조선",), "🚢"),
    (("우주", "항공"), "🚀"),
    (("화장품", "뷰티"), "💄"),
    (("신재생", "풍력", "태양광"), "🌀"),
    (("배터리", "2차전지", "이차전지", "에너지"), "⚡"),
    (("게임",), "🎮"),
    (("AI", "인공지능"), "🧠"),
    (("정치", "정책", "총선"), "🏛️"),
    (("건설", "재건"), "🏗️"),
    (("방산", "전쟁"), "⚔️"),
    (("경영", "인수"), "🤝"),
    (("금융", "투자"), "💰"),
    (("보안", "정보", "해킹", "드론"), "🔒"),
    (("개별",), "✨"),
    (("신규상장",), "🔥"),
)


def classify_category(label: str) -> str:
    """카테고리 이름 -> 이모지"""
    for keywords, emoji in EMOJI_RULES:
        if any(keyword in label for keyword in keywords):
            return emoji
    return DEFAULT_EMOJI
