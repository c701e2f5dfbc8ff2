from typing import Iterable


def is_relevant(text: str, keywords: Iterable[str]) -> bool:
    """메시지가 장마감 리포트에 속하는지 키워드 포함 여부로 판단

    부분 문자열 포함만 본다. 빈 메시지는 항상 False.
    """
    if not text:
        return False
    return any(keyword in text for keyword in keywords)
