from typing import Optional


def trim_boundaries(text: str, title_phrase: str, disclaimer_marker: Optional[str] = None) -> str:
    """머리말과 주의사항 꼬리말을 잘라 본문만 남긴다.

    제목 문구가 있으면 마지막 등장 위치 뒤부터 사용한다.
    제목 문구가 없으면 본문을 그대로 통과시킨다. 관련성은 앞 단계에서 이미 확인했다.
    """
    content = text
    if title_phrase and title_phrase in content:
        content = content.rsplit(title_phrase, 1)[1].strip()

    if disclaimer_marker and disclaimer_marker in content:
        content = content.split(disclaimer_marker, 1)[0].strip()

    return content
