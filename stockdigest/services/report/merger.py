"""메시지 그룹핑 및 병합

여러 개의 텔레그램 메시지로 나뉘어 올라온 하루치 리포트를
그룹핑 타임존 기준 날짜별로 묶어 하나의 텍스트로 합칩니다.
"""

from collections import defaultdict
from typing import Dict, Iterable, List

import pytz
from loguru import logger

from stockdigest.schemas.report import MergedGroup, RawMessage

MESSAGE_SEPARATOR = "\n\n"


def date_key(message: RawMessage, tz: pytz.BaseTzInfo) -> str:
    """그룹핑 타임존 기준 YYYY-MM-DD"""
    return message.timestamp.astimezone(tz).strftime("%Y-%m-%d")


def merge_group(date: str, messages: List[RawMessage]) -> MergedGroup:
    """같은 날짜의 메시지를 ID 오름차순(1부, 2부 ...)으로 이어 붙인다.

    같은 시각에 연달아 보낸 메시지가 있으므로 시각이 아니라 ID로 정렬한다.
    대표 ID는 가장 오래된 메시지, 표시 날짜는 가장 최근 메시지에서 가져온다.
    """
    ordered = sorted(messages, key=lambda m: m.id)
    return MergedGroup(
        date_key=date,
        representative_id=ordered[0].id,
        display_date=ordered[-1].timestamp,
        text=MESSAGE_SEPARATOR.join(m.text for m in ordered),
        message_ids=[m.id for m in ordered],
    )


def group_messages(messages: Iterable[RawMessage], timezone_name: str) -> List[MergedGroup]:
    """날짜별로 묶어 병합한 그룹 목록을 최신 날짜부터 반환"""
    tz = pytz.timezone(timezone_name)
    grouped: Dict[str, List[RawMessage]] = defaultdict(list)
    for message in messages:
        grouped[date_key(message, tz)].append(message)

    groups = [merge_group(key, grouped[key]) for key in sorted(grouped, reverse=True)]
    for group in groups:
        logger.debug(f"[{group.date_key}] 메시지 {len(group.message_ids)}개 병합 (대표 ID: {group.representative_id})")
    return groups
