"""메시지 그룹핑/병합 테스트"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from stockdigest.schemas.report import RawMessage
from stockdigest.services.report.merger import MESSAGE_SEPARATOR, group_messages


def _msg(id: int, ts: datetime, text: str = "본문") -> RawMessage:
    return RawMessage(id=id, timestamp=ts, text=text)


def test_same_day_messages_are_merged_in_id_order():
    ts_101 = datetime(2024, 12, 30, 8, 0, tzinfo=timezone.utc)
    ts_102 = datetime(2024, 12, 30, 8, 5, tzinfo=timezone.utc)
    groups = group_messages(
        [_msg(102, ts_102, "2부"), _msg(101, ts_101, "1부")],
        "Asia/Seoul",
    )

    assert len(groups) == 1
    group = groups[0]
    assert group.representative_id == 101
    assert group.display_date == ts_102
    assert group.text == "1부" + MESSAGE_SEPARATOR + "2부"
    assert group.message_ids == [101, 102]


def test_ordering_uses_id_not_timestamp():
    # 같은 시각에 보낸 메시지도 ID 순서대로 병합
    ts = datetime(2024, 12, 30, 8, 0, tzinfo=timezone.utc)
    groups = group_messages([_msg(7, ts, "B"), _msg(5, ts, "A")], "Asia/Seoul")

    assert groups[0].text == "A" + MESSAGE_SEPARATOR + "B"
    assert groups[0].representative_id == 5


def test_grouping_uses_configured_timezone():
    # 2024-12-30 16:00 UTC 는 서울 기준 12/31 01:00
    late = _msg(2, datetime(2024, 12, 30, 16, 0, tzinfo=timezone.utc))
    early = _msg(1, datetime(2024, 12, 30, 1, 0, tzinfo=timezone.utc))

    seoul = group_messages([late, early], "Asia/Seoul")
    utc = group_messages([late, early], "UTC")

    assert [g.date_key for g in seoul] == ["2024-12-31", "2024-12-30"]
    assert [g.date_key for g in utc] == ["2024-12-30"]


def test_single_message_group_is_trivial_merge():
    ts = datetime(2024, 12, 30, 8, 0, tzinfo=timezone.utc)
    groups = group_messages([_msg(42, ts, "단일 메시지")], "Asia/Seoul")

    assert groups[0].text == "단일 메시지"
    assert groups[0].representative_id == 42
    assert groups[0].display_date == ts


def test_groups_are_newest_date_first():
    msgs = [
        _msg(1, datetime(2024, 12, 27, 8, 0, tzinfo=timezone.utc)),
        _msg(3, datetime(2024, 12, 30, 8, 0, tzinfo=timezone.utc)),
        _msg(2, datetime(2024, 12, 28, 8, 0, tzinfo=timezone.utc)),
    ]
    groups = group_messages(msgs, "Asia/Seoul")

    assert [g.representative_id for g in groups] == [3, 2, 1]


def test_empty_input():
    assert group_messages([], "Asia/Seoul") == []


def test_naive_timestamp_is_rejected():
    # 그룹핑 타임존으로 변환할 수 없는 시각은 입력 단계에서 거부
    with pytest.raises(ValidationError):
        RawMessage(id=1, timestamp=datetime(2024, 12, 30, 8, 0), text="본문")
