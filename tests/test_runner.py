"""수집 -> 컴파일 -> 저장 1회 실행 테스트"""

from unittest.mock import AsyncMock

import pytest

from common.core.exceptions import ConfigurationError
from stockdigest.core.config import DigestSettings
from stockdigest.services.report.runner import run_daily_digest

from tests.test_compiler import FakeStore


class FakeCollector:
    def __init__(self, messages):
        self.fetch_messages = AsyncMock(return_value=messages)
        self.entered = False
        self.exited = False

    async def __aenter__(self):
        self.entered = True
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.exited = True


def _settings(**overrides) -> DigestSettings:
    values = dict(
        TELEGRAM_API_ID=12345,
        TELEGRAM_API_HASH="hash",
        TELEGRAM_SESSION="session",
        TELEGRAM_CHANNEL="mongdang",
        TELEGRAM_FETCH_LIMIT=200,
    )
    values.update(overrides)
    return DigestSettings(**values)


@pytest.mark.asyncio
async def test_run_daily_digest(raw_messages, now):
    collector = FakeCollector(raw_messages)
    store = FakeStore()

    result = await run_daily_digest(_settings(), store, collector=collector, now=now)

    collector.fetch_messages.assert_awaited_once_with("mongdang", limit=200)
    assert collector.entered and collector.exited
    assert result.processed == [101]
    assert store.rows[0]["content"].startswith("<h2")


@pytest.mark.asyncio
async def test_missing_config_stops_before_fetch(raw_messages):
    collector = FakeCollector(raw_messages)

    with pytest.raises(ConfigurationError) as exc_info:
        await run_daily_digest(_settings(TELEGRAM_SESSION=None), FakeStore(), collector=collector)

    assert "TELEGRAM_SESSION" in str(exc_info.value)
    collector.fetch_messages.assert_not_awaited()
    assert not collector.entered
