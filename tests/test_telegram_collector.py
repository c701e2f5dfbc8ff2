"""텔레그램 메시지 수집 서비스 테스트"""

from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, Mock

import pytest

from common.core.exceptions import TransportError
from stockdigest.services.telegram.collector import TelegramCollector


def _client(authorized: bool = True, messages=None) -> Mock:
    client = Mock()
    client.connect = AsyncMock()
    client.disconnect = AsyncMock()
    client.is_user_authorized = AsyncMock(return_value=authorized)
    client.is_connected = Mock(return_value=True)
    client.get_messages = AsyncMock(return_value=messages or [])
    return client


def _collector(client) -> TelegramCollector:
    return TelegramCollector(api_id=1, api_hash="hash", session_string="session", client=client)


@pytest.mark.asyncio
async def test_fetch_messages_converts_text_messages():
    messages = [
        SimpleNamespace(id=3, date=datetime(2024, 12, 30, 8, 1, tzinfo=timezone.utc), message="2부"),
        SimpleNamespace(id=2, date=datetime(2024, 12, 30, 8, 0), message="1부"),
        SimpleNamespace(id=1, date=datetime(2024, 12, 30, 7, 0, tzinfo=timezone.utc), message=None),
    ]
    client = _client(messages=messages)

    async with _collector(client) as collector:
        raw = await collector.fetch_messages("mongdang", limit=10)

    client.get_messages.assert_awaited_once_with("mongdang", limit=10)
    client.disconnect.assert_awaited_once()
    assert [m.id for m in raw] == [3, 2]
    # naive 시각은 UTC로 간주
    assert raw[1].timestamp.tzinfo is not None


@pytest.mark.asyncio
async def test_unauthorized_session_raises():
    client = _client(authorized=False)

    with pytest.raises(TransportError):
        await _collector(client).connect()
    client.disconnect.assert_awaited_once()


@pytest.mark.asyncio
async def test_connection_error_raises_transport_error():
    client = _client()
    client.connect.side_effect = OSError("network down")

    with pytest.raises(TransportError):
        await _collector(client).connect()


@pytest.mark.asyncio
async def test_unknown_channel_raises_transport_error():
    client = _client()
    client.get_messages.side_effect = ValueError("Cannot find any entity")

    with pytest.raises(TransportError):
        await _collector(client).fetch_messages("없는채널")
