"""텔레그램 메시지 수집 서비스

Telethon 클라이언트로 장마감 시황 채널의 최근 메시지를 가져와
RawMessage 목록으로 변환합니다. 클라이언트는 실행마다 새로 만들어 주입합니다.
"""

from datetime import timezone
from typing import List, Optional

from loguru import logger
from telethon import TelegramClient
from telethon.sessions import StringSession
from telethon.tl.types import Message

from common.core.exceptions import TransportError
from stockdigest.schemas.report import RawMessage


class TelegramCollector:
    """텔레그램 채널 메시지 수집기

    사용 예:
        async with TelegramCollector.from_settings(settings) as collector:
            messages = await collector.fetch_messages(settings.TELEGRAM_CHANNEL)
    """

    def __init__(
        self,
        api_id: int,
        api_hash: str,
        session_string: str,
        connection_retries: int = 5,
        client: Optional[TelegramClient] = None,
    ):
        self.client = client or TelegramClient(
            StringSession(session_string),
            api_id,
            api_hash,
            connection_retries=connection_retries,
        )

    @classmethod
    def from_settings(cls, settings) -> "TelegramCollector":
        settings.require_telegram()
        return cls(
            api_id=settings.TELEGRAM_API_ID,
            api_hash=settings.TELEGRAM_API_HASH,
            session_string=settings.TELEGRAM_SESSION,
        )

    async def __aenter__(self) -> "TelegramCollector":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def connect(self) -> None:
        """세션 문자열로 접속. 인증되지 않은 세션이면 TransportError"""
        try:
            await self.client.connect()
        except OSError as e:
            raise TransportError(f"텔레그램 접속 실패: {str(e)}") from e

        if not await self.client.is_user_authorized():
            await self.client.disconnect()
            raise TransportError("텔레그램 인증 실패. 세션이 유효하지 않습니다. create_telegram_session.py로 새 세션을 만드세요.")
        logger.info("텔레그램 클라이언트 접속 성공")

    async def close(self) -> None:
        if self.client.is_connected():
            await self.client.disconnect()
            logger.info("텔레그램 클라이언트 연결 종료")

    @staticmethod
    def to_raw_message(message: Message) -> Optional[RawMessage]:
        """텍스트가 있는 메시지만 RawMessage로 변환"""
        text = message.message
        if not text:
            return None
        timestamp = message.date
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        return RawMessage(id=message.id, timestamp=timestamp, text=text)

    async def fetch_messages(self, channel: str, limit: int = 1000) -> List[RawMessage]:
        """채널의 최근 메시지를 최대 limit개 가져온다 (최신순)."""
        logger.info(f"채널 '{channel}' 메시지 수집 시작 (limit={limit})")
        try:
            messages = await self.client.get_messages(channel, limit=limit)
        except (ValueError, OSError) as e:
            raise TransportError(f"채널 '{channel}' 메시지 조회 실패: {str(e)}") from e

        raw_messages = []
        for message in messages:
            raw = self.to_raw_message(message)
            if raw is not None:
                raw_messages.append(raw)
        logger.info(f"채널 '{channel}' : 텍스트 메시지 {len(raw_messages)}개 수집")
        return raw_messages
