#!/usr/bin/env python3
"""텔레그램 StringSession 발급

    python -m scripts.create_telegram_session

전화번호와 인증 코드를 입력하면 세션 문자열을 출력합니다.
출력된 값을 TELEGRAM_SESSION 환경변수에 저장하면 수집기가 로그인 없이 접속합니다.
"""
import asyncio
import sys

from loguru import logger
from telethon import TelegramClient
from telethon.sessions import StringSession

from stockdigest.core.config import get_settings


async def issue_session_string() -> int:
    settings = get_settings()
    if not settings.TELEGRAM_API_ID or not settings.TELEGRAM_API_HASH:
        logger.error("TELEGRAM_API_ID, TELEGRAM_API_HASH를 먼저 설정하세요")
        return 1

    client = TelegramClient(StringSession(), settings.TELEGRAM_API_ID, settings.TELEGRAM_API_HASH)
    try:
        logger.info("텔레그램 로그인 시작 (전화번호, 인증 코드 입력)")
        await client.start()

        if not await client.is_user_authorized():
            logger.error("인증되지 않았습니다. 다시 시도하세요.")
            return 1

        me = await client.get_me()
        logger.success(f"인증 완료: {me.first_name} (@{me.username})")
        print(f"TELEGRAM_SESSION={client.session.save()}")
        return 0
    finally:
        await client.disconnect()


def main() -> int:
    try:
        return asyncio.run(issue_session_string())
    except KeyboardInterrupt:
        logger.warning("사용자가 프로그램을 중단했습니다.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
