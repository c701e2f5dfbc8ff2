from datetime import datetime
from typing import Optional

from loguru import logger

from stockdigest.schemas.report import RunResult
from stockdigest.services.report.compiler import DigestCompiler, ReportStore
from stockdigest.services.telegram.collector import TelegramCollector


async def run_daily_digest(
    settings,
    store: ReportStore,
    collector: Optional[TelegramCollector] = None,
    now: Optional[datetime] = None,
) -> RunResult:
    """수집 -> 컴파일 -> 저장 1회 실행

    설정이 잘못되었으면 메시지를 가져오기 전에 ConfigurationError로 중단한다.
    날짜별 리포트가 모두 만들어진 뒤에야 저장을 시작한다.
    """
    settings.require_telegram()
    compiler = DigestCompiler.from_settings(settings)
    collector = collector or TelegramCollector.from_settings(settings)

    async with collector:
        messages = await collector.fetch_messages(
            settings.TELEGRAM_CHANNEL,
            limit=settings.TELEGRAM_FETCH_LIMIT,
        )

    reports = compiler.compile(messages, now=now)
    logger.info(f"날짜별 리포트 {len(reports)}건 생성")
    return compiler.persist(reports, store)
