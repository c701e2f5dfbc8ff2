#!/usr/bin/env python3
"""장마감 리포트 1회 컴파일

    python -m scripts.compile_reports             # 수집 후 DB 저장
    python -m scripts.compile_reports --dry-run   # 저장 없이 JSON 출력
    python -m scripts.compile_reports --cleanup-since 2025-12-01
"""
import argparse
import asyncio
import json
from datetime import datetime
from typing import List, Optional

import pytz
from loguru import logger

from common.core.database import get_db
from common.core.logger import setup_logging
from stockdigest.core.config import get_settings
from stockdigest.repositories.stock_news_repository import StockNewsRepository
from stockdigest.schemas.report import CompiledReport
from stockdigest.services.report.compiler import DigestCompiler
from stockdigest.services.report.runner import run_daily_digest
from stockdigest.services.telegram.collector import TelegramCollector


async def dry_run(settings) -> List[CompiledReport]:
    settings.require_telegram()
    async with TelegramCollector.from_settings(settings) as collector:
        messages = await collector.fetch_messages(settings.TELEGRAM_CHANNEL, limit=settings.TELEGRAM_FETCH_LIMIT)
    return DigestCompiler.from_settings(settings).compile(messages)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="장마감 리포트 컴파일")
    parser.add_argument("--dry-run", action="store_true", help="저장하지 않고 결과를 JSON으로 출력")
    parser.add_argument("--cleanup-since", help="이 날짜(YYYY-MM-DD) 이후 리포트를 삭제하고 종료")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None):
    args = parse_args(argv)
    settings = get_settings()
    setup_logging(settings)

    if args.dry_run:
        reports = asyncio.run(dry_run(settings))
        print(json.dumps([r.model_dump(mode="json", exclude={"report"}) for r in reports], ensure_ascii=False, indent=2))
        return

    with get_db() as db:
        repository = StockNewsRepository(db)
        if args.cleanup_since:
            tz = pytz.timezone(settings.GROUPING_TIMEZONE)
            since = tz.localize(datetime.strptime(args.cleanup_since, "%Y-%m-%d"))
            repository.delete_since(since)
            return

        result = asyncio.run(run_daily_digest(settings, repository))
        logger.info(f"Success: {result.success_count}, Failed: {len(result.failed)}")


if __name__ == "__main__":
    main()
