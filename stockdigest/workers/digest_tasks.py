import asyncio

from celery import Task
from loguru import logger
from sqlalchemy.orm import Session

from common.core.database import get_session_factory
from stockdigest.core.celery_app import celery
from stockdigest.core.config import get_settings
from stockdigest.repositories.stock_news_repository import StockNewsRepository
from stockdigest.services.report.runner import run_daily_digest


class DigestTask(Task):
    """장마감 리포트 컴파일 태스크

    실행마다 DB 세션을 열고 태스크 종료 후 정리합니다.
    """
    _db = None

    @property
    def db(self) -> Session:
        """데이터베이스 세션을 반환합니다."""
        if self._db is None:
            self._db = get_session_factory()()
        return self._db

    def after_return(self, *args, **kwargs):
        """태스크 완료 후 DB 세션을 정리합니다."""
        if self._db is not None:
            self._db.close()
            self._db = None


@celery.task(
    base=DigestTask,
    bind=True,
    name="stockdigest.workers.digest_tasks.compile_daily_digest",
    queue="telegram-processing",
    soft_time_limit=240,
)
def compile_daily_digest(self) -> dict:
    """채널 메시지를 수집해 날짜별 리포트로 저장

    Returns:
        dict: 저장 성공/실패한 리포트 ID 목록
    """
    logger.warning('=' * 100)
    logger.warning("[Digest] compile_daily_digest 실행")

    settings = get_settings()
    store = StockNewsRepository(self.db)

    # 새로운 이벤트 루프 생성 및 설정
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        result = loop.run_until_complete(run_daily_digest(settings, store))
    except Exception as e:
        logger.exception(f"리포트 컴파일 중 오류 발생: {str(e)}")
        raise
    finally:
        loop.close()

    logger.info(f"총 {result.success_count}개의 리포트 저장 완료")
    return result.model_dump()
