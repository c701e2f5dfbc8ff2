from contextlib import contextmanager
from functools import lru_cache
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from loguru import logger

from common.core.config import settings


@lru_cache()
def get_engine() -> Engine:
    """설정의 DATABASE_URL로 엔진을 생성 (프로세스당 1회)"""
    url = settings.DATABASE_URL
    engine_args = {"pool_pre_ping": True}
    if url.startswith("postgresql"):
        engine_args.update({
            "pool_use_lifo": True,     # LIFO 방식으로 유휴 연결 감소
            "pool_size": 5,
            "max_overflow": 10,
            "pool_timeout": 30,
            "pool_recycle": 300,
        })
    engine = create_engine(url, **engine_args)
    logger.info(f"SQLAlchemy 엔진 생성: {engine.url.render_as_string(hide_password=True)}")
    return engine


@lru_cache()
def get_session_factory() -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=get_engine())


@contextmanager
def get_db() -> Generator[Session, None, None]:
    """데이터베이스 세션 생성"""
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


def get_db_dependency() -> Generator[Session, None, None]:
    """FastAPI 의존성용 세션 프로바이더"""
    with get_db() as db:
        yield db
