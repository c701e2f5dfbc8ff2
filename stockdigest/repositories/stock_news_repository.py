from datetime import datetime
from typing import List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from loguru import logger

from common.core.exceptions import PersistenceError
from stockdigest.models.stock_news import StockNews

_INSERT_BY_DIALECT = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class StockNewsRepository:
    """stock_news 테이블 저장소

    같은 id로 다시 저장하면 행 전체를 교체한다 (부분 병합 없음).
    """

    def __init__(self, db: Session):
        self.db = db

    def _insert(self):
        dialect = self.db.get_bind().dialect.name
        try:
            return _INSERT_BY_DIALECT[dialect]
        except KeyError:
            raise PersistenceError(0, f"지원하지 않는 DB: {dialect}")

    def upsert(
        self,
        id: int,
        date: str,
        content: str,
        source: str,
        sections: Optional[list] = None,
    ) -> None:
        values = {
            "id": id,
            "date": datetime.fromisoformat(date),
            "content": content,
            "source": source,
            "sections": sections,
        }
        stmt = self._insert()(StockNews).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=["id"],
            set_={
                "date": stmt.excluded.date,
                "content": stmt.excluded.content,
                "source": stmt.excluded.source,
                "sections": stmt.excluded.sections,
                "updated_at": func.now(),
            },
        )
        try:
            self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError(id, str(e)) from e
        logger.info(f"리포트 저장: id={id}, date={date}, source={source}")

    def get(self, id: int) -> Optional[StockNews]:
        return self.db.get(StockNews, id)

    def list_recent(self, source: Optional[str] = None, limit: int = 100) -> List[StockNews]:
        """최신 날짜부터 조회"""
        stmt = select(StockNews).order_by(StockNews.date.desc()).limit(limit)
        if source:
            stmt = stmt.where(StockNews.source == source)
        return list(self.db.execute(stmt).scalars().all())

    def delete_since(self, since: datetime) -> int:
        """since 이후 날짜의 리포트를 삭제 (재수집 전 정리용)"""
        try:
            result = self.db.execute(delete(StockNews).where(StockNews.date >= since))
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError(0, str(e)) from e
        logger.info(f"{since.isoformat()} 이후 리포트 {result.rowcount}건 삭제")
        return result.rowcount
