from datetime import datetime
from typing import Optional

from sqlalchemy import JSON, BigInteger, DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from common.models.base import Base


class StockNews(Base):
    """날짜별 장마감 리포트

    Attributes:
        id (int): 대표 메시지 ID (보조 소스는 YYYYMMDD999)
        date (datetime): 표시 날짜 (가장 최근 메시지 시각)
        content (str): 렌더링된 HTML 또는 정리된 원문
        source (str): 리포트 소스 (primary, secondary)
        sections (list): 카테고리/제목 구간 구조 데이터. 원문 저장 시 None
    """
    __tablename__ = 'stock_news'

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
    content: Mapped[str] = mapped_column(Text)
    source: Mapped[str] = mapped_column(String(32), default='primary')
    sections: Mapped[Optional[list]] = mapped_column(JSON, nullable=True)

    __table_args__ = (
        Index('ix_stock_news_source_date', 'source', 'date'),
    )
