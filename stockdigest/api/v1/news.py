"""
장마감 리포트 API 라우터.

저장된 날짜별 리포트를 조회하고, 요청 시 시총 필터를 적용한 문서를 다시 렌더링합니다.
보조 소스(시황 영상 요약) 등록 엔드포인트도 제공합니다.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from loguru import logger
from pydantic import TypeAdapter, ValidationError
from sqlalchemy.orm import Session

from common.core.database import get_db_dependency
from common.core.exceptions import (
    ConfigurationError,
    InvalidVideoUrlError,
    PersistenceError,
    SummaryError,
    TranscriptError,
)
from stockdigest.core.config import DigestSettings, get_settings
from stockdigest.models.stock_news import StockNews
from stockdigest.repositories.stock_news_repository import StockNewsRepository
from stockdigest.schemas.news import NewsItem, NewsListResponse, SummaryRequest, SummaryResponse
from stockdigest.schemas.report import Report, ReportSource, Section
from stockdigest.services.report.market_cap import filter_by_market_cap
from stockdigest.services.report.renderer import render_report
from stockdigest.services.summary_service import SummaryService
from stockdigest.services.transcript_service import TranscriptFetcher

news_router = APIRouter(prefix="/news", tags=["장마감 리포트"])

_sections_adapter = TypeAdapter(list[Section])

THEME_LIMIT = 2


def get_repository(db: Session = Depends(get_db_dependency)) -> StockNewsRepository:
    return StockNewsRepository(db)


def get_summary_service(settings: DigestSettings = Depends(get_settings)) -> SummaryService:
    try:
        return SummaryService.from_settings(settings)
    except ConfigurationError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))


def top_themes(report: Report, limit: int = THEME_LIMIT) -> List[str]:
    """앞쪽 카테고리의 이모지 (달력 칸에 표시)"""
    return [block.emoji for block in report.categories[:limit]]


def to_news_item(row: StockNews, min_cap: Optional[int]) -> NewsItem:
    """저장된 행 -> 화면용 항목. 구조 데이터가 있을 때만 시총 필터와 테마 추출을 적용한다."""
    item = NewsItem(id=row.id, date=row.date, content=row.content, source=ReportSource(row.source))
    if row.sections is None or item.source != ReportSource.PRIMARY:
        return item

    try:
        sections = _sections_adapter.validate_python(row.sections)
    except ValidationError as e:
        logger.warning(f"리포트 {row.id}의 구조 데이터를 읽지 못해 원본을 표시합니다: {str(e)}")
        return item

    report = Report(id=row.id, date=row.date, sections=sections, source=item.source)
    if min_cap is None:
        return item.model_copy(update={"themes": top_themes(report)})

    filtered = filter_by_market_cap(report, min_cap)
    return item.model_copy(update={
        "content": render_report(filtered),
        "filtered": True,
        "themes": top_themes(filtered),
    })


@news_router.get("", response_model=NewsListResponse)
def list_news(
    source: Optional[ReportSource] = Query(None, description="리포트 소스"),
    min_cap: Optional[int] = Query(None, ge=0, description="시총 하한 (억)"),
    filter: bool = Query(False, description="기본 시총 하한 적용"),
    limit: int = Query(100, ge=1, le=500),
    repository: StockNewsRepository = Depends(get_repository),
    settings: DigestSettings = Depends(get_settings),
) -> NewsListResponse:
    """저장된 리포트를 최신 날짜부터 조회"""
    if min_cap is None and filter:
        min_cap = settings.MARKET_CAP_THRESHOLD

    rows = repository.list_recent(source=source.value if source else None, limit=limit)
    items = [to_news_item(row, min_cap) for row in rows]
    return NewsListResponse(items=items, total_count=len(items))


def get_transcript_fetcher(settings: DigestSettings = Depends(get_settings)) -> TranscriptFetcher:
    return TranscriptFetcher.from_settings(settings)


@news_router.post("/summaries", response_model=SummaryResponse, status_code=status.HTTP_201_CREATED)
async def create_summary(
    request: SummaryRequest,
    repository: StockNewsRepository = Depends(get_repository),
    summary_service: SummaryService = Depends(get_summary_service),
    transcript_fetcher: TranscriptFetcher = Depends(get_transcript_fetcher),
) -> SummaryResponse:
    """시황 영상 자막을 요약해 보조 소스 리포트로 저장

    자막 전문이 오면 그대로 쓰고, 없으면 영상 URL에서 자막을 가져온다.
    """
    transcript = request.transcript
    if not (transcript or "").strip():
        try:
            transcript = await transcript_fetcher.fetch_transcript(request.url)
        except InvalidVideoUrlError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
        except TranscriptError as e:
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))

    try:
        compiled = await summary_service.summarize(transcript, request.date)
    except SummaryError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))

    try:
        repository.upsert(
            id=compiled.id,
            date=compiled.date.isoformat(),
            content=compiled.content,
            source=compiled.source.value,
        )
    except PersistenceError as e:
        logger.error(str(e))
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="리포트 저장에 실패했습니다")

    return SummaryResponse(ok=True, id=compiled.id, content=compiled.content)
