"""리포트 조회/요약 API 요청·응답 모델"""

from datetime import date as Date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from stockdigest.schemas.report import ReportSource


class NewsItem(BaseModel):
    """화면에 표시할 리포트"""
    id: int = Field(..., description="리포트 ID")
    date: datetime = Field(..., description="표시 날짜")
    content: str = Field(..., description="HTML 문서 또는 정리된 원문")
    source: ReportSource = Field(..., description="리포트 소스")
    filtered: bool = Field(False, description="시총 필터 적용 여부")
    themes: List[str] = Field(default_factory=list, description="달력 표시용 대표 테마 이모지 (최대 2개)")


class NewsListResponse(BaseModel):
    items: List[NewsItem]
    total_count: int


class SummaryRequest(BaseModel):
    """시황 영상 요약 요청. url 또는 자막 전문 중 하나는 있어야 한다."""
    url: Optional[str] = Field(None, description="유튜브 영상 URL")
    transcript: Optional[str] = Field(None, description="영상 자막 전문 (있으면 URL 대신 사용)")
    date: Date = Field(..., description="리포트 날짜 (YYYY-MM-DD)")

    @model_validator(mode="after")
    def _url_or_transcript(self) -> "SummaryRequest":
        if not (self.url or "").strip() and not (self.transcript or "").strip():
            raise ValueError("url 또는 transcript가 필요합니다")
        return self

    class Config:
        json_schema_extra = {
            "example": {
                "url": "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
                "date": "2024-12-30",
            }
        }


class SummaryResponse(BaseModel):
    ok: bool
    id: int
    content: str
