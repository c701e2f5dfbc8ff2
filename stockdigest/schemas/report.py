"""
장마감 리포트 스키마.

텔레그램 원본 메시지부터 카테고리별로 정리된 리포트까지,
파이프라인 각 단계에서 주고받는 데이터 모델을 정의합니다.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field


class ReportSource(str, Enum):
    """리포트 소스"""
    PRIMARY = "primary"       # 텔레그램 장마감 시황
    SECONDARY = "secondary"   # 시황 영상 요약


class RawMessage(BaseModel):
    """전송 계층에서 받은 원본 메시지"""
    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="소스가 부여한 단조 증가 메시지 ID")
    timestamp: AwareDatetime = Field(..., description="메시지 작성 시각 (timezone-aware)")
    text: str = Field(..., description="메시지 본문")


class StockDetail(BaseModel):
    """번호 목록에서 추출한 종목 상세"""
    model_config = ConfigDict(frozen=True)

    name: str
    rate: str = Field(..., description="상승률 텍스트 (원문 그대로)")
    market_cap_text: str = Field(..., description="시총 텍스트 (예: 1300억)")


class StockEntry(BaseModel):
    """카테고리에 포함된 종목 한 줄 (StockDetail의 값 복사본)"""
    model_config = ConfigDict(frozen=True)

    name: str
    rate: str
    market_cap_text: str


class CategoryBlock(BaseModel):
    """테마 카테고리와 소속 종목"""
    kind: Literal["category"] = "category"
    label: str
    emoji: str
    stocks: List[StockEntry] = Field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.stocks)


class HeadingBlock(BaseModel):
    """종목 목록 없이 제목만 표시하는 구간 (개별주, 기타 등)"""
    kind: Literal["heading"] = "heading"
    label: str


Section = Annotated[Union[CategoryBlock, HeadingBlock], Field(discriminator="kind")]


class Report(BaseModel):
    """하루치 리포트"""
    id: int = Field(..., description="대표 ID (가장 오래된 메시지의 ID)")
    date: datetime = Field(..., description="표시 날짜 (가장 최근 메시지의 시각)")
    sections: List[Section] = Field(default_factory=list)
    source: ReportSource = ReportSource.PRIMARY

    @property
    def categories(self) -> List[CategoryBlock]:
        return [s for s in self.sections if isinstance(s, CategoryBlock)]


class MergedGroup(BaseModel):
    """같은 날짜로 묶여 병합된 메시지 묶음"""
    date_key: str = Field(..., description="그룹핑 타임존 기준 YYYY-MM-DD")
    representative_id: int
    display_date: datetime
    text: str
    message_ids: List[int] = Field(default_factory=list)


class CompiledReport(BaseModel):
    """저장 직전의 리포트. 요약 구간을 찾지 못하면 report는 None"""
    id: int
    date: datetime
    content: str
    source: ReportSource = ReportSource.PRIMARY
    report: Optional[Report] = None


class RunResult(BaseModel):
    """한 번의 컴파일 실행 결과"""
    processed: List[int] = Field(default_factory=list)
    failed: List[int] = Field(default_factory=list)

    @property
    def success_count(self) -> int:
        return len(self.processed)
