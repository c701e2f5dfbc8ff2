"""장마감 리포트 컴파일러

수집된 텔레그램 메시지를 날짜별 리포트로 만드는 파이프라인입니다.

1. 관련 메시지 선별 (최근 N일, 키워드 포함)
2. 날짜별 그룹핑 및 병합
3. 머리말/꼬리말 제거
4. 종목 상세 추출 + 정리 구간 파싱
5. HTML 렌더링
6. 저장소에 날짜별 upsert
"""

from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional, Protocol, Sequence

from loguru import logger

from common.core.exceptions import PersistenceError
from stockdigest.schemas.report import (
    CompiledReport,
    MergedGroup,
    RawMessage,
    Report,
    ReportSource,
    RunResult,
    Section,
)
from stockdigest.services.report.extractor import extract_stock_details
from stockdigest.services.report.merger import group_messages
from stockdigest.services.report.relevance import is_relevant
from stockdigest.services.report.renderer import render_sections
from stockdigest.services.report.summary_parser import parse_summary
from stockdigest.services.report.trimmer import trim_boundaries


class ReportStore(Protocol):
    """리포트 저장소 인터페이스 (id 기준 upsert)

    저장 실패는 PersistenceError로 알린다.
    """

    def upsert(
        self,
        id: int,
        date: str,
        content: str,
        source: str,
        sections: Optional[list] = None,
    ) -> None:
        ...


class DigestCompiler:
    """텔레그램 메시지 -> 날짜별 리포트

    실행마다 새로 만들어 쓰며, 실행 사이에 공유하는 상태는 없습니다.
    """

    def __init__(
        self,
        title_phrase: str,
        keywords: Sequence[str],
        timezone_name: str = "Asia/Seoul",
        window_days: int = 30,
        disclaimer_marker: Optional[str] = "[주의사항]",
    ):
        self.title_phrase = title_phrase
        self.keywords = list(keywords)
        self.timezone_name = timezone_name
        self.window_days = window_days
        self.disclaimer_marker = disclaimer_marker

    @classmethod
    def from_settings(cls, settings) -> "DigestCompiler":
        return cls(
            title_phrase=settings.REPORT_TITLE_PHRASE,
            keywords=settings.RELEVANCE_KEYWORDS,
            timezone_name=settings.GROUPING_TIMEZONE,
            window_days=settings.RECENCY_WINDOW_DAYS,
            disclaimer_marker=settings.DISCLAIMER_MARKER,
        )

    def select_relevant(self, messages: Iterable[RawMessage], now: Optional[datetime] = None) -> List[RawMessage]:
        """최근 window_days 이내이면서 키워드를 포함한 메시지만 남긴다."""
        now = now or datetime.now(timezone.utc)
        cutoff = now - timedelta(days=self.window_days)
        return [
            m for m in messages
            if m.timestamp > cutoff and is_relevant(m.text, self.keywords)
        ]

    def format_sections(self, text: str) -> Optional[List[Section]]:
        """종목 상세를 추출하고 정리 구간을 파싱. 정리 구간이 없으면 None"""
        details = extract_stock_details(text)
        return parse_summary(text, details)

    def compile_group(self, group: MergedGroup) -> CompiledReport:
        content = trim_boundaries(group.text, self.title_phrase, self.disclaimer_marker)

        report = None
        try:
            sections = self.format_sections(content)
        except Exception as e:
            # 포맷팅 실패 시 정리된 원문을 그대로 저장
            logger.exception(f"[{group.date_key}] 리포트 포맷팅 중 오류 발생: {str(e)}")
            sections = None

        if sections is None:
            logger.warning(f"[{group.date_key}] 상승률 TOP30 정리 구간을 찾지 못해 원문을 저장합니다")
        else:
            report = Report(
                id=group.representative_id,
                date=group.display_date,
                sections=sections,
                source=ReportSource.PRIMARY,
            )
            content = render_sections(sections)

        return CompiledReport(
            id=group.representative_id,
            date=group.display_date,
            content=content,
            source=ReportSource.PRIMARY,
            report=report,
        )

    def compile(self, messages: Iterable[RawMessage], now: Optional[datetime] = None) -> List[CompiledReport]:
        """메시지 -> 날짜별 리포트 (최신 날짜부터)"""
        relevant = self.select_relevant(messages, now)
        logger.info(f"관련 메시지 {len(relevant)}개 선별")
        groups = group_messages(relevant, self.timezone_name)
        return [self.compile_group(group) for group in groups]

    def persist(self, reports: Iterable[CompiledReport], store: ReportStore) -> RunResult:
        """날짜별 리포트를 저장. 한 날짜의 실패는 기록만 하고 다음 날짜로 넘어간다."""
        result = RunResult()
        for compiled in reports:
            sections = None
            if compiled.report is not None:
                sections = [s.model_dump(mode="json") for s in compiled.report.sections]
            try:
                store.upsert(
                    id=compiled.id,
                    date=compiled.date.isoformat(),
                    content=compiled.content,
                    source=compiled.source.value,
                    sections=sections,
                )
            except PersistenceError as e:
                logger.error(str(e))
                result.failed.append(compiled.id)
                continue
            except Exception as e:
                # 저장소 구현이 PersistenceError로 감싸지 않은 오류도 해당 날짜만 실패 처리
                logger.exception(f"리포트 {compiled.id} 저장 중 예상하지 못한 오류: {str(e)}")
                result.failed.append(compiled.id)
                continue
            result.processed.append(compiled.id)

        logger.info(f"리포트 저장 완료: 성공 {len(result.processed)}건, 실패 {len(result.failed)}건")
        return result
