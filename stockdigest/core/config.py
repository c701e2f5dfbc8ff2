from functools import lru_cache
from typing import List, Optional

import pytz
from pydantic import Field, field_validator

from common.core.config import CommonSettings
from common.core.exceptions import ConfigurationError

TITLE_PHRASE = "몽당연필의 장마감 시황"


class DigestSettings(CommonSettings):
    # 기본 설정
    PROJECT_NAME: str = "StockDigest Telegram Service"
    VERSION: str = "0.1.0"

    # Telegram 설정
    TELEGRAM_API_ID: Optional[int] = None
    TELEGRAM_API_HASH: Optional[str] = None
    TELEGRAM_SESSION: Optional[str] = None  # StringSession 문자열
    TELEGRAM_CHANNEL: Optional[str] = None
    TELEGRAM_FETCH_LIMIT: int = Field(default=1000, ge=1)

    # 리포트 컴파일 설정
    RECENCY_WINDOW_DAYS: int = Field(default=30, ge=1)
    GROUPING_TIMEZONE: str = "Asia/Seoul"
    REPORT_TITLE_PHRASE: str = TITLE_PHRASE
    RELEVANCE_KEYWORDS: List[str] = [
        TITLE_PHRASE,
        "상승률TOP30",
        "TOP30 정보 작성자",
        "상승률 TOP30",
    ]
    DISCLAIMER_MARKER: str = "[주의사항]"

    # 화면 표시용 시총 필터 (단위: 억)
    MARKET_CAP_THRESHOLD: int = Field(default=1000, ge=0)

    # 보조 소스 요약 (Gemini)
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL_NAME: str = "gemini-1.5-pro"
    TRANSCRIPT_LANGUAGES: List[str] = ["ko"]  # 자막 언어 우선순위

    @field_validator("GROUPING_TIMEZONE")
    @classmethod
    def _known_timezone(cls, v: str) -> str:
        if v not in pytz.all_timezones_set:
            raise ValueError(f"알 수 없는 타임존: {v}")
        return v

    @field_validator("RELEVANCE_KEYWORDS")
    @classmethod
    def _non_empty_keywords(cls, v: List[str]) -> List[str]:
        keywords = [k for k in v if k]
        if not keywords:
            raise ValueError("RELEVANCE_KEYWORDS가 비어 있습니다")
        return keywords

    def require_telegram(self) -> None:
        """수집 전에 텔레그램 자격 증명을 검증. 누락 시 실행 전체를 중단한다."""
        missing = [
            name for name in ("TELEGRAM_API_ID", "TELEGRAM_API_HASH", "TELEGRAM_SESSION", "TELEGRAM_CHANNEL")
            if not getattr(self, name)
        ]
        if missing:
            raise ConfigurationError(f"텔레그램 설정 누락: {', '.join(missing)}")


@lru_cache()
def get_settings() -> DigestSettings:
    """싱글톤 패턴으로 Settings 인스턴스를 반환"""
    return DigestSettings()


digest_settings = get_settings()
