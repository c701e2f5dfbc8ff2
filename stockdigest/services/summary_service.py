"""시황 영상 요약 서비스 (보조 소스)

주식 시황 영상 자막을 Gemini로 요약해 장마감 리포트와 같은 HTML 문서로 만듭니다.
자막 수집은 호출하는 쪽에서 담당합니다.
"""

from datetime import date, datetime, time
from typing import Optional

import google.generativeai as genai
import pytz
from loguru import logger
from tenacity import retry, stop_after_attempt, wait_exponential

from common.core.exceptions import ConfigurationError, SummaryError
from stockdigest.schemas.report import CompiledReport, ReportSource

MAX_TRANSCRIPT_CHARS = 30000

SUMMARY_PROMPT = """
다음은 주식 관련 유튜브 영상의 자막 스크립트입니다.
이 내용을 바탕으로 "오늘의 주식 시황 및 주요 종목 분석" 리포트를 작성해주세요.

형식은 다음과 같이 HTML 태그를 사용하여 가독성 있게 작성해주세요:

<h2>1. 시장 요약</h2>
<p>시장 흐름과 주요 이슈 요약...</p>

<h2>2. 주요 섹터 및 종목</h2>
<ul>
  <li><strong>섹터명:</strong> 관련 내용 및 종목...</li>
</ul>

<h2>3. 투자 인사이트</h2>
<p>전문가 의견 요약...</p>

---
스크립트:
{transcript}
"""


def secondary_report_id(report_date: date) -> int:
    """보조 소스 리포트 ID. 날짜당 하나 (예: 20241230999)"""
    return int(report_date.strftime("%Y%m%d") + "999")


class SummaryService:
    """Gemini 기반 자막 요약"""

    def __init__(self, api_key: Optional[str], model_name: str = "gemini-1.5-pro", timezone_name: str = "Asia/Seoul"):
        if not api_key:
            raise ConfigurationError("GEMINI_API_KEY가 설정되지 않았습니다")
        genai.configure(api_key=api_key)
        self.model = genai.GenerativeModel(
            model_name=model_name,
            generation_config=genai.GenerationConfig(temperature=0.3, max_output_tokens=4096),
        )
        self.tz = pytz.timezone(timezone_name)
        logger.info(f"요약 서비스 초기화 완료: {model_name}")

    @classmethod
    def from_settings(cls, settings) -> "SummaryService":
        return cls(
            api_key=settings.GEMINI_API_KEY,
            model_name=settings.GEMINI_MODEL_NAME,
            timezone_name=settings.GROUPING_TIMEZONE,
        )

    @retry(
        stop=stop_after_attempt(3),  # 최대 3번 재시도
        wait=wait_exponential(multiplier=1, min=4, max=10),  # 지수 백오프
        reraise=True,
    )
    async def _generate(self, prompt: str) -> str:
        response = await self.model.generate_content_async(prompt)
        return response.text

    async def summarize(self, transcript: str, report_date: date) -> CompiledReport:
        """자막 -> 보조 소스 리포트"""
        transcript = (transcript or "").strip()
        if not transcript:
            raise SummaryError("요약할 자막이 비어 있습니다")

        prompt = SUMMARY_PROMPT.format(transcript=transcript[:MAX_TRANSCRIPT_CHARS])
        try:
            summary_html = await self._generate(prompt)
        except Exception as e:
            logger.error(f"요약 생성 실패: {str(e)}")
            raise SummaryError(f"요약 생성 실패: {str(e)}") from e

        if not summary_html or not summary_html.strip():
            raise SummaryError("요약 결과가 비어 있습니다")

        report_datetime = self.tz.localize(datetime.combine(report_date, time.min))
        return CompiledReport(
            id=secondary_report_id(report_date),
            date=report_datetime,
            content=summary_html.strip(),
            source=ReportSource.SECONDARY,
        )
