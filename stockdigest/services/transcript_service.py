"""시황 영상 자막 수집

유튜브 URL에서 영상 ID를 뽑아 자막을 가져옵니다.
youtube-transcript-api는 동기 라이브러리라서 스레드에서 호출합니다.
"""

import asyncio
import re
from typing import List, Optional, Sequence

from loguru import logger
from youtube_transcript_api import CouldNotRetrieveTranscript, YouTubeTranscriptApi

from common.core.exceptions import InvalidVideoUrlError, TranscriptError

VIDEO_ID_PATTERN = re.compile(r"(?:youtu\.be/|youtube\.com/watch\?v=)([^&?#/]+)")


def extract_video_id(url: str) -> str:
    """youtu.be/<id> 또는 youtube.com/watch?v=<id> 형식만 지원"""
    match = VIDEO_ID_PATTERN.search(url or "")
    if not match:
        raise InvalidVideoUrlError(f"유튜브 영상 URL이 아닙니다: {url}")
    return match.group(1)


class TranscriptFetcher:
    """유튜브 자막 수집기"""

    def __init__(self, languages: Sequence[str] = ("ko",), api: Optional[YouTubeTranscriptApi] = None):
        self.languages: List[str] = list(languages)
        self.api = api or YouTubeTranscriptApi()

    @classmethod
    def from_settings(cls, settings) -> "TranscriptFetcher":
        return cls(languages=settings.TRANSCRIPT_LANGUAGES)

    def fetch(self, video_id: str) -> str:
        """자막 조각을 공백으로 이어 붙인 전문"""
        try:
            transcript = self.api.fetch(video_id, languages=self.languages)
        except CouldNotRetrieveTranscript as e:
            logger.warning(f"영상 {video_id} 자막 수집 실패: {str(e)}")
            raise TranscriptError(f"자막을 가져오지 못했습니다. 자막이 없는 영상일 수 있습니다. ({video_id})") from e

        text = " ".join(snippet.text for snippet in transcript).strip()
        if not text:
            raise TranscriptError(f"영상 {video_id}의 자막이 비어 있습니다")
        logger.info(f"영상 {video_id} 자막 {len(text)}자 수집")
        return text

    async def fetch_transcript(self, url: str) -> str:
        video_id = extract_video_id(url)
        return await asyncio.to_thread(self.fetch, video_id)
