"""로깅 설정 모듈"""

import json
import logging
import sys
from typing import Any

from loguru import logger


class Formatter:
    """로그 포맷터"""
    def __init__(self) -> None:
        self.fmt = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}\n"

    def format(self, record: Any) -> str:
        """로그 메시지 포맷"""
        # 예외 정보가 있는 경우 스택 트레이스 포함
        if record["exception"]:
            return self.fmt + "{exception}\n"
        return self.fmt


def _json_sink_format(record: Any) -> str:
    payload = json.dumps({
        "timestamp": record["time"].strftime("%Y-%m-%d %H:%M:%S"),
        "level": record["level"].name,
        "message": record["message"],
        "module": record["name"],
        "function": record["function"],
        "line": record["line"],
        "exception": str(record["exception"]) if record["exception"] else None,
    }, ensure_ascii=False)
    # JSON 본문의 중괄호가 포맷 문자열로 해석되지 않도록 extra로 넘긴다
    record["extra"]["serialized"] = payload
    return "{extra[serialized]}\n"


def setup_logging(settings) -> None:
    """전역 로깅 설정

    loguru 기본 핸들러를 제거하고 stdout, 파일, JSON 싱크를 설정합니다.
    """
    logger.remove()  # 기본 핸들러 제거
    logger.add(
        sys.stdout,
        format=Formatter().format,
        level="DEBUG" if settings.DEBUG else "INFO",
        colorize=True,
    )

    # 파일 로깅 설정
    if settings.LOG_FILE:
        logger.add(
            settings.LOG_FILE,
            rotation="1 day",    # 매일 로그 파일 교체
            retention="30 days", # 30일간 보관
            compression="zip",   # 이전 로그 압축
            format=Formatter().format,
            level="INFO",
        )

    # JSON 로깅 설정
    if settings.JSON_LOGS:
        logger.add(
            "logs/json/app.json",
            format=_json_sink_format,
            level="INFO",
            rotation="1 day",
            retention="30 days",
            compression="zip",
        )

    # 표준 logging 핸들러 정리
    logging.getLogger("uvicorn.access").handlers = [logging.NullHandler()]
    logging.getLogger("uvicorn.error").handlers = [logging.NullHandler()]
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
