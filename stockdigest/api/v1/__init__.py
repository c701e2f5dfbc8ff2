"""API 라우터 초기화

이 모듈은 FastAPI 라우터들을 초기화하고 등록합니다.
"""

from fastapi import APIRouter
from loguru import logger

from stockdigest.api.v1.news import news_router

# API v1 라우터
api_router_stockdigest = APIRouter(prefix="/stockdigest", tags=["stockdigest"])

# 장마감 리포트 라우터 등록
logger.info("장마감 리포트 라우터 등록")
api_router_stockdigest.include_router(news_router)
