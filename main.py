from contextlib import asynccontextmanager
import os

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from common.core.exceptions import DigestError
from common.core.logger import setup_logging
from stockdigest.core.config import digest_settings
from stockdigest.api.v1 import api_router_stockdigest


def LoadEnvGlobal():
    # ENV에 따른 환경변수 파일 로드
    env = os.getenv("ENV", "development")
    env_file = f".env.{env}"

    logger.info(f"[LoadEnvGlobal] Loading environment : {env_file}")
    if os.path.exists(env_file):
        load_dotenv(env_file, override=True)
    else:
        logger.warning(f"Environment file {env_file} not found!")


LoadEnvGlobal()
setup_logging(digest_settings)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """애플리케이션 라이프사이클 관리"""
    logger.info("애플리케이션 시작됨")
    yield
    logger.info("애플리케이션 종료됨")


app = FastAPI(
    title=digest_settings.PROJECT_NAME,
    version=digest_settings.VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DigestError)
async def digest_error_handler(request: Request, exc: DigestError):
    logger.error(f"요청 처리 중 오류 발생 ({request.url.path}): {str(exc)}")
    return JSONResponse(status_code=500, content={"ok": False, "status_message": str(exc)})


app.include_router(api_router_stockdigest, prefix=digest_settings.API_V1_STR)


@app.get("/health")
async def health_check():
    return {"status": "ok"}


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=digest_settings.DEBUG)
