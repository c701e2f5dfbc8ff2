import os
from typing import ClassVar, Optional
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings
from loguru import logger


def detect_file_encoding(file_path):
    """파일의 인코딩을 자동으로 감지"""
    import chardet

    with open(file_path, 'rb') as file:
        raw = file.read()
        result = chardet.detect(raw)
        return result['encoding'] or 'utf-8'


class CommonSettings(BaseSettings):
    # 환경 설정
    ENV: str = os.getenv("ENV", "development")  # development 또는 production
    PROJECT_NAME: str = "StockDigest"
    API_V1_STR: str = "/api/v1"

    # 데이터베이스
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "stockdigest"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: str = "5432"
    # 테스트/로컬 실행용. 지정하면 POSTGRES_* 조합 대신 사용
    DATABASE_URL_OVERRIDE: Optional[str] = None

    @property
    def DATABASE_URL(self) -> str:
        """데이터베이스 URL을 동적으로 생성"""
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE
        return f"postgresql+psycopg2://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    # Redis 설정
    REDIS_URL: str = "redis://localhost:6379"

    @property
    def CELERY_BROKER_URL(self) -> str:
        return self.REDIS_URL + "/0"

    @property
    def CELERY_RESULT_BACKEND(self) -> str:
        return self.REDIS_URL + "/0"

    # 로깅
    DEBUG: bool = False
    LOG_FILE: Optional[str] = None
    JSON_LOGS: bool = False
    TZ: str = "Asia/Seoul"

    # 환경 변수 파일 설정
    _env: ClassVar[str] = os.getenv("ENV")
    env_file: ClassVar[str] = ".env.development" if _env == "development" else ".env.production"

    model_config = {
        "env_file": env_file,
        "case_sensitive": True,
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    def __init__(self, **kwargs):
        env_file = self.model_config["env_file"]
        if os.path.exists(env_file):
            self.model_config["env_file_encoding"] = detect_file_encoding(env_file)
        super().__init__(**kwargs)

    @field_validator("POSTGRES_PORT", mode="before")
    @classmethod
    def _port_as_str(cls, v):
        return str(v)


@lru_cache()
def get_settings() -> CommonSettings:
    logger.info(f"Loading settings for environment: {os.getenv('ENV', 'development')}")
    return CommonSettings()


settings = get_settings()
