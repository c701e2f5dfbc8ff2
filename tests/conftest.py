from datetime import datetime, timezone
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from common.models.base import Base
from stockdigest.models import StockNews  # noqa: F401
from stockdigest.schemas.report import RawMessage

TITLE = "몽당연필의 장마감 시황"
KEYWORDS = [TITLE, "상승률TOP30", "TOP30 정보 작성자", "상승률 TOP30"]

REPORT_PART_1 = """몽당연필의 장마감 시황 (12/30)

오늘 코스닥은 로봇, 반도체 중심으로 강세를 보였습니다.

상승률TOP30 정보 작성자: 몽당연필

1. 레인보우로보틱스 (29.9%) : 로봇, 시총 3조 2,000억, 삼성전자 지분 확대
2. 한미반도체 (15.2%) : 반도체, 시총 1조 500억, HBM 장비 수주
3. 알테오젠 (12.3%) : 바이오, 시총 900억, 기술이전 기대
4. 레인보우로보틱스 (1.0%) : 중복, 시총 1억
"""

REPORT_PART_2 = """5. 에코프로 (8.1%) : 2차전지, 시총 1300억, 리튬 가격 반등

상승률TOP30 정리
로봇
레인보우로보틱스, 두산로보틱스 (2)
반도체
한미반도체, 한미반도체 등 (1)
제약/바이오
알테오젠(1)
2차전지
에코프로, 엘앤에프 (2)
우주항공
쎄트렉아이, 한화에어로 (2)
개별주
설명 없는 줄

[주의사항]
본 자료는 투자 권유가 아니며 투자 책임은 본인에게 있습니다.
"""


@pytest.fixture
def report_text() -> str:
    """두 메시지를 병합한 하루치 리포트"""
    return REPORT_PART_1 + "\n\n" + REPORT_PART_2


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 12, 31, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def raw_messages() -> list:
    """12/30 KST 리포트 두 부분 + 관련 없는 메시지"""
    return [
        RawMessage(id=102, timestamp=datetime(2024, 12, 30, 8, 1, tzinfo=timezone.utc), text=REPORT_PART_2),
        RawMessage(id=101, timestamp=datetime(2024, 12, 30, 8, 0, tzinfo=timezone.utc), text=REPORT_PART_1),
        RawMessage(id=100, timestamp=datetime(2024, 12, 30, 7, 0, tzinfo=timezone.utc), text="오늘 점심 메뉴 추천"),
    ]


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """테스트용 in-memory SQLite 세션"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """DB 의존성을 테스트 세션으로 바꾼 API 클라이언트"""
    from main import app
    from common.core.database import get_db_dependency

    def _override_db():
        yield db_session

    app.dependency_overrides[get_db_dependency] = _override_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
