from common.core.database import get_engine
from common.models.base import Base
from stockdigest.models import StockNews  # noqa: F401  모든 모델 임포트


def init_db(drop: bool = False):
    """데이터베이스 테이블 초기화"""
    engine = get_engine()
    if drop:
        Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    print("Database tables have been initialized.")


if __name__ == "__main__":
    init_db()
