from fastapi import Request
from sqlalchemy import create_engine               # SQLAlchemy 엔진 생성 도구
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker  # 모델 Base 클래스 / 세션 팩토리


# ✅ 모델 정의 시 상속할 Base 클래스 (Declarative 방식 사용)
Base = declarative_base()


def build_engine(database_url: str) -> Engine:
    # SQLite 는 FastAPI 스레드풀에서 같은 커넥션을 공유하므로 스레드 검사 해제
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    return create_engine(database_url, connect_args=connect_args)


def build_session_factory(engine: Engine) -> sessionmaker:
    # ✅ 세션 팩토리: DB 연결에 사용할 세션 생성기 정의
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine: Engine) -> None:
    # 모델 모듈을 import 해야 Base.metadata 에 테이블이 등록됨
    import models.grade_sessions  # noqa: F401
    import models.analytics  # noqa: F401
    import models.feedback  # noqa: F401

    Base.metadata.create_all(bind=engine)


# ==========================================================
# [공통] DB 세션 관리 (앱별 세션 팩토리 사용)
# ==========================================================
def get_db(request: Request):
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
