# -------------------------------------------------------
# db.py — SQLAlchemy 엔진/세션 및 FastAPI 의존성 정의
# -------------------------------------------------------

import logging
import os

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

# .env 파일의 환경변수를 현재 프로세스 환경에 주입
# - 운영환경에서는 .env 대신 실제 환경변수로 주입
load_dotenv()

log = logging.getLogger(__name__)

# -----------------------------
# 환경변수 로딩 (기본값 포함)
# -----------------------------
# NOTE: 기본값은 로컬 개발용. 운영환경에서는 반드시 실제 값으로 대체.
DB_USER = os.getenv("DB_USER", "fastapiid")
DB_PASSWORD = os.getenv("DB_PASSWORD", "fastapipw")
DB_HOST = os.getenv("DB_HOST", "127.0.0.1")
DB_PORT = os.getenv("DB_PORT", "3306")
DB_NAME = os.getenv("DB_NAME", "moviesdb")

# ----------------------------------------------
# SQLAlchemy Database URL
# ----------------------------------------------
# - 기본: 순수 파이썬 드라이버(PyMySQL) + utf8mb4
# - DATABASE_URL이 있으면 그대로 사용 (예: 테스트에서 "sqlite://")
DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"mysql+pymysql://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}?charset=utf8mb4",
)


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        # 인메모리 SQLite는 커넥션마다 DB가 따로 생기므로 커넥션 1개를 공유
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return kwargs
    # - pool_pre_ping=True: 죽은 커넥션 감지/재연결 ('MySQL server has gone away' 방지)
    # - pool_recycle=3600: 커넥션 수명 1시간
    return {"pool_pre_ping": True, "pool_recycle": 3600}


engine = create_engine(DATABASE_URL, **_engine_kwargs(DATABASE_URL))

# ----------------------------------------------
# 세션팩토리
# ----------------------------------------------
# - autocommit=False: 명시적 commit() 전까지 커밋되지 않음
# - autoflush=False: 요청 단위 트랜잭션에서 예측 가능성 확보
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# 모든 ORM 모델이 상속받는 베이스 클래스
Base = declarative_base()


def get_db():
    """
    FastAPI 의존성 주입용 DB 세션 제공자(Generator)

    동작:
    1) 요청이 들어오면 SessionLocal()로 세션 생성
    2) 저장소(repository) 의존성에 주입(yield)
    3) 응답 후 finally 블록에서 세션 종료(close)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """앱 시작 시점에 존재하지 않는 테이블만 생성."""
    # models 모듈을 import해야 Base.metadata에 테이블이 등록됨
    from . import models  # noqa: F401

    log.info("Creating tables on %s", engine.url.render_as_string(hide_password=True))
    Base.metadata.create_all(bind=engine)


def dispose_db():
    """앱 종료 시 커넥션 풀 정리."""
    engine.dispose()


# -------------------------------------------------------
# [추가 설명 / 실전 팁]
# -------------------------------------------------------
# 1) 세션 수명:
#    - 요청 1개 = 세션 1개. 저장소(repository)는 세션을 주입받아 쓰기만 하고,
#      열고 닫는 책임은 get_db에 있습니다.
#
# 2) 유니크 제약:
#    - users.username의 중복 검사는 DB 유니크 인덱스에 맡깁니다.
#      애플리케이션에서 "먼저 조회 후 INSERT" 하지 않으므로 동시 가입 경쟁에도 안전합니다.
#
# 3) 테스트:
#    - DATABASE_URL=sqlite:// 로 두면 인메모리 SQLite + StaticPool로 동작합니다.
