# ------------------------------------------------------------
# models.py — SQLAlchemy ORM 모델 정의 (users/movies)
# ------------------------------------------------------------

from sqlalchemy import Column, Integer, String, JSON
from .db import Base  # Declarative Base: 모든 ORM 모델의 베이스 클래스


# ------------------------------
# User: 사용자 테이블
# ------------------------------
class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100))  # 사용자 표시 이름 (선택)

    # 로그인 ID. 중복 가입은 유니크 인덱스가 막음 (IntegrityError → DuplicateKey)
    username = Column(String(100), unique=True, index=True, nullable=False)

    # bcrypt 해시만 저장. 평문 비밀번호는 저장/반환하지 않음
    password_hash = Column(String(128), nullable=False)


# ------------------------------
# Movie: 영화 테이블
# ------------------------------
class Movie(Base):
    __tablename__ = "movies"

    id = Column(Integer, primary_key=True, index=True)

    # 조회/수정/삭제의 외부 키로 쓰이지만 유니크 제약은 없음
    title = Column(String(255), nullable=False, index=True)

    # 개봉일. "2020" 같은 연도 또는 날짜 문자열
    release_date = Column(String(32), nullable=False)

    genre = Column(String(100), nullable=False)

    # 배우 이름 목록 (최소 3명, 생성 시 라우터에서 검증)
    actors = Column(JSON, nullable=False, default=list)
