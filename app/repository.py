from __future__ import annotations

import base64
import hashlib
import logging
from typing import List, Optional

import bcrypt
from fastapi import Depends
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from .db import get_db
from .errors import DuplicateKey, StorageError
from .models import Movie, User

log = logging.getLogger(__name__)


def _prehash(password: str) -> bytes:
    # bcrypt는 72바이트까지만 받으므로 sha256 다이제스트(base64, 44바이트)를 넘김
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


class UserRepository:
    """users 테이블 접근. 세션은 get_db 의존성이 열고 닫는다."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, name: Optional[str], username: str, password: str) -> User:
        # bcrypt: 솔트 포함 해시. 평문은 여기서만 잠깐 다룸
        hashed = bcrypt.hashpw(_prehash(password), bcrypt.gensalt()).decode("utf-8")
        user = User(name=name, username=username, password_hash=hashed)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as err:
            # users에 걸린 제약은 username 유니크 인덱스뿐
            self.db.rollback()
            raise DuplicateKey(username) from err
        except SQLAlchemyError as err:
            self.db.rollback()
            raise StorageError(str(err)) from err
        self.db.refresh(user)
        return user

    def find_by_username(self, username: Optional[str]) -> Optional[User]:
        if not username:
            return None
        try:
            return self.db.query(User).filter(User.username == username).one_or_none()
        except SQLAlchemyError as err:
            raise StorageError(str(err)) from err

    @staticmethod
    def verify_password(user: User, candidate: Optional[str]) -> bool:
        if not candidate:
            return False
        # checkpw는 상수 시간 비교
        return bcrypt.checkpw(_prehash(candidate), user.password_hash.encode("utf-8"))


class MovieRepository:
    """movies 테이블 접근. title로 찾고/고치고/지운다."""

    def __init__(self, db: Session):
        self.db = db

    def list_all(self) -> List[Movie]:
        try:
            # 삽입 순서 유지
            return self.db.query(Movie).order_by(Movie.id).all()
        except SQLAlchemyError as err:
            raise StorageError(str(err)) from err

    def find_by_title(self, title: str) -> Optional[Movie]:
        try:
            matches = self.db.query(Movie).filter(Movie.title == title).order_by(Movie.id).all()
        except SQLAlchemyError as err:
            raise StorageError(str(err)) from err
        if not matches:
            return None
        if len(matches) > 1:
            # title에는 유니크 제약이 없음. 가장 먼저 들어온 레코드를 대상으로 함
            log.warning(
                "%d movies share the title %r; using id=%s",
                len(matches), title, matches[0].id,
            )
        return matches[0]

    def create(self, fields: dict) -> Movie:
        movie = Movie(**fields)
        self.db.add(movie)
        self._commit()
        self.db.refresh(movie)
        return movie

    def update_by_title(self, title: str, fields: dict) -> Optional[Movie]:
        movie = self.find_by_title(title)
        if movie is None:
            return None
        for key, value in fields.items():
            setattr(movie, key, value)
        self._commit()
        self.db.refresh(movie)
        return movie

    def delete_by_title(self, title: str) -> bool:
        movie = self.find_by_title(title)
        if movie is None:
            return False
        self.db.delete(movie)
        self._commit()
        return True

    def _commit(self):
        try:
            self.db.commit()
        except SQLAlchemyError as err:
            self.db.rollback()
            raise StorageError(str(err)) from err


# ------------------------------
# FastAPI 의존성: 요청마다 세션 1개에 묶인 저장소 핸들
# ------------------------------
def get_user_repo(db: Session = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_movie_repo(db: Session = Depends(get_db)) -> MovieRepository:
    return MovieRepository(db)
