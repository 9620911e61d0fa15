from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List

# JSON에서는 releaseDate(camelCase), 파이썬/DB에서는 release_date
_RELEASE_DATE_IN = AliasChoices("releaseDate", "release_date")


def _date_to_str(value):
    # 2020 같은 숫자 연도도 문자열로 저장
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


# ------------------------------------------------------------
# SignupIn / SigninIn: 인증 요청 바디
# ------------------------------------------------------------
# 필드 누락은 422가 아니라 라우터에서 400으로 응답해야 하므로 모두 Optional
class SignupIn(BaseModel):
    name: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None


class SigninIn(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


# ------------------------------------------------------------
# MovieIn: 영화 등록(POST) 바디
# ------------------------------------------------------------
class MovieIn(BaseModel):
    title: Optional[str] = None
    release_date: Optional[str] = Field(None, validation_alias=_RELEASE_DATE_IN)
    genre: Optional[str] = None
    actors: Optional[List[str]] = None

    @field_validator("release_date", mode="before")
    @classmethod
    def normalize_release_date(cls, value):
        return _date_to_str(value)

    def is_complete(self) -> bool:
        """title/releaseDate/genre가 비어있지 않고 배우가 3명 이상인지."""
        return bool(
            self.title
            and self.release_date
            and self.genre
            and self.actors is not None
            and len(self.actors) >= 3
        )


# ------------------------------------------------------------
# MovieUpdate: 영화 수정(PUT) 바디 — 보낸 필드만 반영
# ------------------------------------------------------------
class MovieUpdate(BaseModel):
    title: Optional[str] = None
    release_date: Optional[str] = Field(None, validation_alias=_RELEASE_DATE_IN)
    genre: Optional[str] = None
    actors: Optional[List[str]] = None

    @field_validator("release_date", mode="before")
    @classmethod
    def normalize_release_date(cls, value):
        return _date_to_str(value)

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude_none=True)


# ------------------------------------------------------------
# MovieOut: 클라이언트로 내보낼 영화 응답 스키마
# ------------------------------------------------------------
class MovieOut(BaseModel):
    id: int
    title: str
    release_date: Optional[str] = Field(
        None, validation_alias=_RELEASE_DATE_IN, serialization_alias="releaseDate"
    )
    genre: Optional[str] = None
    actors: List[str] = []

    # ORM 객체(SQLAlchemy 모델)로부터 필드 맵핑 허용
    model_config = ConfigDict(from_attributes=True)
