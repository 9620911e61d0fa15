# ------------------------------------------------------------
# security.py — JWT 발급/검증 및 인증 의존성
# ------------------------------------------------------------

import logging
import os
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from dotenv import load_dotenv
from fastapi import Depends, Header

from .errors import Unauthorized

load_dotenv()

log = logging.getLogger(__name__)

_DEV_SECRET = "change-this-secret-key-before-deploying-movie-catalog"

# 토큰 서명 비밀키. .env 또는 환경변수 SECRET_KEY
SECRET_KEY = os.getenv("SECRET_KEY", _DEV_SECRET)
if SECRET_KEY == _DEV_SECRET:
    log.warning("SECRET_KEY is not set; using the development secret")

ALGORITHM = "HS256"
TOKEN_LIFETIME = timedelta(hours=1)

# Authorization 헤더 스킴. 발급 토큰도 "JWT <token>" 형태로 내려감
AUTH_SCHEME = "JWT"


@dataclass(frozen=True)
class TokenUser:
    """검증된 토큰에서 꺼낸 사용자 신원."""
    id: int
    username: str


class TokenService:
    def __init__(self, secret: str, lifetime: timedelta = TOKEN_LIFETIME):
        self.secret = secret
        self.lifetime = lifetime

    def issue(self, user_id: int, username: str) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "id": user_id,
            "username": username,
            "iat": int(now.timestamp()),
            "exp": int((now + self.lifetime).timestamp()),
        }
        return jwt.encode(payload, self.secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> TokenUser:
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[ALGORITHM],
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError as err:
            raise Unauthorized("Token expired.") from err
        except jwt.InvalidTokenError as err:
            raise Unauthorized() from err

        try:
            return TokenUser(id=int(payload["id"]), username=str(payload["username"]))
        except (KeyError, TypeError, ValueError) as err:
            raise Unauthorized() from err


def get_token_service() -> TokenService:
    return TokenService(SECRET_KEY)


def parse_authorization(header: Optional[str]) -> str:
    """'JWT <token>' 헤더에서 토큰만 꺼냄. 스킴은 대소문자 무시."""
    if not header:
        raise Unauthorized()
    parts = header.split()
    if len(parts) != 2 or parts[0].upper() != AUTH_SCHEME:
        raise Unauthorized()
    return parts[1]


def get_current_user(
    authorization: Optional[str] = Header(None),
    tokens: TokenService = Depends(get_token_service),
) -> TokenUser:
    """
    보호된 라우트 앞단에서 실행되는 인증 단계.
    - 성공: TokenUser 반환 (핸들러가 필요하면 주입받아 사용)
    - 실패: Unauthorized → 401, 핸들러/저장소는 실행되지 않음
    """
    return tokens.verify(parse_authorization(authorization))
