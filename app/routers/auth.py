# -----------------------------------------------------------
# auth.py — 회원가입/로그인 엔드포인트
# -----------------------------------------------------------

import logging
from typing import Optional

from fastapi import APIRouter, Depends

from ..errors import Conflict, DuplicateKey, ServerError, StorageError, Unauthorized, ValidationError
from ..repository import UserRepository, get_user_repo
from ..schemas import SignupIn, SigninIn
from ..security import AUTH_SCHEME, TokenService, get_token_service

log = logging.getLogger(__name__)

# 원래 API와 같이 prefix 없이 /signup, /signin
router = APIRouter(tags=["auth"])


@router.post("/signup", status_code=201)
def signup(payload: SignupIn, users: UserRepository = Depends(get_user_repo)):
    """
    새 사용자를 등록합니다.
    - username/password 누락 → 400 (DB에 아무것도 쓰지 않음)
    - username 중복 → 409 (기존 레코드 유지)
    """
    if not payload.username or not payload.password:
        raise ValidationError("Please include both username and password to signup.")

    try:
        users.create(payload.name, payload.username, payload.password)
    except DuplicateKey:
        log.info("Signup rejected, username %r already exists", payload.username)
        raise Conflict("A user with that username already exists.")
    except StorageError:
        log.exception("Signup failed for %r", payload.username)
        raise ServerError()

    log.info("User %r signed up", payload.username)
    return {"success": True, "msg": "Successfully created new user."}


@router.post("/signin")
def signin(
    payload: Optional[SigninIn] = None,
    users: UserRepository = Depends(get_user_repo),
    tokens: TokenService = Depends(get_token_service),
):
    """
    로그인 후 1시간짜리 토큰을 "JWT <token>" 형태로 반환합니다.
    이후 요청은 Authorization 헤더에 이 값을 그대로 넣으면 됩니다.
    """
    # 바디가 없으면 빈 객체로 취급 → 401
    payload = payload or SigninIn()
    try:
        user = users.find_by_username(payload.username)
    except StorageError:
        log.exception("Signin lookup failed for %r", payload.username)
        raise ServerError()

    if user is None:
        raise Unauthorized("Authentication failed. User not found.")
    if not users.verify_password(user, payload.password):
        log.info("Signin rejected for %r: wrong password", user.username)
        raise Unauthorized("Authentication failed. Incorrect password.")

    token = tokens.issue(user.id, user.username)
    log.info("User %r signed in", user.username)
    return {"success": True, "token": f"{AUTH_SCHEME} {token}"}
