# ---------------------------------------------
# movies.py — 영화 CRUD 엔드포인트 (토큰 필요)
# ---------------------------------------------

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..errors import NotFound, ServerError, StorageError, ValidationError
from ..repository import MovieRepository, get_movie_repo
from ..schemas import MovieIn, MovieOut, MovieUpdate
from ..security import TokenUser, get_current_user

log = logging.getLogger(__name__)

# - prefix: /movies
# - dependencies: 모든 엔드포인트 앞에서 토큰 검증. 실패하면 핸들러/DB까지 가지 않음
router = APIRouter(
    prefix="/movies",
    tags=["movies"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=List[MovieOut])
def list_movies(movies: MovieRepository = Depends(get_movie_repo)):
    """
    전체 영화 목록 (삽입 순서).
    - 목록이 비어 있으면 200이 아니라 404 + [] 로 응답 (기존 클라이언트와의 계약)
    """
    try:
        rows = movies.list_all()
    except StorageError:
        log.exception("Listing movies failed")
        raise ServerError("Error fetching movies.")

    if not rows:
        return JSONResponse(status_code=404, content=[])
    return rows


@router.post("", status_code=201)
def create_movie(
    payload: MovieIn,
    movies: MovieRepository = Depends(get_movie_repo),
    user: TokenUser = Depends(get_current_user),
):
    if not payload.is_complete():
        raise ValidationError("Missing required movie fields or less than 3 actors.")

    try:
        movie = movies.create(payload.model_dump())
    except StorageError:
        log.exception("Saving movie %r failed", payload.title)
        raise ServerError("Error saving movie.")

    log.info("Movie %r (id=%s) added by %s", movie.title, movie.id, user.username)
    return {
        "success": True,
        "message": "Movie added successfully.",
        "movie": MovieOut.model_validate(movie),
    }


@router.get("/{title}")
def get_movie(title: str, movies: MovieRepository = Depends(get_movie_repo)):
    try:
        movie = movies.find_by_title(title)
    except StorageError:
        log.exception("Retrieving movie %r failed", title)
        raise ServerError("Error retrieving movie.")

    if movie is None:
        raise NotFound("Movie not found.")
    return {"success": True, "movie": MovieOut.model_validate(movie)}


@router.put("/{title}")
def update_movie(
    title: str,
    payload: Optional[MovieUpdate] = None,
    movies: MovieRepository = Depends(get_movie_repo),
    user: TokenUser = Depends(get_current_user),
):
    """보낸 필드만 덮어씀. 생성 때와 달리 필수 필드/배우 수 검증은 없음."""
    payload = payload or MovieUpdate()
    try:
        movie = movies.update_by_title(title, payload.changes())
    except StorageError:
        log.exception("Updating movie %r failed", title)
        raise ServerError("Error updating movie.")

    if movie is None:
        raise NotFound("Movie not found.")

    log.info("Movie %r (id=%s) updated by %s", title, movie.id, user.username)
    return {
        "success": True,
        "message": "Movie updated successfully.",
        "movie": MovieOut.model_validate(movie),
    }


@router.delete("/{title}")
def delete_movie(
    title: str,
    movies: MovieRepository = Depends(get_movie_repo),
    user: TokenUser = Depends(get_current_user),
):
    try:
        deleted = movies.delete_by_title(title)
    except StorageError:
        log.exception("Deleting movie %r failed", title)
        raise ServerError("Error deleting movie.")

    if not deleted:
        raise NotFound("Movie not found.")

    log.info("Movie %r deleted by %s", title, user.username)
    return {"success": True, "message": "Movie deleted successfully."}


# -----------------------------
# [추가 설명 / 실전 팁]
# -----------------------------
# 1) 예시 요청
#    - GET    /movies                 (Authorization: JWT <token>)
#    - POST   /movies                 {"title": "X", "releaseDate": "2020", "genre": "Drama", "actors": ["A","B","C"]}
#    - GET    /movies/X
#    - PUT    /movies/X               {"genre": "Comedy"}
#    - DELETE /movies/X
#
# 2) 제목 중복
#    - title에는 유니크 제약이 없어서 같은 제목이 여러 개일 수 있습니다.
#      조회/수정/삭제는 가장 먼저 등록된 영화에 적용되고 경고 로그가 남습니다.
