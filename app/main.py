# ------------------------------------------------------------
# main.py — FastAPI 앱/미들웨어/에러 핸들러/라우터 등록 진입점
# ------------------------------------------------------------

import logging
import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .db import dispose_db, init_db
from .errors import ApiError, ServerError, ValidationError
from .routers import auth, movies  # 모듈화된 라우터들(인증/영화)

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
log = logging.getLogger("movie_catalog")

PORT = int(os.getenv("PORT", "8080"))

app = FastAPI(title="Movie Catalog API", version="1.0.0")

# -------------------------------
# CORS: 프런트엔드가 다른 오리진이어도 호출 가능하도록
# -------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# -------------------------------
# 에러 핸들러: 모든 실패를 {"success": false, ...} 형태로
# -------------------------------
@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # 깨진 JSON/타입 불일치는 422 대신 400
    # 입력값(input)에 비밀번호가 있을 수 있으므로 위치와 에러 타입만 남김
    problems = [(e["loc"], e["type"]) for e in exc.errors()]
    log.info("Rejected %s %s: %s", request.method, request.url.path, problems)
    err = ValidationError()
    return JSONResponse(status_code=err.status_code, content=err.to_body())


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    # 내부 정보는 로그에만 남기고 클라이언트에는 일반 메시지
    log.exception("Unhandled error on %s %s", request.method, request.url.path)
    err = ServerError()
    return JSONResponse(status_code=err.status_code, content=err.to_body())


# -------------------------------
# 라우터 등록
# - auth:   /signup, /signin
# - movies: /movies, /movies/{title}
# -------------------------------
app.include_router(auth.router)
app.include_router(movies.router)


# -------------------------------
# 상태 확인(헬스체크)용 루트 엔드포인트 (인증 불필요)
# -------------------------------
@app.get("/")
def root():
    return {"ok": True, "service": "movie-catalog"}


# -------------------------------
# 수명주기: 시작 시 테이블 생성, 종료 시 커넥션 풀 정리
# -------------------------------
@app.on_event("startup")
async def on_startup():
    init_db()
    log.info("Movie catalog API ready")


@app.on_event("shutdown")
async def on_shutdown():
    dispose_db()
    log.info("Movie catalog API stopped")


# 직접 실행: python -m app.main
if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=PORT)
