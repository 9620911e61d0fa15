# ------------------------------------------------------------
# errors.py — 저장소/HTTP 에러 분류
# ------------------------------------------------------------
#
# 저장소 계층은 DuplicateKey / StorageError만 던지고 "없음"은 None으로 표현.
# 라우터는 타입으로 분기해서 ApiError 하위 클래스로 바꿔 던지고,
# main.py의 exception handler가 {"success": false, <key>: <message>} 로 응답.


# ------------------------------
# 저장소 계층 에러
# ------------------------------
class StorageError(Exception):
    """DB 쓰기/읽기 실패 (연결 끊김, 제약 위반 등)."""


class DuplicateKey(StorageError):
    """유니크 키(username) 중복."""


# ------------------------------
# HTTP 계층 에러
# ------------------------------
class ApiError(Exception):
    status_code = 500
    # 원래 API가 메시지 키로 "msg"와 "message"를 섞어 쓰므로 에러마다 지정
    key = "message"
    default_message = "Something went wrong. Please try again later."

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_body(self) -> dict:
        return {"success": False, self.key: self.message}


class ValidationError(ApiError):
    status_code = 400
    key = "msg"
    default_message = "Invalid request body."


class Unauthorized(ApiError):
    status_code = 401
    key = "msg"
    default_message = "Unauthorized"


class NotFound(ApiError):
    status_code = 404
    key = "msg"
    default_message = "Not found."


class Conflict(ApiError):
    status_code = 409
    default_message = "Resource already exists."


class ServerError(ApiError):
    status_code = 500
