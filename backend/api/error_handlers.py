from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from domain.errors import (
    SongLibraryError,
    ValidationError,
    NotFoundError,
)
from utils.logger import get_logger

logger = get_logger(__name__)

class ApiError(Exception):
    """
    ルーターが投げる HTTP エラー。
    レスポンスボディは常に {"error": <ラベル>, "details": <詳細>} の形。
    """

    def __init__(self, status_code: int, error: str, details: str = ""):
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.details = details

    @classmethod
    def from_domain(cls, error: str, exc: SongLibraryError) -> "ApiError":
        """ドメインエラーをステータスコードに対応付ける"""
        if isinstance(exc, ValidationError):
            return cls(400, "Invalid song data", str(exc))
        if isinstance(exc, NotFoundError):
            return cls(404, "Song not found", str(exc))
        return cls(500, error, str(exc))

def error_body(error: str, details: str = "") -> dict:
    return {"error": error, "details": details}

def register_error_handlers(app: FastAPI):
    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.error}: {exc.details}")
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.error, exc.details))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        details = "; ".join(
            f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', '')}"
            for err in exc.errors()
        )
        return JSONResponse(status_code=400, content=error_body("Invalid request body", details))

    @app.exception_handler(SongLibraryError)
    async def domain_error_handler(request: Request, exc: SongLibraryError):
        # ルーターで捕捉されなかったドメインエラー
        api_error = ApiError.from_domain("Request failed", exc)
        return await api_error_handler(request, api_error)
