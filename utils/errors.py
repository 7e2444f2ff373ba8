"""
===============================================================================
Artb Error Taxonomy
===============================================================================
Every error that may reach a client is one of the classes below. Each carries
a client-safe message and an HTTP status; provider or filesystem detail is
logged server-side and never stored on the exception.

- ValidationError       400  missing or malformed input, no side effect attempted
- NoFileError           400  multipart file field absent or empty
- OriginNotAllowed      403  request origin outside the allow-list
- RateLimitExceeded     429  per-route request budget exhausted
- ConfigurationError    500  external credential or service missing
- ExternalServiceError  500  inference or mail provider failed
- StorageError          500  local file or log write failed
"""

from typing import Dict, Optional


class ArtbError(Exception):
    """Base class for errors rendered as ``{"error": message}`` responses."""

    status_code = 500
    default_message = "처리 중 오류가 발생했습니다."

    def __init__(self, message: Optional[str] = None, headers: Optional[Dict[str, str]] = None):
        self.message = message or self.default_message
        self.headers = headers or {}
        super().__init__(self.message)


class ValidationError(ArtbError):
    status_code = 400
    default_message = "요청 형식이 올바르지 않습니다."


class NoFileError(ValidationError):
    default_message = "이미지 파일이 없습니다."


class OriginNotAllowed(ArtbError):
    status_code = 403
    default_message = "CORS 정책에 의해 허용되지 않는 Origin입니다."


class RateLimitExceeded(ArtbError):
    status_code = 429
    default_message = "요청 횟수가 너무 많습니다. 잠시 후 다시 시도해주세요."

    def __init__(self, message: Optional[str] = None, retry_after: Optional[int] = None):
        headers = {"Retry-After": str(retry_after)} if retry_after is not None else None
        super().__init__(message, headers=headers)


class ConfigurationError(ArtbError):
    default_message = "서비스가 설정되지 않았습니다."


class ExternalServiceError(ArtbError):
    default_message = "외부 서비스 처리 중 오류가 발생했습니다."


class StorageError(ArtbError):
    default_message = "데이터 저장 중 오류가 발생했습니다."
