"""
===============================================================================
Artb Request Validation
===============================================================================
Payload checks run before any file write or external call.

All helpers raise ``ValidationError`` (or ``NoFileError``) with a
client-facing message; they never touch storage or the network.
"""

import re
from typing import Any, Dict, List, Mapping, Optional

from werkzeug.datastructures import FileStorage

from utils.errors import NoFileError, ValidationError

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

MAX_CHAT_MESSAGE_CHARS = 2000
MAX_CHAT_HISTORY_TURNS = 20

_HISTORY_ROLES = {"user": "user", "model": "model", "assistant": "model"}


def require_json_object(payload: Any) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        raise ValidationError("JSON 형식의 요청 본문이 필요합니다.")
    return payload


def require_text(payload: Mapping[str, Any], name: str, message: str) -> str:
    """
    Fetch a required string field, trimmed.

    Args:
        payload (Mapping): Parsed JSON body.
        name (str): Field name.
        message (str): Error message when the field is missing or blank.

    Returns:
        str: The trimmed value.
    """
    value = payload.get(name)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(message)
    return value.strip()


def optional_text(payload: Mapping[str, Any], name: str) -> str:
    value = payload.get(name)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"'{name}' 값은 문자열이어야 합니다.")
    return value


def require_email(payload: Mapping[str, Any], name: str, message: str) -> str:
    email = require_text(payload, name, message)
    if not EMAIL_PATTERN.match(email):
        raise ValidationError("올바른 이메일 주소를 입력해주세요.")
    return email


def require_image(files: Mapping[str, FileStorage], name: str = "image") -> FileStorage:
    """
    Check a multipart file field without saving it.

    Raises:
        NoFileError: If the field is missing or has no filename.
        ValidationError: If the declared MIME type is not an image type.
    """
    upload = files.get(name)
    if upload is None or not upload.filename:
        raise NoFileError()
    if not (upload.mimetype or "").startswith("image/"):
        raise ValidationError("이미지 파일만 업로드할 수 있습니다.")
    return upload


def _turn_text(turn: Mapping[str, Any]) -> Optional[str]:
    if isinstance(turn.get("text"), str):
        return turn["text"]
    parts = turn.get("parts")
    if isinstance(parts, str):
        return parts
    if isinstance(parts, list):
        texts = []
        for part in parts:
            if isinstance(part, str):
                texts.append(part)
            elif isinstance(part, dict) and isinstance(part.get("text"), str):
                texts.append(part["text"])
            else:
                return None
        return "\n".join(texts)
    return None


def normalize_history(raw: Any) -> List[Dict[str, Any]]:
    """
    Convert a client chat history into Gemini ``{role, parts}`` turns.

    Accepts turns shaped ``{"role": ..., "text": ...}`` or
    ``{"role": ..., "parts": [...]}``; ``assistant`` is treated as ``model``.
    Only the most recent turns are kept.
    """
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValidationError("'history' 값은 배열이어야 합니다.")

    history = []
    for turn in raw[-MAX_CHAT_HISTORY_TURNS:]:
        if not isinstance(turn, dict):
            raise ValidationError("대화 기록 형식이 올바르지 않습니다.")
        role = _HISTORY_ROLES.get(str(turn.get("role", "")).lower())
        text = _turn_text(turn)
        if role is None or text is None:
            raise ValidationError("대화 기록 형식이 올바르지 않습니다.")
        if text.strip():
            history.append({"role": role, "parts": [text]})
    return history
