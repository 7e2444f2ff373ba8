import io

import pytest
from werkzeug.datastructures import FileStorage, MultiDict

from utils.errors import NoFileError, ValidationError
from utils.validation import (
    MAX_CHAT_HISTORY_TURNS,
    normalize_history,
    optional_text,
    require_email,
    require_image,
    require_json_object,
    require_text,
)


def test_require_json_object_rejects_non_objects() -> None:
    for payload in (None, [], "text", 3):
        with pytest.raises(ValidationError):
            require_json_object(payload)
    assert require_json_object({"a": 1}) == {"a": 1}


def test_require_text_trims_and_rejects_blank() -> None:
    assert require_text({"name": "  Kim  "}, "name", "missing") == "Kim"
    for payload in ({}, {"name": "   "}, {"name": 42}):
        with pytest.raises(ValidationError, match="missing"):
            require_text(payload, "name", "missing")


def test_optional_text_defaults_to_empty() -> None:
    assert optional_text({}, "feedback_text") == ""
    assert optional_text({"feedback_text": None}, "feedback_text") == ""
    assert optional_text({"feedback_text": " keep "}, "feedback_text") == " keep "
    with pytest.raises(ValidationError):
        optional_text({"feedback_text": ["x"]}, "feedback_text")


def test_require_email_checks_shape() -> None:
    assert require_email({"email": " a@b.co "}, "email", "missing") == "a@b.co"
    with pytest.raises(ValidationError):
        require_email({"email": "not-an-email"}, "email", "missing")
    with pytest.raises(ValidationError, match="missing"):
        require_email({}, "email", "missing")


def test_require_image_checks_presence_and_mime_type() -> None:
    png = FileStorage(stream=io.BytesIO(b"x"), filename="a.png", content_type="image/png")
    text = FileStorage(stream=io.BytesIO(b"x"), filename="a.txt", content_type="text/plain")
    unnamed = FileStorage(stream=io.BytesIO(b""), filename="", content_type="image/png")

    assert require_image(MultiDict({"image": png})) is png
    with pytest.raises(NoFileError):
        require_image(MultiDict())
    with pytest.raises(NoFileError):
        require_image(MultiDict({"image": unnamed}))
    with pytest.raises(ValidationError) as excinfo:
        require_image(MultiDict({"image": text}))
    assert not isinstance(excinfo.value, NoFileError)


def test_normalize_history_accepts_text_and_parts_shapes() -> None:
    history = normalize_history([
        {"role": "user", "text": "안녕하세요"},
        {"role": "assistant", "parts": [{"text": "반갑습니다"}]},
        {"role": "model", "parts": ["첫째", "둘째"]},
        {"role": "user", "text": "   "},
    ])

    assert history == [
        {"role": "user", "parts": ["안녕하세요"]},
        {"role": "model", "parts": ["반갑습니다"]},
        {"role": "model", "parts": ["첫째\n둘째"]},
    ]


def test_normalize_history_keeps_recent_turns_only() -> None:
    raw = [{"role": "user", "text": str(i)} for i in range(MAX_CHAT_HISTORY_TURNS + 5)]

    history = normalize_history(raw)

    assert len(history) == MAX_CHAT_HISTORY_TURNS
    assert history[0]["parts"] == ["5"]


@pytest.mark.parametrize("raw", [
    "not a list",
    [{"role": "system", "text": "x"}],
    [{"role": "user"}],
    [{"role": "user", "parts": [1, 2]}],
    ["plain string"],
])
def test_normalize_history_rejects_malformed_input(raw) -> None:
    with pytest.raises(ValidationError):
        normalize_history(raw)


def test_normalize_history_missing_is_empty() -> None:
    assert normalize_history(None) == []
