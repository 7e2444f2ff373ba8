"""
===============================================================================
Artb AI Feedback Endpoints
===============================================================================
Provides the Gemini-backed endpoints.

Routes:
- POST /analyze        multipart 'image' -> { "feedback": str }
- POST /analyze-style  multipart 'image' -> { "style_feedback": str }
- POST /chat           { "message", "history" } -> { "reply": str }

Both image routes share one handler; they differ only in prompt, response
field and error message. The uploaded image is deleted before the response
is returned, whatever the outcome of the Gemini call.
"""

from dataclasses import dataclass

from flask import current_app, jsonify, request

from routes import routes  # Blueprint instance
from utils.errors import ValidationError
from utils.orchestrator import invoke_external
from utils.prompts import CRITIQUE_PROMPT, STYLE_PROMPT
from utils.rate_limit import rate_limited
from utils.services import get_services
from utils.uploads import uploaded_asset
from utils.validation import (
    MAX_CHAT_MESSAGE_CHARS,
    normalize_history,
    require_image,
    require_json_object,
    require_text,
)


@dataclass(frozen=True)
class ImageFeedbackRoute:
    name: str
    prompt: str
    response_field: str
    error_message: str


CRITIQUE_ROUTE = ImageFeedbackRoute(
    name="analyze",
    prompt=CRITIQUE_PROMPT,
    response_field="feedback",
    error_message="AI 분석 중 오류가 발생했습니다.",
)

STYLE_ROUTE = ImageFeedbackRoute(
    name="analyze-style",
    prompt=STYLE_PROMPT,
    response_field="style_feedback",
    error_message="AI 스타일 분석 중 오류가 발생했습니다.",
)

CHAT_ERROR_MESSAGE = "AI 답변 생성 중 오류가 발생했습니다."


# ========== Helper Function ==========

def image_feedback(route: ImageFeedbackRoute):
    """
    Run one image feedback request end to end.

    Order: validate the multipart field, check the generator is configured,
    store the upload, call Gemini once, delete the upload.

    Args:
        route (ImageFeedbackRoute): Prompt and response envelope for the route.

    Returns:
        Response: JSON ``{route.response_field: text}``.
    """
    upload = require_image(request.files, "image")
    generator = get_services().require_generator()
    upload_dir = current_app.config["UPLOAD_DIR"]

    with uploaded_asset(upload, upload_dir) as asset:
        text = invoke_external(
            route.name,
            generator.critique_image,
            route.prompt,
            asset.read_bytes(),
            asset.mime_type,
            public_message=route.error_message,
        )

    return jsonify({route.response_field: text})


# ========== API Endpoints ==========

@routes.route('/analyze', methods=['POST'])
@rate_limited("ai")
def analyze():
    """
    POST /analyze
    Scores an uploaded artwork on five criteria and returns the critique.
    """
    return image_feedback(CRITIQUE_ROUTE)


@routes.route('/analyze-style', methods=['POST'])
@rate_limited("ai")
def analyze_style():
    """
    POST /analyze-style
    Identifies the artwork's style, similar artists, palette and keywords.
    """
    return image_feedback(STYLE_ROUTE)


@routes.route('/chat', methods=['POST'])
@rate_limited("ai")
def chat():
    """
    POST /chat
    One conversational turn with the AI curator.

    Request:
        - JSON: { "message": str, "history": [ {"role", "text" | "parts"} ] }

    Response:
        - JSON: { "reply": str }
    """
    payload = require_json_object(request.get_json(silent=True))
    message = require_text(payload, "message", "메시지를 입력해주세요.")
    if len(message) > MAX_CHAT_MESSAGE_CHARS:
        raise ValidationError(f"메시지는 {MAX_CHAT_MESSAGE_CHARS}자 이하로 입력해주세요.")
    history = normalize_history(payload.get("history"))

    generator = get_services().require_generator()
    reply = invoke_external(
        "chat",
        generator.reply,
        message,
        history,
        public_message=CHAT_ERROR_MESSAGE,
    )
    return jsonify({"reply": reply})
