"""
===============================================================================
Artb Form Endpoints
===============================================================================
Survey capture and operator notifications.

Routes:
- POST /survey       { role, interests, feedback_text } -> appends one CSV row
- POST /preregister  { email }                        -> one notification email
- POST /contact      { name, email, message }         -> one notification email

User-supplied text is HTML-escaped before it is placed in a notification body.
"""

import logging

from flask import jsonify, request
from markupsafe import Markup, escape

from routes import routes  # Blueprint instance
from utils.orchestrator import invoke_external
from utils.rate_limit import rate_limited
from utils.services import get_services
from utils.validation import optional_text, require_email, require_json_object, require_text

logger = logging.getLogger(__name__)

NOTIFY_ERROR_MESSAGE = "처리 중 오류가 발생했습니다."


# ========== Notification Bodies ==========

def render_preregister_body(email: str) -> str:
    return str(
        Markup("<h3>새로운 사용자가 사전 등록했습니다!</h3>"
               "<p><strong>이메일:</strong> {email}</p>").format(email=email)
    )


def render_contact_body(name: str, email: str, message: str) -> str:
    """
    Render the contact notification.

    Every field is escaped; newlines in the message become ``<br>`` after
    escaping so they are the only markup derived from user input.
    """
    message_html = Markup("<br>").join(escape(line) for line in message.split("\n"))
    return str(
        Markup("<h3>새로운 문의가 도착했습니다.</h3>"
               "<p><strong>보낸 사람:</strong> {name}</p>"
               "<p><strong>이메일:</strong> {email}</p>"
               "<hr><p><strong>내용:</strong></p>"
               "<p>{message}</p>").format(name=name, email=email, message=message_html)
    )


# ========== API Endpoints ==========

@routes.route('/survey', methods=['POST'])
@rate_limited("form")
def survey():
    """
    POST /survey
    Appends one survey response to the append-only log.

    Request:
        - JSON: { "role": str, "interests": [str], "feedback_text": str }

    Response:
        - JSON: { "message": str }
    """
    payload = require_json_object(request.get_json(silent=True))
    role = require_text(payload, "role", "역할을 선택해주세요.")
    feedback_text = optional_text(payload, "feedback_text")

    get_services().survey_log.append(role, payload.get("interests"), feedback_text)
    return jsonify({"message": "설문이 성공적으로 제출되었습니다."}), 200


@routes.route('/preregister', methods=['POST'])
@rate_limited("form")
def preregister():
    """
    POST /preregister
    Notifies the operator of a new pre-registration.
    """
    payload = require_json_object(request.get_json(silent=True))
    email = require_email(payload, "email", "이메일 주소가 필요합니다.")

    notifier = get_services().require_notifier()
    invoke_external(
        "preregister",
        notifier.send,
        subject="🎉 Artb 신규 사전 등록 알림",
        html_body=render_preregister_body(email),
        sender_name="Artb 알림",
        public_message=NOTIFY_ERROR_MESSAGE,
    )
    logger.info("Pre-registration notification sent")
    return jsonify({"message": "사전 등록이 완료되었습니다."}), 200


@routes.route('/contact', methods=['POST'])
@rate_limited("form")
def contact():
    """
    POST /contact
    Forwards a contact-form message to the operator.
    """
    payload = require_json_object(request.get_json(silent=True))
    missing = "모든 필드를 입력해주세요."
    name = require_text(payload, "name", missing)
    email = require_email(payload, "email", missing)
    message = require_text(payload, "message", missing)

    notifier = get_services().require_notifier()
    invoke_external(
        "contact",
        notifier.send,
        subject=f"📢 Artb 새로운 문의 도착: {name}님",
        html_body=render_contact_body(name, email, message),
        sender_name="Artb 문의",
        public_message=NOTIFY_ERROR_MESSAGE,
    )
    logger.info("Contact notification sent")
    return jsonify({"message": "문의가 성공적으로 전달되었습니다."}), 200
