"""
===============================================================================
Artb Service Handles
===============================================================================
Process-wide handles created once at startup and injected into the app:

- Gemini generator (None when GOOGLE_API_KEY is missing)
- Mail notifier (None when SMTP credentials are missing)
- Survey log
- Rate limiters for the "ai" and "form" route classes

Missing credentials disable only the dependent routes; they answer with a
fixed "service not configured" error instead of crashing the process.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from flask import current_app

from utils.config import Settings
from utils.errors import ConfigurationError
from utils.gemini_client import GeminiFeedbackClient
from utils.mailer import MailNotifier
from utils.rate_limit import FixedWindowRateLimiter
from utils.survey_log import SurveyLog

logger = logging.getLogger(__name__)

EXTENSION_KEY = "artb"

AI_LIMIT_MESSAGE = "AI 분석 요청 횟수가 너무 많습니다. {minutes}분 후에 다시 시도해주세요."
FORM_LIMIT_MESSAGE = "폼 제출 횟수가 너무 많습니다. {minutes}분 후에 다시 시도해주세요."


@dataclass
class Services:
    survey_log: SurveyLog
    limiters: Dict[str, FixedWindowRateLimiter]
    generator: Optional[Any] = None
    notifier: Optional[Any] = None

    def require_generator(self):
        if self.generator is None:
            raise ConfigurationError("Google AI 서비스가 설정되지 않았습니다.")
        return self.generator

    def require_notifier(self):
        if self.notifier is None:
            raise ConfigurationError("이메일 서비스가 설정되지 않았습니다.")
        return self.notifier


def _minutes(seconds: int) -> int:
    return max(1, round(seconds / 60))


def build_limiters(settings: Settings) -> Dict[str, FixedWindowRateLimiter]:
    return {
        "ai": FixedWindowRateLimiter(
            name="ai",
            window_seconds=settings.ai_rate_limit_window_seconds,
            max_requests=settings.ai_rate_limit_max,
            message=AI_LIMIT_MESSAGE.format(minutes=_minutes(settings.ai_rate_limit_window_seconds)),
        ),
        "form": FixedWindowRateLimiter(
            name="form",
            window_seconds=settings.form_rate_limit_window_seconds,
            max_requests=settings.form_rate_limit_max,
            message=FORM_LIMIT_MESSAGE.format(minutes=_minutes(settings.form_rate_limit_window_seconds)),
        ),
    }


def _build_generator(settings: Settings):
    if not settings.ai_configured:
        return None
    try:
        return GeminiFeedbackClient(settings.google_api_key, settings.gemini_model)
    except Exception as e:
        logger.error("Google AI client initialization failed: %s", e)
        return None


def _build_notifier(settings: Settings):
    if not settings.mail_configured:
        return None
    return MailNotifier(
        user=settings.email_user,
        password=settings.email_pass,
        recipient=settings.recipient_email,
        host=settings.smtp_host,
        port=settings.smtp_port,
    )


def build_services(settings: Settings) -> Services:
    """
    Initialize every external handle once.

    Args:
        settings (Settings): Resolved process settings.

    Returns:
        Services: Handles ready to be attached to the app.
    """
    missing = settings.missing_services()
    if missing:
        logger.error(
            "Required environment variables not set: %s. Dependent routes are disabled.",
            ", ".join(missing),
        )

    return Services(
        survey_log=SurveyLog(settings.survey_csv_path),
        limiters=build_limiters(settings),
        generator=_build_generator(settings),
        notifier=_build_notifier(settings),
    )


def get_services() -> Services:
    """Services attached to the running app."""
    return current_app.extensions[EXTENSION_KEY]
