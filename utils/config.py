"""
utils/config.py

🔧 Centralized configuration file for the Artb backend.

Includes:
- Environment variables (via dotenv)
- External service credentials (Gemini, Gmail SMTP)
- Allowed browser origins
- Rate limit windows for AI and form routes
- File paths for uploads and the survey log
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from typing import List, Mapping, Optional, Tuple

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# ========== Environment Setup ==========
# Load environment variables from .env
load_dotenv()

# ========== Defaults ==========
DEFAULT_GEMINI_MODEL = "gemini-1.5-flash-latest"
DEFAULT_ALLOWED_ORIGINS = (
    "http://artb.co.kr",
    "https://artb.co.kr",
)
DEFAULT_PORT = 3000
DEFAULT_SMTP_HOST = "smtp.gmail.com"
DEFAULT_SMTP_PORT = 465

# ========== Rate Limits ==========
AI_RATE_LIMIT_WINDOW_SECONDS = 15 * 60   # 15 minutes
AI_RATE_LIMIT_MAX = 50
FORM_RATE_LIMIT_WINDOW_SECONDS = 60 * 60  # 1 hour
FORM_RATE_LIMIT_MAX = 10

# ========== File Paths ==========
UPLOAD_DIR = tempfile.gettempdir()
SURVEY_CSV_PATH = os.path.join(tempfile.gettempdir(), "survey_results.csv")

# ========== Misc Settings ==========
MAX_CONTENT_LENGTH_MB = 32         # Flask upload limit
TRUST_PROXY_HOPS = 1               # X-Forwarded-For hops to trust, 0 = direct connections


def _text(environ: Mapping[str, str], name: str) -> Optional[str]:
    value = environ.get(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _positive_int(environ: Mapping[str, str], name: str, default: int, minimum: int = 1) -> int:
    """
    Read an integer of at least ``minimum`` from the environment.

    Invalid values are reported and replaced by the default so a typo in a
    deployment variable never prevents the server from starting.
    """
    raw = _text(environ, name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("%s=%r is not an integer, using %d", name, raw, default)
        return default
    if value < minimum:
        logger.warning("%s=%d must be at least %d, using %d", name, value, minimum, default)
        return default
    return value


def _origins(environ: Mapping[str, str]) -> Tuple[str, ...]:
    raw = _text(environ, "ALLOWED_ORIGINS")
    if raw is None:
        return DEFAULT_ALLOWED_ORIGINS
    origins = tuple(o.strip().rstrip("/") for o in raw.split(",") if o.strip())
    return origins or DEFAULT_ALLOWED_ORIGINS


@dataclass(frozen=True)
class Settings:
    """Process-wide settings, resolved once at startup."""

    google_api_key: Optional[str] = None
    gemini_model: str = DEFAULT_GEMINI_MODEL
    email_user: Optional[str] = None
    email_pass: Optional[str] = None
    recipient_email: Optional[str] = None
    smtp_host: str = DEFAULT_SMTP_HOST
    smtp_port: int = DEFAULT_SMTP_PORT
    allowed_origins: Tuple[str, ...] = DEFAULT_ALLOWED_ORIGINS
    port: int = DEFAULT_PORT
    upload_dir: str = UPLOAD_DIR
    survey_csv_path: str = SURVEY_CSV_PATH
    max_content_length_mb: int = MAX_CONTENT_LENGTH_MB
    trust_proxy_hops: int = TRUST_PROXY_HOPS
    ai_rate_limit_window_seconds: int = AI_RATE_LIMIT_WINDOW_SECONDS
    ai_rate_limit_max: int = AI_RATE_LIMIT_MAX
    form_rate_limit_window_seconds: int = FORM_RATE_LIMIT_WINDOW_SECONDS
    form_rate_limit_max: int = FORM_RATE_LIMIT_MAX

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ (Mapping): Source mapping, defaults to ``os.environ``.

        Returns:
            Settings: Resolved, validated settings.
        """
        env = os.environ if environ is None else environ
        return cls(
            google_api_key=_text(env, "GOOGLE_API_KEY"),
            gemini_model=_text(env, "GEMINI_MODEL") or DEFAULT_GEMINI_MODEL,
            email_user=_text(env, "EMAIL_USER"),
            email_pass=_text(env, "EMAIL_PASS"),
            recipient_email=_text(env, "RECIPIENT_EMAIL"),
            smtp_host=_text(env, "SMTP_HOST") or DEFAULT_SMTP_HOST,
            smtp_port=_positive_int(env, "SMTP_PORT", DEFAULT_SMTP_PORT),
            allowed_origins=_origins(env),
            port=_positive_int(env, "PORT", DEFAULT_PORT),
            upload_dir=_text(env, "UPLOAD_DIR") or UPLOAD_DIR,
            survey_csv_path=_text(env, "SURVEY_CSV_PATH") or SURVEY_CSV_PATH,
            max_content_length_mb=_positive_int(env, "MAX_CONTENT_LENGTH_MB", MAX_CONTENT_LENGTH_MB),
            trust_proxy_hops=_positive_int(env, "TRUST_PROXY_HOPS", TRUST_PROXY_HOPS, minimum=0),
            ai_rate_limit_window_seconds=_positive_int(
                env, "AI_RATE_LIMIT_WINDOW_SECONDS", AI_RATE_LIMIT_WINDOW_SECONDS
            ),
            ai_rate_limit_max=_positive_int(env, "AI_RATE_LIMIT_MAX", AI_RATE_LIMIT_MAX),
            form_rate_limit_window_seconds=_positive_int(
                env, "FORM_RATE_LIMIT_WINDOW_SECONDS", FORM_RATE_LIMIT_WINDOW_SECONDS
            ),
            form_rate_limit_max=_positive_int(env, "FORM_RATE_LIMIT_MAX", FORM_RATE_LIMIT_MAX),
        )

    @property
    def ai_configured(self) -> bool:
        return self.google_api_key is not None

    @property
    def mail_configured(self) -> bool:
        return None not in (self.email_user, self.email_pass, self.recipient_email)

    def missing_services(self) -> List[str]:
        """Names of required environment variables that are not set."""
        missing = []
        if self.google_api_key is None:
            missing.append("GOOGLE_API_KEY")
        if self.email_user is None:
            missing.append("EMAIL_USER")
        if self.email_pass is None:
            missing.append("EMAIL_PASS")
        if self.recipient_email is None:
            missing.append("RECIPIENT_EMAIL")
        return missing
