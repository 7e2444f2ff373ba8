"""
===============================================================================
Artb Utilities Initialization
===============================================================================
Exposes core utility modules for the backend:
- Configuration and service handles
- Error taxonomy
- Rate limiting
- Upload handling and request validation
- External call orchestration
"""

# Configuration
from .config import Settings

# Error Taxonomy
from .errors import (
    ArtbError,
    ValidationError,
    NoFileError,
    OriginNotAllowed,
    RateLimitExceeded,
    ConfigurationError,
    ExternalServiceError,
    StorageError,
)

# Rate Limiting
from .rate_limit import (
    FixedWindowRateLimiter,
    RateLimitStatus,
    rate_limited,
    apply_rate_limit_headers,
)

# Uploads
from .uploads import (
    UploadedAsset,
    acquire,
    release,
    uploaded_asset,
)

# Survey Log
from .survey_log import SurveyLog, SurveyRecord

# Orchestration
from .orchestrator import invoke_external

# Service Handles
from .services import Services, build_services, get_services

# Exports
__all__ = [
    # config
    "Settings",

    # errors
    "ArtbError", "ValidationError", "NoFileError", "OriginNotAllowed",
    "RateLimitExceeded", "ConfigurationError", "ExternalServiceError", "StorageError",

    # rate_limit
    "FixedWindowRateLimiter", "RateLimitStatus", "rate_limited", "apply_rate_limit_headers",

    # uploads
    "UploadedAsset", "acquire", "release", "uploaded_asset",

    # survey_log
    "SurveyLog", "SurveyRecord",

    # orchestrator
    "invoke_external",

    # services
    "Services", "build_services", "get_services",
]
