"""
===============================================================================
Artb External Call Orchestration
===============================================================================
Runs exactly one side-effecting external call per request and converts any
failure into the client-safe error taxonomy.

The underlying exception (provider message, SMTP reply, traceback) is logged
here and nowhere else; the client only ever sees ``public_message``.
"""

import logging
from typing import Any, Callable

from utils.errors import ArtbError, ExternalServiceError

logger = logging.getLogger(__name__)


def invoke_external(operation: str, call: Callable[..., Any], *args, public_message: str, **kwargs) -> Any:
    """
    Invoke an external service once.

    Args:
        operation (str): Name used in logs (e.g. "analyze").
        call (callable): The external operation.
        public_message (str): Client-facing message on failure.

    Returns:
        Whatever ``call`` returns.

    Raises:
        ExternalServiceError: If ``call`` raised anything outside the taxonomy.
    """
    try:
        return call(*args, **kwargs)
    except ArtbError:
        raise
    except Exception as e:
        logger.exception("External call '%s' failed: %s", operation, e)
        raise ExternalServiceError(public_message) from e
