"""
Shared error bookkeeping for AutoSMS services.
"""

import logging
from typing import Optional

from ..config import ClientConfig
from ..constants import RESPONSE_SIGNATURE_HEADER
from ..exceptions import AutoSMSException, SignatureMissingError, SignatureInvalidError
from ..models import RequestResult
from ..utils.http_client import HTTPClient
from ..utils.signing import verify

logger = logging.getLogger(__name__)


class BaseService:
    """
    Base class for services that report failures through ``last_error``
    instead of raising across the client boundary.

    ``last_error`` is reset at the start of every call, so one instance
    must not be shared by concurrent callers.
    """

    def __init__(self, config: ClientConfig, http_client: Optional[HTTPClient] = None):
        self.config = config
        self.http_client = http_client or HTTPClient(
            config.base_url,
            config.api_token,
            timeout=config.timeout,
            csrf_token=config.csrf_token,
            ca_bundle=config.ca_bundle,
            strict_status=config.strict_status
        )
        self.last_error: Optional[str] = None
        self.last_exception: Optional[AutoSMSException] = None

    def _reset_error(self):
        self.last_error = None
        self.last_exception = None

    def _record_error(self, exc: AutoSMSException, context: str):
        self.last_error = exc.message
        self.last_exception = exc
        logger.error(f"{context}: {exc.message}")

    def _check_signature(self, result: RequestResult):
        """
        Verify the response signature header against the raw body.

        Raises:
            SignatureMissingError: If the signature header is absent
            SignatureInvalidError: If the signature does not match
        """
        signature = result.headers.get(RESPONSE_SIGNATURE_HEADER)
        if not signature:
            raise SignatureMissingError(
                "HMAC signature verification failed: missing signature header",
                error_code=result.status_code,
                response_data=result.text
            )
        if not verify(result.body, self.config.verification_secret, signature):
            raise SignatureInvalidError(
                "HMAC signature verification failed",
                error_code=result.status_code,
                response_data=result.text
            )
