"""
Inbound webhook handling for AutoSMS payment notifications.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Union

from .utils.signing import verify_webhook_signature

logger = logging.getLogger(__name__)


@dataclass
class WebhookResponse:
    """HTTP status and JSON body to answer a webhook with."""
    status_code: int
    data: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status_code == 200

    @property
    def content(self) -> bytes:
        return json.dumps(self.data, default=str).encode('utf-8')


class WebhookReceiver:
    """
    Validates signed webhook payloads and hands them to a callback.

    Every outcome maps to a fixed status code:

    - 400 ``Empty payload``
    - 401 ``Missing signature`` / ``Invalid signature``
    - 400 ``Invalid JSON``
    - 200 with the callback's return value, or 500 when the callback raises
    """

    def handle(
        self,
        raw_payload: Union[bytes, str, None],
        signature: Optional[str],
        secret: Optional[str],
        callback: Callable[[Any], Any]
    ) -> WebhookResponse:
        if not raw_payload:
            logger.warning("Rejected webhook: empty payload")
            return WebhookResponse(400, {'error': 'Empty payload'})

        if not signature:
            logger.warning("Rejected webhook: missing signature")
            return WebhookResponse(401, {'error': 'Missing signature'})

        if not verify_webhook_signature(raw_payload, signature, secret):
            logger.warning("Rejected webhook: invalid signature")
            return WebhookResponse(401, {'error': 'Invalid signature'})

        try:
            data = json.loads(raw_payload)
        except ValueError:
            logger.warning("Rejected webhook: invalid JSON")
            return WebhookResponse(400, {'error': 'Invalid JSON'})

        try:
            result = callback(data)
        except Exception as e:
            logger.exception("Webhook callback failed")
            return WebhookResponse(500, {'error': str(e)})

        logger.info("Webhook processed successfully")
        return WebhookResponse(200, {'success': True, 'result': result})


def handle_autosms_webhook(
    webhook_secret: str,
    callback: Callable[[Any], Any],
    payload: Union[bytes, str, None],
    signature: Optional[str]
) -> WebhookResponse:
    """
    Quick helper for handling webhooks without instantiating the receiver.

    Args:
        webhook_secret: Your webhook secret
        callback: Function called with the validated payload
        payload: Raw request body
        signature: The X-Webhook-Signature header value

    Returns:
        WebhookResponse to send back
    """
    return WebhookReceiver().handle(payload, signature, webhook_secret, callback)
