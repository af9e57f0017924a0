"""
HMAC-SHA256 signing and verification for API responses and webhooks.
"""

import hashlib
import hmac
from typing import Optional, Union


def _to_bytes(payload: Union[bytes, str]) -> bytes:
    if isinstance(payload, str):
        return payload.encode('utf-8')
    return payload


def sign(payload: Union[bytes, str], secret: str) -> str:
    """
    Compute the signature of a payload.

    Args:
        payload: Raw body bytes (str is UTF-8 encoded)
        secret: Shared secret

    Returns:
        Lowercase hex HMAC-SHA256 digest
    """
    return hmac.new(
        secret.encode('utf-8'),
        _to_bytes(payload),
        hashlib.sha256
    ).hexdigest()


def verify(payload: Union[bytes, str], secret: Optional[str], signature: Optional[str]) -> bool:
    """
    Verify a signature against a payload.

    Args:
        payload: Raw body bytes exactly as received
        secret: Shared secret
        signature: Hex signature from the request or response headers

    Returns:
        True if signature is valid, False otherwise
    """
    if not secret or not signature or not isinstance(payload, (bytes, str)):
        return False

    try:
        candidate = signature.encode('ascii')
    except (AttributeError, UnicodeEncodeError):
        return False

    expected = sign(payload, secret).encode('ascii')

    # Compare signatures using constant-time comparison
    return hmac.compare_digest(expected, candidate)


def verify_webhook_signature(payload: Union[bytes, str], signature: Optional[str], webhook_secret: Optional[str]) -> bool:
    """
    Verify the X-Webhook-Signature of an incoming webhook.

    Args:
        payload: The raw webhook payload (request body)
        signature: The X-Webhook-Signature header value
        webhook_secret: Your webhook secret

    Returns:
        True if signature is valid
    """
    return verify(payload, webhook_secret, signature)
