"""
AutoSMS Payment Hub SDK for Django

Verifies SMS-confirmed payments, validates signed API responses and webhooks,
and polls orders until their payment arrives.
"""

__version__ = "1.0.0"

from .client import AutoSMSClient
from .config import ClientConfig
from .webhooks import WebhookReceiver, WebhookResponse, handle_autosms_webhook

__all__ = [
    'AutoSMSClient',
    'ClientConfig',
    'WebhookReceiver',
    'WebhookResponse',
    'handle_autosms_webhook',
]
