"""
Django views for AutoSMS webhooks.
"""

import logging
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST
from django.conf import settings

from .constants import WEBHOOK_SIGNATURE_HEADER
from .signals import webhook_received
from .webhooks import WebhookReceiver

logger = logging.getLogger(__name__)


def _to_json_response(response):
    return JsonResponse(response.data, status=response.status_code, json_dumps_params={'default': str})


def webhook_view(callback, secret=None):
    """
    Build a webhook view that calls ``callback`` with the verified payload.

    Args:
        callback: Function called with the parsed payload; its return value
            is echoed in the response
        secret: Webhook secret (defaults to settings.AUTOSMS_WEBHOOK_SECRET)
    """
    receiver = WebhookReceiver()

    @csrf_exempt
    @require_POST
    def view(request):
        webhook_secret = secret or getattr(settings, 'AUTOSMS_WEBHOOK_SECRET', None)
        if not webhook_secret:
            logger.error("AUTOSMS_WEBHOOK_SECRET is not configured; rejecting webhook")

        response = receiver.handle(
            request.body,
            request.headers.get(WEBHOOK_SIGNATURE_HEADER),
            webhook_secret,
            callback
        )
        return _to_json_response(response)

    return view


def _dispatch_webhook(payload):
    responses = webhook_received.send(sender=WebhookReceiver, payload=payload)
    return {'handled': len(responses)}


# Default endpoint: verified payloads go out through the webhook_received signal
payment_webhook = webhook_view(_dispatch_webhook)
