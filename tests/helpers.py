"""
Helpers shared by the test modules.
"""

import json

import requests
from requests.structures import CaseInsensitiveDict

from autosms.utils.signing import sign


API_URL = "https://autosms.example.com"
API_TOKEN = "test-token"
VERIFICATION_SECRET = "s3cr3t"
WEBHOOK_SECRET = "whsec_test123"


def make_response(status_code=200, body=b"", headers=None, url=API_URL):
    """Build a real requests.Response without touching the network."""
    if isinstance(body, (dict, list)):
        body = json.dumps(body).encode("utf-8")
    elif isinstance(body, str):
        body = body.encode("utf-8")

    response = requests.Response()
    response.status_code = status_code
    response._content = body
    response.headers = CaseInsensitiveDict(headers or {})
    response.url = url
    response.encoding = "utf-8"
    return response


def signed_response(body, secret=VERIFICATION_SECRET, status_code=200):
    """Response carrying a valid X-AutoSMS-Signature for its body."""
    if isinstance(body, (dict, list)):
        body = json.dumps(body).encode("utf-8")
    return make_response(
        status_code,
        body,
        {"Content-Type": "application/json", "X-AutoSMS-Signature": sign(body, secret)},
    )


class ManualScheduler:
    """Scheduler that only runs callbacks when the test asks it to."""

    class Handle:
        def __init__(self, delay, callback):
            self.delay = delay
            self.callback = callback
            self.cancelled = False

        def cancel(self):
            self.cancelled = True

    def __init__(self):
        self.handles = []

    def schedule(self, delay, callback):
        handle = self.Handle(delay, callback)
        self.handles.append(handle)
        return handle

    @property
    def pending(self):
        return [h for h in self.handles if not h.cancelled]

    def tick(self):
        """Run every callback pending right now; returns how many ran."""
        due = self.pending
        self.handles = []
        for handle in due:
            handle.callback()
        return len(due)


