"""
Configuration management for the AutoSMS client.
"""

from typing import Optional

from .constants import DEFAULT_TIMEOUT, DEFAULT_POLL_INTERVAL, DEFAULT_MAX_POLL_ATTEMPTS
from .exceptions import ConfigurationError


class ClientConfig:
    """
    Connection settings for one AutoSMS client.

    Everything except ``timeout`` is fixed once the object is built.
    """

    def __init__(
        self,
        base_url: str,
        api_token: str,
        verification_secret: Optional[str] = None,
        timeout: int = DEFAULT_TIMEOUT,
        webhook_secret: Optional[str] = None,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        max_poll_attempts: int = DEFAULT_MAX_POLL_ATTEMPTS,
        csrf_token: Optional[str] = None,
        ca_bundle: Optional[str] = None,
        strict_status: bool = False
    ):
        if not base_url:
            raise ConfigurationError("AutoSMS API URL is not configured.")
        if not api_token:
            raise ConfigurationError("AutoSMS API token is not configured.")

        self._base_url = base_url.rstrip('/')
        self._api_token = api_token
        self._verification_secret = verification_secret or None
        self._webhook_secret = webhook_secret or None
        self._poll_interval = float(poll_interval)
        self._max_poll_attempts = int(max_poll_attempts)
        self._csrf_token = csrf_token or None
        self._ca_bundle = ca_bundle or None
        self._strict_status = bool(strict_status)
        self.timeout = timeout

    @classmethod
    def from_settings(cls, **overrides) -> 'ClientConfig':
        """
        Build a configuration from Django settings.

        Keyword arguments override the matching settings value.
        """
        from django.conf import settings

        values = {
            'base_url': getattr(settings, 'AUTOSMS_API_URL', ''),
            'api_token': getattr(settings, 'AUTOSMS_API_TOKEN', ''),
            'verification_secret': getattr(settings, 'AUTOSMS_VERIFICATION_SECRET', None),
            'webhook_secret': getattr(settings, 'AUTOSMS_WEBHOOK_SECRET', None),
            'timeout': getattr(settings, 'AUTOSMS_TIMEOUT', DEFAULT_TIMEOUT),
            'poll_interval': getattr(settings, 'AUTOSMS_POLL_INTERVAL', DEFAULT_POLL_INTERVAL),
            'max_poll_attempts': getattr(settings, 'AUTOSMS_MAX_POLL_ATTEMPTS', DEFAULT_MAX_POLL_ATTEMPTS),
            'ca_bundle': getattr(settings, 'AUTOSMS_CA_BUNDLE', None),
            'strict_status': getattr(settings, 'AUTOSMS_STRICT_STATUS', False),
        }
        values.update(overrides)

        if not values['base_url']:
            raise ConfigurationError(
                "AUTOSMS_API_URL is not configured in Django settings. "
                "Please add it to your settings.py or .env file."
            )
        if not values['api_token']:
            raise ConfigurationError(
                "AUTOSMS_API_TOKEN is not configured in Django settings. "
                "Please add it to your settings.py or .env file."
            )
        return cls(**values)

    @property
    def base_url(self):
        """Get AutoSMS API base URL."""
        return self._base_url

    @property
    def api_token(self):
        """Get API bearer token."""
        return self._api_token

    @property
    def verification_secret(self):
        """Get response verification secret (optional)."""
        return self._verification_secret

    @property
    def webhook_secret(self):
        """Get webhook secret (optional)."""
        return self._webhook_secret

    @property
    def poll_interval(self):
        return self._poll_interval

    @property
    def max_poll_attempts(self):
        return self._max_poll_attempts

    @property
    def csrf_token(self):
        return self._csrf_token

    @property
    def ca_bundle(self):
        """CA bundle path used for TLS verification instead of the default store."""
        return self._ca_bundle

    @property
    def strict_status(self):
        """Only treat HTTP 200 as success when True, otherwise any 2xx."""
        return self._strict_status

    @property
    def enable_signature_verification(self):
        """Check if response signatures can be verified."""
        return bool(self._verification_secret)

    @property
    def timeout(self):
        """Request timeout in seconds."""
        return self._timeout

    @timeout.setter
    def timeout(self, seconds):
        seconds = int(seconds)
        if seconds <= 0:
            raise ConfigurationError(f"Timeout must be a positive number of seconds. Got: {seconds}")
        self._timeout = seconds

    def __repr__(self):
        return f"ClientConfig(base_url={self._base_url!r}, timeout={self._timeout})"
