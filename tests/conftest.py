"""
Test configuration and shared fixtures.
"""

import django
import pytest
from django.conf import settings

from autosms.config import ClientConfig
from helpers import API_URL, API_TOKEN, VERIFICATION_SECRET, WEBHOOK_SECRET, ManualScheduler


def pytest_configure():
    if not settings.configured:
        settings.configure(
            DEBUG=False,
            SECRET_KEY="autosms-tests",
            ALLOWED_HOSTS=["*"],
            INSTALLED_APPS=[
                "django.contrib.contenttypes",
                "autosms",
            ],
            ROOT_URLCONF="autosms.urls",
            DATABASES={},
            USE_TZ=True,
            AUTOSMS_API_URL=API_URL,
            AUTOSMS_API_TOKEN=API_TOKEN,
            AUTOSMS_VERIFICATION_SECRET=VERIFICATION_SECRET,
            AUTOSMS_WEBHOOK_SECRET=WEBHOOK_SECRET,
        )
        django.setup()


@pytest.fixture
def config():
    return ClientConfig(API_URL, API_TOKEN, VERIFICATION_SECRET, max_poll_attempts=3)


@pytest.fixture
def unsigned_config():
    return ClientConfig(API_URL, API_TOKEN)


@pytest.fixture
def scheduler():
    return ManualScheduler()
