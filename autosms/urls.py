"""
URL configuration for autosms app.
"""

from django.urls import path
from . import views

urlpatterns = [
    path('webhook/', views.payment_webhook, name='autosms_webhook'),
]
