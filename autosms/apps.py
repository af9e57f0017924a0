from django.apps import AppConfig


class AutoSMSConfig(AppConfig):
    name = 'autosms'
    verbose_name = 'AutoSMS Payment Hub'
