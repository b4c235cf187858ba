"""
Django app configuration for the donation admin app.
"""
from django.apps import AppConfig


class NgoConfig(AppConfig):
    """Builds the store gateway and the admin principal once per process."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.ngo'
    verbose_name = 'Donations'

    gateway = None
    admin = None

    def ready(self):
        from .services.auth import AdminCredential
        from .services.gateway import StoreGateway
        from .services.stores import ModelStore, SampleStore
        from . import tasks  # noqa: F401

        self.gateway = StoreGateway(ModelStore(), SampleStore())
        self.admin = AdminCredential.from_settings()
