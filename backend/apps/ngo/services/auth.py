"""
Login for the admin pages.

There is exactly one admin principal, read from settings at startup. Donors
log in with the email and password they signed up with; passwords are
stored and compared as given (hardening is out of scope), but the
comparison is pluggable through ``CREDENTIAL_VERIFIER``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from django.conf import settings
from django.utils.module_loading import import_string

from .gateway import StoreGateway
from .stores import DONORS

logger = logging.getLogger(__name__)

ROLE_ADMIN = "admin"
ROLE_DONOR = "donor"


@dataclass(frozen=True)
class AdminCredential:
    email: Optional[str]
    password: Optional[str]
    name: str = "관리자"

    @property
    def configured(self) -> bool:
        return bool(self.email and self.password)

    @classmethod
    def from_settings(cls) -> "AdminCredential":
        return cls(
            email=getattr(settings, "ADMIN_EMAIL", None),
            password=getattr(settings, "ADMIN_PASSWORD", None),
            name=getattr(settings, "ADMIN_NAME", None) or "관리자",
        )

    def as_principal(self) -> Dict[str, Any]:
        return {"admin_id": "admin", "name": self.name, "email": self.email, "role": ROLE_ADMIN}


class PlainTextVerifier:
    """Verbatim equality between the stored and the submitted password."""

    def verify(self, stored: Optional[str], provided: str) -> bool:
        return stored is not None and stored == provided


def get_verifier():
    path = getattr(settings, "CREDENTIAL_VERIFIER", "apps.ngo.services.auth.PlainTextVerifier")
    return import_string(path)()


def public_donor(record: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in record.items() if key != "password"}


class Authenticator:
    def __init__(self, gateway: StoreGateway, admin: AdminCredential, verifier=None):
        self.gateway = gateway
        self.admin = admin
        self.verifier = verifier or get_verifier()

    def authenticate(self, email: str, password: str) -> Optional[Dict[str, Any]]:
        """Return the principal for these credentials, or None.

        Database errors propagate so the caller can answer with a 500.
        """
        if self.admin.configured and email == self.admin.email:
            if self.verifier.verify(self.admin.password, password):
                return self.admin.as_principal()
            return None

        donor = self.gateway.find(DONORS, "email", email, fallback_on_error=False)
        if donor is None or not self.verifier.verify(donor.get("password"), password):
            logger.info("Rejected login for %s", email)
            return None
        principal = public_donor(donor)
        principal["role"] = ROLE_DONOR
        return principal
