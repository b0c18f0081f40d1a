"""Visitor identities used to deduplicate likes.

The ledger only needs a stable opaque string per visitor. The default
implementation hashes the caller's network address with a secret salt;
``WILDLIGHT_VISITOR_IDENTITY`` can point at any other callable class that
takes a request and returns such a string.
"""
from __future__ import annotations

import hashlib
import logging
from functools import lru_cache
from typing import Protocol

from django.conf import settings
from django.http import HttpRequest
from django.utils.module_loading import import_string

logger = logging.getLogger(__name__)


class VisitorIdentity(Protocol):
    def __call__(self, request: HttpRequest) -> str:
        """Return a stable identifier for the visitor making *request*."""
        ...


class AddressHashIdentity:
    """SHA-256 of a secret salt followed by the caller's address."""

    def __init__(self, salt: str | None = None, trust_proxy: bool | None = None) -> None:
        self.salt = salt if salt is not None else (settings.WILDLIGHT_LIKE_SALT or settings.SECRET_KEY)
        self.trust_proxy = settings.WILDLIGHT_TRUST_PROXY if trust_proxy is None else trust_proxy

    def address(self, request: HttpRequest) -> str:
        if self.trust_proxy:
            forwarded = request.META.get('HTTP_X_FORWARDED_FOR', '')
            first = forwarded.split(',')[0].strip()
            if first:
                return first
        return request.META.get('REMOTE_ADDR', '') or ''

    def hash_address(self, address: str) -> str:
        return hashlib.sha256(f"{self.salt}{address}".encode('utf-8')).hexdigest()

    def __call__(self, request: HttpRequest) -> str:
        return self.hash_address(self.address(request))


@lru_cache(maxsize=None)
def _identity_class(path: str) -> type:
    return import_string(path)


def visitor_hash(request: HttpRequest) -> str:
    """Identify the visitor behind *request* with the configured implementation."""
    identity: VisitorIdentity = _identity_class(settings.WILDLIGHT_VISITOR_IDENTITY)()
    return identity(request)
