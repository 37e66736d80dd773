# Copyright © 2025 Phaethon Order LLC. All rights reserved. Provided solely for evaluation. See LICENSE.

"""Lookup of canonical reference identifiers in a bibliographic registry."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Protocol, runtime_checkable

import httpx
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from database.crud import get_cached_reference, store_cached_reference
from database.session import db_session
from utils.cleaner import clean_str
from utils.logger import get_logger

logger = get_logger()

_REGISTRY_URL_ENV = "REFERENCE_REGISTRY_URL"
_REGISTRY_TOKEN_ENV = "REFERENCE_REGISTRY_TOKEN"
_REGISTRY_TIMEOUT = httpx.Timeout(15.0, connect=10.0, read=10.0)
_REGISTRY_LOOKUP_PATH = "/references"


class ReferenceLookupError(Exception):
    """Raised when the registry cannot answer a lookup (network, server or payload failure)."""


@dataclass(frozen=True)
class ResolvedReference:
    reference: str
    url: str


@runtime_checkable
class ReferenceResolver(Protocol):
    def resolve(self, reference: str) -> ResolvedReference | None:
        ...


class StaticReferenceResolver:
    """Resolver backed by a fixed reference -> URL mapping."""

    def __init__(self, mapping: Mapping[str, str] | None = None) -> None:
        self._mapping = dict(mapping or {})

    def resolve(self, reference: str) -> ResolvedReference | None:
        url = self._mapping.get(reference)
        if not url:
            return None
        return ResolvedReference(reference=reference, url=url)


class ReferenceCache:
    """Reference lookups memoized in the ``reference_cache`` table."""

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    def get(self, reference: str) -> tuple[bool, str | None]:
        """Return ``(hit, url)``; a hit with ``url=None`` is a remembered miss."""
        try:
            with db_session(self._session_factory) as db:
                entry = get_cached_reference(db, reference)
                if entry is None:
                    return False, None
                return True, entry.url
        except SQLAlchemyError as exc:
            logger.warning("Reference cache read failed for %s: %s", reference, exc)
            return False, None

    def put(self, reference: str, url: str | None) -> None:
        try:
            with db_session(self._session_factory) as db:
                store_cached_reference(db, reference, url)
        except SQLAlchemyError as exc:
            logger.warning("Reference cache write failed for %s: %s", reference, exc)


class RegistryReferenceResolver:
    """Resolver that queries a JSON registry over HTTP.

    ``GET {base_url}/references?ref=<reference>`` is expected to answer 200
    with ``{"url": "..."}`` for a known reference and 404 for an unknown one.
    Anything else is reported as a ``ReferenceLookupError``; no retry is made.
    """

    def __init__(
        self,
        base_url: str,
        *,
        token: str | None = None,
        cache: ReferenceCache | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._token = clean_str(token)
        self._cache = cache
        self._client = client

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Token {self._token}"
        return headers

    def _get(self, reference: str) -> httpx.Response:
        url = f"{self._base_url}{_REGISTRY_LOOKUP_PATH}"
        params = {"ref": reference}
        if self._client is not None:
            return self._client.get(url, params=params, headers=self._headers())
        with httpx.Client(timeout=_REGISTRY_TIMEOUT) as client:
            return client.get(url, params=params, headers=self._headers())

    def _lookup(self, reference: str) -> str | None:
        try:
            response = self._get(reference)
        except httpx.HTTPError as exc:
            raise ReferenceLookupError(f"Registry lookup failed for {reference}: {exc}") from exc

        if response.status_code == 404:
            return None
        if response.status_code != 200:
            raise ReferenceLookupError(
                f"Registry lookup for {reference} returned status {response.status_code}"
            )

        try:
            payload: Any = response.json()
        except ValueError as exc:
            raise ReferenceLookupError(f"Registry returned non-JSON response for {reference}") from exc

        if not isinstance(payload, dict):
            raise ReferenceLookupError(f"Registry returned unexpected payload for {reference}")
        return clean_str(payload.get("url"))

    def resolve(self, reference: str) -> ResolvedReference | None:
        if self._cache is not None:
            hit, url = self._cache.get(reference)
            if hit:
                return ResolvedReference(reference=reference, url=url) if url else None

        url = self._lookup(reference)
        if self._cache is not None:
            self._cache.put(reference, url)

        if url is None:
            logger.info("Registry has no document for %s", reference)
            return None
        return ResolvedReference(reference=reference, url=url)


def build_reference_resolver(
    session_factory: sessionmaker | None = None,
) -> RegistryReferenceResolver | None:
    """Create the registry resolver configured by the environment, if any."""
    base_url = clean_str(os.getenv(_REGISTRY_URL_ENV))
    if not base_url:
        logger.info("%s is not set; references will not be resolved", _REGISTRY_URL_ENV)
        return None
    cache = ReferenceCache(session_factory) if session_factory is not None else None
    return RegistryReferenceResolver(base_url, token=os.getenv(_REGISTRY_TOKEN_ENV), cache=cache)


__all__ = [
    "ReferenceCache",
    "ReferenceLookupError",
    "ReferenceResolver",
    "RegistryReferenceResolver",
    "ResolvedReference",
    "StaticReferenceResolver",
    "build_reference_resolver",
]
