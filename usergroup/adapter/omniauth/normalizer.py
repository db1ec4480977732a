"""Normalization of OmniAuth-style authentication hashes.

Both providers deliver the same outer shape::

    {"provider": "github", "uid": "123",
     "info": {"nickname", "name", "email", "image", "urls": {...}, ...},
     "extra": {"raw_info": {...}}}

but keep the bio, homepage and location in different places. Any block or
field may be missing or null.
"""

from collections.abc import Mapping
from typing import Any

import logfire

from usergroup.adapter.error import ProviderError, UnsupportedProviderError
from usergroup.domain.value import AuthProvider, CanonicalProfile


def normalize(
    payload: Mapping[str, Any], provider: AuthProvider | str | None = None
) -> CanonicalProfile:
    """Map a provider authentication hash to a canonical profile.

    Args:
        payload: Raw authentication hash
        provider: Provider override (defaults to ``payload["provider"]``)

    Returns:
        Canonical profile; optional fields that are absent become None

    Raises:
        ProviderError: If the payload is not a mapping
        UnsupportedProviderError: If the provider is not GitHub or Twitter
    """
    if not isinstance(payload, Mapping):
        raise ProviderError(
            f"Authentication payload must be a mapping, got {type(payload).__name__}"
        )

    provider = resolve_provider(provider or payload.get("provider"))
    info = _block(payload, "info")
    raw_info = _block(payload, "extra", "raw_info")
    urls = _block(info, "urls")

    match provider:
        case AuthProvider.GITHUB:
            description = _text(raw_info.get("bio"))
            url = _first(urls.get("Blog"), raw_info.get("blog"))
            location = _first(raw_info.get("location"), info.get("location"))
        case AuthProvider.TWITTER:
            description = _first(info.get("description"), raw_info.get("description"))
            url = _first(urls.get("Website"), raw_info.get("url"))
            location = _first(info.get("location"), raw_info.get("location"))

    nickname = _text(info.get("nickname")) or ""
    profile = CanonicalProfile(
        provider=provider,
        uid=payload.get("uid"),
        nickname=nickname,
        name=_text(info.get("name")) or nickname,
        email=_text(info.get("email")),
        image=_text(info.get("image")),
        description=description,
        url=url,
        location=location,
    )
    logfire.debug(
        "Authentication hash normalized",
        provider=provider.value,
        provider_uid=profile.uid,
        nickname=profile.nickname,
        has_email=profile.has_email,
    )
    return profile


def resolve_provider(value: AuthProvider | str | None) -> AuthProvider:
    """Resolve a provider tag such as ``"github"`` to an ``AuthProvider``.

    Raises:
        UnsupportedProviderError: If the tag is missing or unknown
    """
    if isinstance(value, AuthProvider):
        return value
    try:
        return AuthProvider(value)
    except (TypeError, ValueError):
        raise UnsupportedProviderError(value) from None


def _block(data: Any, *path: str) -> Mapping[str, Any]:
    """Follow ``path`` through nested mappings; anything else is empty."""
    for key in path:
        data = data.get(key) if isinstance(data, Mapping) else None
    return data if isinstance(data, Mapping) else {}


def _text(value: Any) -> str | None:
    """Scalar as string; None for blanks, nulls and nested structures."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str) and value.strip():
        return value
    return None


def _first(*values: Any) -> str | None:
    for value in values:
        text = _text(value)
        if text is not None:
            return text
    return None
