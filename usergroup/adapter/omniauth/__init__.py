"""OmniAuth authentication hash adapter."""

from .normalizer import normalize, resolve_provider

__all__ = ["normalize", "resolve_provider"]
