"""Adapter layer errors."""


class AdapterError(Exception):
    """Base adapter error."""

    pass


class ProviderError(AdapterError):
    """External provider data could not be used."""

    pass


class UnsupportedProviderError(ProviderError):
    """Authentication payload names a provider we cannot reconcile."""

    def __init__(self, provider: object):
        self.provider = provider
        super().__init__(f"Unsupported provider: {provider!r}")
