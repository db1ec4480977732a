"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error.

    Attributes:
        errors: Field name mapped to the messages raised for it
    """

    def __init__(self, errors: dict[str, list[str]]):
        self.errors = errors
        details = "; ".join(
            f"{field}: {', '.join(messages)}" for field, messages in errors.items()
        )
        super().__init__(f"Validation failed ({details})")

    def errors_on(self, field: str) -> list[str]:
        """Messages recorded for a single field."""
        return self.errors.get(field, [])


class DuplicateNickname(DomainError):
    """Raised when a nickname is already claimed through another provider.

    Never resolved automatically; the account owner has to link the
    provider (or merge accounts) by hand.
    """

    def __init__(self, nickname: str, provider: str, account_id: str | None = None):
        self.nickname = nickname
        self.provider = provider
        self.account_id = account_id
        owner = f"account {account_id}" if account_id else "another account"
        super().__init__(
            f"Nickname '{nickname}' is already taken by {owner}, "
            f"which is not linked to {provider}"
        )


class UniqueConstraintViolation(DomainError):
    """Raised by repositories when an insert hits a unique index."""

    def __init__(self, constraint: str, value: str):
        self.constraint = constraint
        self.value = value
        super().__init__(f"Unique constraint {constraint} violated by {value!r}")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")
