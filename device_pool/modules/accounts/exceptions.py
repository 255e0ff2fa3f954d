"""Errors raised while managing pool user accounts."""


class AccountError(Exception):
    """Base class for account errors."""


class AccountAlreadyExistsError(AccountError):
    """Raised when a sign-up reuses a username or email held by another pool user."""

    def __init__(self, field: str, value: str) -> None:
        super().__init__(f"{field.capitalize()} already registered: {value}")
        self.field = field
        self.value = value
