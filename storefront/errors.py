class StorefrontError(Exception):
    """Base class for storefront domain errors."""


class InvalidImportError(StorefrontError):
    """A bulk import payload was not a list of product records."""

    def __init__(self, reason: str):
        super().__init__(f"invalid product payload: {reason}")
        self.reason = reason
