class StoreError(Exception):
    """A record store call failed (network, database or backend error)."""


class RuleViolation(ValueError):
    """Input breaks a domain rule and must not reach the store."""

    def __init__(self, message: str, field: str = None):
        super().__init__(message)
        self.message = message
        self.field = field
