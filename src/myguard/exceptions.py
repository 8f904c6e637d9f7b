class MyGuardError(Exception):
    """Base exception for all MyGuard errors."""
    pass


class EmptyInputError(MyGuardError):
    """Raised when there is nothing to classify."""

    def __init__(self, message: str = "No clauses were analyzed"):
        super().__init__(message)


class TierFailureError(MyGuardError):
    """Raised when a classification tier cannot produce a result."""

    def __init__(self, tier: str, reason: str):
        self.tier = tier
        self.reason = reason
        super().__init__(f"{tier} tier failed: {reason}")


class CollaboratorError(MyGuardError):
    """Raised when the external language model errors or returns nothing."""
    pass


class ModelNotConfiguredError(MyGuardError):
    """Raised when an operation needs a language model and none is configured."""

    def __init__(self, message: str = "No language model configured"):
        super().__init__(message)
