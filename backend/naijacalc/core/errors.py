class CalculationError(ValueError):
    """Raised when a calculator is handed inputs it cannot compute.

    ``str(error)`` is the first message; ``errors`` keeps every message the
    validator reported.
    """

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(message)
        self.errors = list(errors) if errors else [message]

    @classmethod
    def from_errors(cls, errors: list[str]) -> "CalculationError":
        return cls(errors[0], errors)
