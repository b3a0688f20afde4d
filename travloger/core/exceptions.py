class TravlogerError(Exception):
    """Base class for all Travloger domain exceptions.

    Every custom exception in this module inherits from here so that a
    single ``except TravlogerError`` clause can catch any domain
    error.
    """

    def __init__(self, detail: str = "An error occurred"):
        self.detail = detail
        super().__init__(detail)


class ConfigurationError(TravlogerError):
    """Raised when the backing store is missing or unreachable."""

    def __init__(self, detail: str = "Database not configured"):
        super().__init__(detail)


class ValidationError(TravlogerError):
    """Raised when a request lacks the input needed to identify its target."""

    def __init__(self, detail: str = "Invalid request"):
        super().__init__(detail)


class NotFoundError(TravlogerError):
    """Raised when a requested record does not exist."""

    def __init__(self, detail: str = "Resource not found"):
        super().__init__(detail)


class LeadNotFoundError(NotFoundError):
    """Raised when a requested lead does not exist."""

    def __init__(self, detail: str = "Lead not found"):
        super().__init__(detail)


class ScoringRuleNotFoundError(NotFoundError):
    """Raised when a requested scoring rule does not exist."""

    def __init__(self, detail: str = "Scoring rule not found"):
        super().__init__(detail)


class EvaluationError(TravlogerError):
    """Raised while evaluating a single rule condition.

    Never reaches the client: the condition evaluator recovers it as a
    non-match.
    """

    def __init__(self, detail: str = "Condition could not be evaluated"):
        super().__init__(detail)
