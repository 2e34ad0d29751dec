"""Error types raised by covergap."""


class CovergapError(Exception):
    """Base class for covergap errors."""


class GapAnalysisInputError(CovergapError, ValueError):
    """Raised when requirement or test case input breaks the expected contract."""
