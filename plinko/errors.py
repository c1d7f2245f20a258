"""Exception hierarchy for the plinko engine."""


class PlinkoError(Exception):
    """Base class for all plinko engine errors."""


class ConfigurationError(PlinkoError):
    """Board configuration is internally inconsistent.

    Raised when a slot table does not match the board's slot count, or when
    no multiplier table exists for the requested rows/risk combination.
    This is a precondition failure and is not recovered at runtime.
    """


class StorageError(PlinkoError):
    """A durable key-value store failed to read or write a key."""
