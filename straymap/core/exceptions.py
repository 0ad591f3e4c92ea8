class TerritoryError(Exception):
    """Base exception for territory engine errors."""


class EmptySightingsError(TerritoryError, ValueError):
    """Raised when a computation that needs at least one sighting gets none."""


class RangePolicyError(TerritoryError):
    """Raised when the roaming range table is misconfigured."""


class TerritoryConfigError(TerritoryError):
    """Raised when a territory tuning constant is out of range."""
