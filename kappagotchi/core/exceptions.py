# exceptions.py
# Domain failures (NO_KAPPA, NOT_ENOUGH_COINS, ...) are returned as CoreError,
# these are for the host side: configuration and persistence.
class KappagotchiError(Exception):
    """Base exception for all kappagotchi errors."""
    pass

class ConfigError(KappagotchiError):
    """Raised when configuration is invalid."""
    pass

class ConfigValidationError(ConfigError):
    """Raised when the rule table fails validation."""
    pass

class SnapshotError(KappagotchiError):
    """Raised when a saved state cannot be decoded."""
    pass
