"""Errors raised while building or solving a regression problem."""


class InvalidConfigurationError(ValueError):
    """Raised when hyperparameters do not describe a valid problem."""
