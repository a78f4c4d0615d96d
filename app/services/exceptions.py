"""Errors raised while producing an AI recommendation."""


class RecommendationError(Exception):
    """Base error; the message is shown to the user as-is."""


class ProviderConfigurationError(RecommendationError):
    """The completion provider credential is missing. Never retried."""


class ProviderUnavailableError(RecommendationError):
    """Transport failure or non-success status after the last attempt."""
