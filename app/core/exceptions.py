"""
Application exceptions.

The API layer maps InputValidationError to 400 and ConfigurationError /
JobAnalysisError to 500. Resolution problems that still produce data are
reported through ResolutionResult.success / ResolutionResult.error instead
of exceptions.
"""


class PlacementHelperError(Exception):
    """Base class for all application errors."""


class InputValidationError(PlacementHelperError):
    """Bad or missing input (empty company name, too-short query)."""


class ConfigurationError(PlacementHelperError):
    """A required setting (e.g. an API key) is missing for this request."""


class SourceUnavailableError(PlacementHelperError):
    """An external source answered with an error payload.

    Raised inside adapters only; SourceAdapter.attempt reports it as "error".
    """


class JobAnalysisError(PlacementHelperError):
    """The LLM endpoint did not return usable job details."""
