"""Failure signals raised inside the suggestion pipeline.

None of these reach API callers: the suggestion service absorbs them into the
mock fallback or placeholder-image paths.
"""


class SuggestionPipelineError(Exception):
    """Base class for recoverable pipeline failures."""


class UpstreamUnavailable(SuggestionPipelineError):
    """The generative endpoint could not be reached (network, auth or quota)."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class EmptyResponse(SuggestionPipelineError):
    """The endpoint answered but the response carried no usable content."""


class ParseFailure(SuggestionPipelineError):
    """No recommendation could be extracted from the model output."""


__all__ = [
    "SuggestionPipelineError",
    "UpstreamUnavailable",
    "EmptyResponse",
    "ParseFailure",
]
