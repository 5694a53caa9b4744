class MetaGeniusError(Exception):
    """Base class for every failure raised while processing a URL."""


class ExtractionError(MetaGeniusError):
    """The reader service could not deliver text for a URL."""

    def __init__(self, url: str, message: str):
        super().__init__(message)
        self.url = url


class ExtractionAuthError(ExtractionError):
    """The reader service rejected the configured credential (401/403)."""


class ExtractionRateLimitError(ExtractionError):
    """The reader service quota is exhausted (429)."""


class ExtractionGenericError(ExtractionError):
    """Any other non-success response or a transport failure."""


class EmptyContentError(ExtractionError):
    """Extraction succeeded but produced no usable text."""


class GenerationError(MetaGeniusError):
    """The language model call failed or returned an unusable answer."""


class GenerationLengthWarning(UserWarning):
    """A generated tag is shorter than the minimum of its length window."""
