"""Custom exceptions for scrapeforge.

The extraction core never raises these; they belong to the layers around it
(job files, the CLI and the AI suggestion adapter).
"""


class ScrapeForgeError(Exception):
    """Base class for all scrapeforge exceptions."""

    pass


class JobConfigError(ScrapeForgeError):
    """Raised when a job file or CLI input cannot be turned into a valid job."""

    def __init__(self, source: str, reason: str):
        """Initialize the job configuration error.

        Args:
            source: Where the configuration came from (file path or 'cli')
            reason: What was wrong with it

        """
        self.source = source
        self.reason = reason
        super().__init__(f'Invalid job configuration in {source}: {reason}')


class SuggestionError(ScrapeForgeError):
    """Raised when the AI suggestion service could not produce an answer."""

    pass


class SuggestionRejected(SuggestionError):
    """Raised when an AI answer does not have any of the accepted shapes."""

    def __init__(self, expected: str, received: object):
        """Initialize the rejection.

        Args:
            expected: Description of the accepted shape
            received: The raw value that was rejected

        """
        self.expected = expected
        self.received = received
        preview = repr(received)
        if len(preview) > 80:
            preview = preview[:77] + '...'
        super().__init__(f'Expected {expected}, got {preview}')
