class ScannerError(Exception):
    """Base class for errors that abort a scan run."""


class AxeUnavailableError(ScannerError):
    """axe-core could not be loaded from the local cache or the CDN."""


class AxeRunError(ScannerError):
    """axe-core was injected but did not produce a result."""


class SummaryFileError(ScannerError):
    """The summary history exists but is not a JSON array."""

    def __init__(self, path, reason):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
