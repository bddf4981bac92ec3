"""Custom exceptions for the docserve application.

Startup failures are raised as structured exceptions carrying an
error_code and a human-readable message, so the entry point can log a
single diagnostic line and exit.
"""


class DocServerException(Exception):
    """Base exception for all docserve errors."""

    error_code: str = "DOCSERVE_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# ============ Startup Errors ============


class CatalogScanError(DocServerException):
    """The documentation root could not be scanned for version directories."""

    error_code = "CATALOG_SCAN_ERROR"

    def __init__(self, root: str, cause: OSError):
        super().__init__(
            f"An error occurred while scanning the doc root directory. Exiting. Error: {cause}, Dir: {root}"
        )
        self.root = root
        self.cause = cause


class ConfigurationError(DocServerException):
    """Configuration issue."""

    error_code = "CONFIGURATION_ERROR"

    def __init__(self, setting: str, message: str):
        super().__init__(f"Configuration error for {setting}: {message}")
        self.setting = setting
