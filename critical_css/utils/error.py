"""Errors and warnings raised by the critical CSS inliner."""

from typing import List, Optional


class CriticalCSSError(Exception):
    """Base exception for the critical CSS inliner."""
    pass


class InvalidConfigurationError(CriticalCSSError):
    """Raised when plugin options do not match the options schema."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__(
            "Invalid configuration object: " + "; ".join(self.errors)
        )


class EngineError(CriticalCSSError):
    """Raised by engine adapters when the engine itself fails."""

    def __init__(self, message: str, stderr: Optional[str] = None,
                 returncode: Optional[int] = None):
        self.stderr = stderr
        self.returncode = returncode
        super().__init__(message)


class EngineInvocationError(CriticalCSSError):
    """Raised when critical CSS could not be generated for one HTML file."""

    def __init__(self, filename: str, cause: BaseException):
        self.filename = filename
        self.cause = cause
        # Set by the orchestrator once every sibling task has settled
        self.result = None
        super().__init__(f"Failed to process {filename}: {cause}")


class AssetWriteError(CriticalCSSError):
    """Raised by strict asset sets when two source files write the same asset."""

    def __init__(self, filename: str, owner: Optional[str], previous_owner: Optional[str]):
        self.filename = filename
        self.owner = owner
        self.previous_owner = previous_owner
        super().__init__(
            f"Asset {filename} written by {owner} was already written by {previous_owner}"
        )


class CriticalCSSWarning(UserWarning):
    """Base warning for the critical CSS inliner."""
    pass


class DiscoveryEmptyWarning(CriticalCSSWarning):
    """Issued when the asset set holds no HTML files to process."""
    pass


# Exported exceptions
__all__ = [
    'CriticalCSSError',
    'InvalidConfigurationError',
    'EngineError',
    'EngineInvocationError',
    'AssetWriteError',
    'CriticalCSSWarning',
    'DiscoveryEmptyWarning',
]
