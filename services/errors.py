"""
Import Errors

Container-level failures raised by the parsers. Item-level failures are
whatever the store raises and are handled by the import orchestrator.
"""


class RecipeImportError(Exception):
    """Base class for failures that abort a whole import."""
    pass


class NoDataFound(RecipeImportError):
    """Raised when the input is empty or contains no recipes."""

    def __init__(self, message='No data found in the file'):
        super().__init__(message)


class DecodeError(RecipeImportError):
    """Raised when the input cannot be decoded as the expected format at all."""

    def __init__(self, message, cause=None):
        super().__init__(message)
        self.cause = cause

    def __str__(self):
        if self.cause is not None:
            return f"Could not decode recipe file: {self.args[0]} ({self.cause})"
        return f"Could not decode recipe file: {self.args[0]}"
