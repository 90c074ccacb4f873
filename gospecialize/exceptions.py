"""Generation exceptions."""

from typing import List, Optional
from dataclasses import dataclass


@dataclass
class ValidationError:
    """Single validation error."""
    message: str
    path: str = ""


class GenerationError(Exception):
    """Base class for every error that aborts a generation request.

    The CLI maps ``exit_code`` straight to the process exit status.
    """

    exit_code = 1


class MalformedSourceError(GenerationError):
    """Raised when the template cannot be parsed as Go source."""

    exit_code = 2

    def __init__(self, diagnostic: str, filename: str = "", line: Optional[int] = None):
        self.diagnostic = diagnostic
        self.filename = filename
        self.line = line

        location = filename or "<template>"
        if line is not None:
            location = f"{location}:{line}"
        super().__init__(f"{location}: {diagnostic}")


class MissingBindingError(GenerationError):
    """Raised when a generic type declared in the template has no binding."""

    exit_code = 2

    def __init__(self, generic_type: str):
        self.generic_type = generic_type
        super().__init__(f"missing specific type for generic type '{generic_type}'")


class ImportNormalizationError(GenerationError):
    """Raised when the final import pass rejects the assembled output."""

    def __init__(self, diagnostic: str):
        self.diagnostic = diagnostic
        super().__init__(f"import normalization failed: {diagnostic}")


class BindingParseError(GenerationError):
    """Raised for malformed type-set arguments such as ``KeyType=``."""

    exit_code = 2


class ProfileValidationError(GenerationError):
    """Raised when a syntax profile or bindings file fails validation.

    All problems found in the file are collected before raising so the
    user can fix them in one pass.
    """

    exit_code = 2

    def __init__(self, errors: List[ValidationError]):
        self.errors = errors

        # Construct error message
        messages = []
        for error in errors:
            if error.path:
                messages.append(f"Validation error: {error.path}: {error.message}")
            else:
                messages.append(f"Validation error: {error.message}")

        super().__init__("\n".join(messages))
