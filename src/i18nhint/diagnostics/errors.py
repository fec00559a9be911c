"""i18nhint exception hierarchy with structured diagnostics.

None of these escape the public operations of the package: extraction
strategies raise them, and the cascade, cache and scheduler turn them into
"no data for this input". They are public so that strategies can be called
and tested individually.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic


class HintError(Exception):
    """Base exception for all i18nhint errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize HintError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.message)
        else:
            self.diagnostic = None
            super().__init__(message)


class ResourceReadError(HintError):
    """A resource file could not be turned into text."""


class ExtractionError(HintError):
    """An extraction strategy could not make sense of its input.

    Raised inside a strategy; the cascade catches it and tries the next one.
    """


class LiteralSyntaxError(ExtractionError):
    """Text that was expected to be a literal is not literal syntax.

    Attributes:
        lineno: Line (1-indexed, relative to the evaluated text) where
            evaluation stopped, or 0 at end of input
    """

    def __init__(self, message: str, *, lineno: int = 0) -> None:
        super().__init__(message)
        self.lineno = lineno


class SandboxError(ExtractionError):
    """Sandboxed module evaluation failed."""


class SandboxUnavailableError(SandboxError):
    """No JavaScript runtime is available for sandboxed evaluation."""


class SandboxTimeoutError(SandboxError):
    """Sandboxed evaluation exceeded its time budget."""
