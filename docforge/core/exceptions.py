"""
Centralized Exception Hierarchy for DocForge.

This module defines all custom exceptions used throughout DocForge.
All exceptions inherit from DocForgeError for easy catching.

Helpful Error Messages
----------------------
Each exception includes:
- user_message: Human-readable description of what went wrong
- why_it_happened: Explanation of the root cause
- how_to_fix: Actionable steps to resolve the issue
- error_code: Unique identifier for documentation lookup (e.g., "DF-CFG-001")

Usage
-----
    from docforge.core.exceptions import DocForgeError, OutputError

    try:
        engine.write_result(run, path)
    except OutputError as e:
        logger.error(f"Write failed: {e}")
    except DocForgeError as e:
        logger.error(f"DocForge error: {e}")

Exception Hierarchy
-------------------
    DocForgeError (base)
    ├── ConfigurationError
    │   └── ConfigValidationError
    ├── StrategyRegistrationError
    ├── DocumentationError
    │   ├── BuilderStateError
    │   └── EmptySummaryError
    ├── ParseError
    ├── SourceNotFoundError
    └── OutputError

Only configuration and output failures abort a run. Gaps found while
documenting a single construct are recovered locally by the caller.
"""

from typing import Any, List, Optional
import builtins
import re


def sanitize_path(path: str) -> str:
    """Sanitize a file path to avoid leaking the user's home directory.

    Args:
        path: Original file path

    Returns:
        Sanitized path with the home directory replaced
    """
    if not path:
        return path

    patterns = [
        # Windows user paths: C:\Users\username -> <user-home>
        (r"[A-Za-z]:\\Users\\[^\\]+", r"<user-home>"),
        # Unix/Mac home paths: /home/username or /Users/username -> <user-home>
        (r"/(?:home|Users)/[^/]+", r"<user-home>"),
    ]

    result = path
    for pattern, replacement in patterns:
        result = re.sub(pattern, replacement, result)

    return result


def get_root_cause(exc: BaseException) -> BaseException:
    """Extract the root cause from a chain of exceptions.

    Args:
        exc: Exception to analyze

    Returns:
        Root cause exception (may be the same as input)
    """
    seen = set()
    current = exc

    while current is not None:
        if id(current) in seen:
            break
        seen.add(id(current))

        # Prefer explicit cause over implicit context
        if current.__cause__ is not None:
            current = current.__cause__
        elif current.__context__ is not None:
            current = current.__context__
        else:
            break

    return current


class DocForgeError(Exception):
    """
    Base exception for all DocForge errors.

    Includes helpful error information:
    - error_code: Unique code for documentation lookup (e.g., "DF-ERR-001")
    - why_it_happened: Explanation of the root cause
    - how_to_fix: List of actionable suggestions

    Example
    -------
        try:
            engine.document(tree)
        except DocForgeError as e:
            logger.error(f"Documentation failed: {e}")
            print(f"Fix: {e.how_to_fix}")
    """

    error_code: str = "DF-ERR-000"
    why_it_happened: str = "An unexpected error occurred"
    how_to_fix: List[str] = ["Check the error message for details"]

    def __init__(
        self,
        message: str,
        *,
        error_code: Optional[str] = None,
        why_it_happened: Optional[str] = None,
        how_to_fix: Optional[List[str]] = None,
    ) -> None:
        """Initialize DocForgeError with helpful information.

        Args:
            message: Human-readable error message
            error_code: Unique identifier (e.g., "DF-OUT-001")
            why_it_happened: Explanation of root cause
            how_to_fix: List of actionable fix suggestions
        """
        super().__init__(sanitize_path(message))

        if error_code is not None:
            self.error_code = error_code
        if why_it_happened is not None:
            self.why_it_happened = why_it_happened
        if how_to_fix is not None:
            self.how_to_fix = how_to_fix

    @property
    def user_message(self) -> str:
        """Get the user-friendly error message."""
        return str(self)

    def get_root_cause(self) -> BaseException:
        """Get the root cause of this exception chain."""
        return get_root_cause(self)


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigurationError(DocForgeError):
    """
    Base exception for configuration problems.

    Raised before any construct is processed; a run never starts with a
    broken configuration.
    """

    error_code = "DF-CFG-000"
    why_it_happened = "The documentation configuration could not be used"
    how_to_fix = [
        "Check docforge.yaml for syntax errors",
        "Run 'docforge config --default' to see a valid configuration",
    ]


class ConfigValidationError(ConfigurationError):
    """
    Raised when a configuration value is invalid.

    Typical causes are a template that references an unknown placeholder
    or a required template that is missing or empty.

    Attributes
    ----------
    field : str
        The configuration field that failed validation
    value : any
        The invalid value
    """

    error_code = "DF-CFG-001"
    why_it_happened = (
        "A configuration value is invalid. "
        "A template may reference a placeholder that does not exist"
    )
    how_to_fix = [
        "Check the template placeholders in docforge.yaml",
        "Only use the placeholders listed for each section",
        "Run 'docforge config --default' to compare with the defaults",
    ]

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Any = None,
        *,
        error_code: Optional[str] = None,
        why_it_happened: Optional[str] = None,
        how_to_fix: Optional[List[str]] = None,
    ) -> None:
        super().__init__(
            message,
            error_code=error_code,
            why_it_happened=why_it_happened,
            how_to_fix=how_to_fix,
        )
        self.field = field
        self.value = value


class StrategyRegistrationError(DocForgeError):
    """Raised when two strategies claim the same construct kind."""

    error_code = "DF-REG-001"
    why_it_happened = "More than one documentation strategy supports the same kind"
    how_to_fix = [
        "Register exactly one strategy per construct kind",
    ]


# ============================================================================
# Documentation Exceptions
# ============================================================================


class DocumentationError(DocForgeError):
    """
    Base exception for documentation synthesis errors.

    Raised when a structured comment cannot be assembled.
    """

    error_code = "DF-DOC-000"
    why_it_happened = "A documentation comment could not be assembled"
    how_to_fix = ["Check the construct that was being documented"]


class BuilderStateError(DocumentationError):
    """Raised when a builder is used after build() was called."""

    error_code = "DF-DOC-001"
    why_it_happened = "The documentation builder was already built"
    how_to_fix = ["Create a new builder for every construct"]


class EmptySummaryError(DocumentationError):
    """Raised when build() is called without any summary text."""

    error_code = "DF-DOC-002"
    why_it_happened = "Every documentation comment needs a summary"
    how_to_fix = [
        "Check that the summary template is not empty",
    ]


# ============================================================================
# File Exceptions
# ============================================================================


class ParseError(DocForgeError):
    """Raised when a source file cannot be parsed."""

    error_code = "DF-PARSE-001"
    why_it_happened = "The source file could not be parsed"
    how_to_fix = [
        "Check that the file is valid C#",
        "Install the grammar: pip install tree-sitter-c-sharp",
    ]


class SourceNotFoundError(DocForgeError):
    """Raised when the source file or directory does not exist."""

    error_code = "DF-FILE-001"
    why_it_happened = "The specified file or directory could not be found"
    how_to_fix = [
        "Check that the path is correct",
        "Ensure you have read permissions for the file",
    ]


class OutputError(DocForgeError):
    """
    Raised when the rewritten source cannot be persisted.

    The original file is left untouched when this is raised.
    """

    error_code = "DF-OUT-001"
    why_it_happened = "The documented source could not be written"
    how_to_fix = [
        "Check disk space and write permissions",
        "Use --output to write to a different location",
    ]


# ============================================================================
# Error Info Lookup
# ============================================================================


STANDARD_ERROR_INFO: dict[type, dict[str, Any]] = {
    builtins.FileNotFoundError: {
        "error_code": "DF-FILE-001",
        "why_it_happened": "The specified file or directory could not be found",
        "how_to_fix": [
            "Check that the file path is correct",
            "Ensure you have read permissions for the file",
        ],
    },
    builtins.PermissionError: {
        "error_code": "DF-FILE-002",
        "why_it_happened": "You don't have permission to access this file or directory",
        "how_to_fix": [
            "Check file permissions: ls -la <file>",
            "Ensure you own the file or have read/write access",
        ],
    },
    ModuleNotFoundError: {
        "error_code": "DF-DEP-001",
        "why_it_happened": "A required Python package is not installed",
        "how_to_fix": [
            "Install the missing package: pip install <package-name>",
        ],
    },
    OSError: {
        "error_code": "DF-SYS-001",
        "why_it_happened": "A system-level error occurred",
        "how_to_fix": [
            "Check disk space and permissions",
        ],
    },
}


def get_error_info(exc: BaseException) -> dict[str, Any]:
    """Get helpful error information for any exception.

    Args:
        exc: Exception to get info for

    Returns:
        Dict with error_code, why_it_happened, how_to_fix
    """
    if isinstance(exc, DocForgeError):
        return {
            "error_code": exc.error_code,
            "why_it_happened": exc.why_it_happened,
            "how_to_fix": exc.how_to_fix,
        }

    exc_type = type(exc)
    if exc_type in STANDARD_ERROR_INFO:
        return STANDARD_ERROR_INFO[exc_type]

    for parent_type, info in STANDARD_ERROR_INFO.items():
        if isinstance(exc, parent_type):
            return info

    return {
        "error_code": "DF-ERR-999",
        "why_it_happened": "An unexpected error occurred",
        "how_to_fix": [
            "Check the error message for details",
            "Run again with --verbose for a full traceback",
        ],
    }
