"""
Centralized error handling utilities.

## Quick Reference

| Scenario | Use This |
|----------|----------|
| Mapping document is broken | `MappingParseError` subclasses (raised by `serialization.parse`) |
| Note text cannot be read | `InvalidNoteFormatError` |
| Config file syntax error | `ConfigFileInvalidError` |
| Config value invalid | `ConfigValidationError` (see `wrap_pydantic_error`) |

### Handling Patterns

| Pattern | Code |
|---------|------|
| Convert Pydantic errors | `raise wrap_pydantic_error(e, str(path)) from e` |
| Show an error in the CLI | `message, hint = format_error_for_display(e)` |
| Try several files, collect errors | `collector = collect_errors("validate"); with collector.try_operation(...): ...` |

## Example: validating several mapping files

```python
from launchmapper.exceptions import collect_errors

collector = collect_errors("validate mappings")
for path in paths:
    with collector.try_operation(f"validate {path.name}"):
        serialization.load(path)

if collector.has_errors:
    click.echo(collector.get_summary(), err=True)
```
"""

import logging
from typing import Any, Optional

from .base import LaunchMapperError
from .config import ConfigFileInvalidError, ConfigValidationError

logger = logging.getLogger(__name__)


def wrap_pydantic_error(error: Exception, file_path: str) -> LaunchMapperError:
    """
    Convert Pydantic validation errors to LaunchMapper exceptions.

    Args:
        error: The Pydantic ValidationError
        file_path: Path to the config file that failed validation

    Returns:
        A ConfigurationError with appropriate type and message
    """
    from pydantic import ValidationError

    error_msg = str(error)

    # Valid JSON is a precondition for field validation
    if "Invalid JSON" in error_msg or "json_invalid" in error_msg:
        if "Invalid JSON:" in error_msg:
            parse_error = error_msg.split("Invalid JSON:")[1].split("[type=")[0].strip()
        else:
            parse_error = error_msg

        return ConfigFileInvalidError(file_path, parse_error)

    if isinstance(error, ValidationError):
        errors = error.errors()
        if errors:
            if len(errors) == 1:
                first_error = errors[0]
                field = ".".join(str(loc) for loc in first_error.get('loc', ('unknown',)))
                reason = first_error.get('msg', 'validation failed')
                value = first_error.get('input', None)

                return ConfigValidationError(
                    field=field,
                    value=value,
                    error_msg=reason,
                    file_path=file_path
                )

            error_lines = []
            for err in errors:
                field = ".".join(str(loc) for loc in err.get('loc', ('unknown',)))
                msg = err.get('msg', 'validation failed')
                error_lines.append(f"  - {field}: {msg}")

            combined_msg = f"{len(errors)} validation errors:\n" + "\n".join(error_lines)

            return ConfigValidationError(
                field="multiple fields",
                value=None,
                error_msg=combined_msg,
                file_path=file_path
            )

    return ConfigValidationError(
        field="unknown",
        value=None,
        error_msg=error_msg,
        file_path=file_path
    )


def format_error_for_display(error: Exception) -> tuple[str, Optional[str]]:
    """
    Format an exception for user display.

    Args:
        error: The exception to format

    Returns:
        Tuple of (user_message, recovery_hint or None)
    """
    if isinstance(error, LaunchMapperError):
        return error.user_message, error.recovery_hint

    error_type = type(error).__name__
    return f"{error_type}: {error}", None


def collect_errors(operation: str) -> "ErrorCollector":
    """
    Create an error collector for batch operations.

    Args:
        operation: Description of the overall operation

    Returns:
        ErrorCollector instance
    """
    return ErrorCollector(operation)


class ErrorCollector:
    """
    Collects multiple errors during batch operations.

    Allows operations to continue even if some fail, then
    report all failures at once. Only LaunchMapperError instances are
    collected; anything else propagates.
    """

    def __init__(self, operation: str):
        """
        Initialize error collector.

        Args:
            operation: Description of the overall operation
        """
        self.operation = operation
        self.errors: list[tuple[str, LaunchMapperError]] = []
        self.success_count = 0

    @property
    def has_errors(self) -> bool:
        """Check if any errors were collected."""
        return len(self.errors) > 0

    @property
    def error_count(self) -> int:
        """Get the number of errors collected."""
        return len(self.errors)

    def try_operation(self, sub_operation: str) -> "ErrorCollector._OperationContext":
        """
        Context manager for a single operation within the batch.

        Args:
            sub_operation: Description of this specific operation
        """
        return self._OperationContext(self, sub_operation)

    def get_summary(self) -> str:
        """Get a multi-line summary of collected errors."""
        if not self.has_errors:
            return f"All operations completed successfully ({self.success_count} total)"

        summary = f"Failed {self.error_count} of {self.error_count + self.success_count} operations:\n"
        for sub_op, error in self.errors:
            summary += f"  - {sub_op}: {error.user_message}\n"

        return summary.rstrip()

    class _OperationContext:
        """Internal context manager for individual operations."""

        def __init__(self, collector: "ErrorCollector", sub_operation: str):
            self.collector = collector
            self.sub_operation = sub_operation

        def __enter__(self) -> "ErrorCollector._OperationContext":
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> bool:
            if exc_type is None:
                self.collector.success_count += 1
                return False

            if not isinstance(exc_val, LaunchMapperError):
                return False

            logger.debug(f"{self.collector.operation}: {self.sub_operation} failed: {exc_val.technical_message}")
            self.collector.errors.append((self.sub_operation, exc_val))
            return True
