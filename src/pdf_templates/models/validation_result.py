"""Validation result models for extracted purchase data.

This module defines models for capturing the outcome of checking an
extraction before it is turned into a purchase: errors, warnings, and
informational messages.
"""

from enum import Enum

from pydantic import BaseModel, Field

ContextValue = str | int | float | bool


class ValidationSeverity(str, Enum):
    """Severity levels for validation messages."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class ValidationMessage(BaseModel):
    """A single validation message."""

    severity: ValidationSeverity
    field: str | None = Field(
        default=None, description="Field name that failed validation"
    )
    message: str = Field(description="Human-readable validation message")
    code: str | None = Field(
        default=None, description="Machine-readable code (e.g., 'TOTAL_MISMATCH')"
    )
    item_index: int | None = Field(
        default=None, ge=1, description="1-based position of the offending item"
    )
    context: dict[str, ContextValue] | None = None


class ValidationResult(BaseModel):
    """Result of validating one extraction."""

    is_valid: bool = Field(
        default=True, description="True if validation passed with no errors"
    )
    errors: list[ValidationMessage] = Field(default_factory=list)
    warnings: list[ValidationMessage] = Field(default_factory=list)
    info: list[ValidationMessage] = Field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def _message(
        self,
        severity: ValidationSeverity,
        message: str,
        field: str | None,
        code: str | None,
        item_index: int | None,
        context: dict[str, ContextValue] | None,
    ) -> ValidationMessage:
        return ValidationMessage(
            severity=severity,
            field=field,
            message=message,
            code=code,
            item_index=item_index,
            context=context,
        )

    def add_error(
        self,
        message: str,
        field: str | None = None,
        code: str | None = None,
        item_index: int | None = None,
        context: dict[str, ContextValue] | None = None,
    ) -> None:
        """Add an error message and mark validation as failed."""
        self.errors.append(
            self._message(
                ValidationSeverity.ERROR, message, field, code, item_index, context
            )
        )
        self.is_valid = False

    def add_warning(
        self,
        message: str,
        field: str | None = None,
        code: str | None = None,
        item_index: int | None = None,
        context: dict[str, ContextValue] | None = None,
    ) -> None:
        self.warnings.append(
            self._message(
                ValidationSeverity.WARNING, message, field, code, item_index, context
            )
        )

    def add_info(
        self,
        message: str,
        field: str | None = None,
        code: str | None = None,
        context: dict[str, ContextValue] | None = None,
    ) -> None:
        self.info.append(
            self._message(ValidationSeverity.INFO, message, field, code, None, context)
        )
