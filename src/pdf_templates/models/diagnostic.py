"""Models describing why a line pattern does or does not match."""

from enum import Enum

from pydantic import BaseModel, Field


class DiagnosticCode(str, Enum):
    NO_CANDIDATE_LINE = "NO_CANDIDATE_LINE"
    MISSING_PATTERN = "MISSING_PATTERN"
    PATTERN_ERROR = "PATTERN_ERROR"


class DiagnosticStatus(BaseModel):
    """Structural explanation when no line could be tested."""

    code: DiagnosticCode
    status: str = Field(description="Message for the template author")
    detail: str | None = Field(default=None, description="Underlying error text")


class LineDiagnostic(BaseModel):
    """Outcome of testing the line pattern against the first candidate line."""

    candidate_line: str
    line_number: int = Field(ge=1)
    matched: bool
    captured_groups: list[str] = Field(default_factory=list)
    mapped_fields: dict[str, str] = Field(
        default_factory=dict, description="Captured text per mapped field"
    )


DiagnosticReport = DiagnosticStatus | LineDiagnostic
