"""Explain how the line pattern behaves on the first product line.

The diagnostic view lets a template author see why no products are found
without running the whole extraction: it picks the first candidate line of
the table and reports what the configured pattern captures on it.
"""

from pdf_templates.models.diagnostic import (
    DiagnosticCode,
    DiagnosticReport,
    DiagnosticStatus,
    LineDiagnostic,
)
from pdf_templates.models.template import ProductsConfig
from pdf_templates.parsers.extractors.regex_extractor import (
    PatternCompileError,
    RegexExtractor,
    compile_pattern,
)
from pdf_templates.parsers.extractors.table_scanner import iter_candidate_lines
from pdf_templates.parsers.line_item_extractor import LINE_PATTERN_FIELD
from pdf_templates.utils.logger import setup_logger

logger = setup_logger(__name__)


def diagnose(text: str, products_config: ProductsConfig) -> DiagnosticReport:
    """Test the line pattern against the first candidate product line.

    Args:
        text: Full document text
        products_config: Table markers, line pattern and field mapping

    Returns:
        DiagnosticStatus when no line could be tested (no candidate line,
        no pattern, invalid pattern), otherwise a LineDiagnostic with the
        literal line, whether it matched and the captured groups
    """
    candidate = next(
        iter_candidate_lines(
            text,
            products_config.table_start_marker,
            products_config.table_end_marker,
        ),
        None,
    )
    if candidate is None:
        return DiagnosticStatus(
            code=DiagnosticCode.NO_CANDIDATE_LINE,
            status="No product line found after the table start marker.",
        )

    if not products_config.line_pattern:
        return DiagnosticStatus(
            code=DiagnosticCode.MISSING_PATTERN,
            status="No line pattern configured.",
        )

    try:
        pattern = compile_pattern(products_config.line_pattern, LINE_PATTERN_FIELD)
    except PatternCompileError as e:
        return DiagnosticStatus(
            code=DiagnosticCode.PATTERN_ERROR,
            status="The line pattern is not a valid regular expression.",
            detail=e.message,
        )

    match = pattern.search(candidate.text)
    if not match:
        logger.debug(
            "Diagnostic line does not match",
            extra={"line_number": candidate.line_number, "line": candidate.text},
        )
        return LineDiagnostic(
            candidate_line=candidate.text,
            line_number=candidate.line_number,
            matched=False,
        )

    groups = RegexExtractor.captured_groups(match)
    mapped_fields = {
        field: groups[index - 1]
        for field, index in products_config.field_mapping.as_dict().items()
        if index <= len(groups)
    }
    return LineDiagnostic(
        candidate_line=candidate.text,
        line_number=candidate.line_number,
        matched=True,
        captured_groups=groups,
        mapped_fields=mapped_fields,
    )
