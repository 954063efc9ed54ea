"""Runtime limits and defaults for template-driven extraction.

All values are constants and are imported where needed. The limits bound
the amount of text a single extraction run will scan so that user-authored
patterns cannot backtrack for an unbounded time.
"""

from decimal import Decimal
from pathlib import Path

# Documents larger than this are rejected before any pattern runs.
MAX_TEXT_CHARS = 500_000

# Candidate lines longer than this are skipped.
MAX_LINE_CHARS = 2_000

# Upper bound for the lazy "capture anything" fragment of a text column.
MAX_TEXT_COLUMN_CHARS = 300

# Allowed gap between the declared total and the sum of the line totals.
TOTAL_MISMATCH_TOLERANCE = Decimal("50")

# Longest display name a template can be saved with.
MAX_TEMPLATE_NAME_CHARS = 255

DEFAULT_TEMPLATE_DIR = Path("config/templates")
TEMPLATE_FILE_SUFFIX = "_template.yaml"

LOG_LEVEL_ENV_VAR = "PDF_TEMPLATES_LOG_LEVEL"
