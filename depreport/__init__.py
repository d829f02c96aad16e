"""Static report of the packages a JavaScript/TypeScript codebase imports.

Modules:
- specifier.py: Classification of import specifiers into package keys.
- lexer.py: Lightweight ES module lexer locating import statements.
- extract.py: Two-tier import extraction producing ImportRecords.
- parse.py: Per-file parsing with failure isolation.
- report.py: Aggregation into a queryable Report.
- fs_scan.py: File discovery and glob matching.
- model.py: Data structures shared across modules.
- summarize.py: Deterministic textual summary of a report.
"""

from .errors import ConfigurationError, DepReportError, LexerError, NoMatchError, ParseError
from .report import DependencyReport, Report, ReportBuilder

__all__ = [
	"specifier",
	"lexer",
	"extract",
	"parse",
	"report",
	"fs_scan",
	"model",
	"summarize",
	"ConfigurationError",
	"DepReportError",
	"DependencyReport",
	"LexerError",
	"NoMatchError",
	"ParseError",
	"Report",
	"ReportBuilder",
]
