"""Import statement extraction.

Two tiers behind a single :func:`extract` call. The lexer runs on the file
as-is; when it cannot follow the syntax (JSX, decorators, broken files), the
source is reduced to its recognizable import statements with regular
expressions and that synthetic source is lexed instead.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from .lexer import ImportOccurrence, scan
from .errors import LexerError
from .model import ImportRecord
from .specifier import classify, is_macro


logger = logging.getLogger(__name__)

JSX_EXTENSIONS = {".jsx", ".tsx"}

ESM_IMPORT_RE = re.compile(
	r"""\bimport(?:["'\s]*([\w*${}\n\r\t, ]+)\s*from\s*)?\s*["'](.*?)["']""",
	re.MULTILINE,
)
ESM_DYNAMIC_IMPORT_RE = re.compile(r"""\bimport\((?:['"][^'"\n]+['"]|`[^$`]+`)\)""")

DYNAMIC_SPECIFIER_RE = re.compile(r"""^\s*(['"])([^'"\n]*)\1\s*$""")
TYPE_ONLY_RE = re.compile(r"^(?:import|export)\s+type\s+(?!from\b)(?=[\w${*])")
DEFAULT_IMPORT_RE = re.compile(r"^import\s+([\w$]+)(?:\s*,|\s+from\b)")
HAS_NAMED_IMPORTS_RE = re.compile(r"^[\w\s,$*]*\{(.*)\}", re.DOTALL)
SPLIT_NAMED_IMPORTS_RE = re.compile(r"\bas\s+[\w$]+|,")
INLINE_TYPE_RE = re.compile(r"^type\s+")


def strip_comments(source: str) -> str:
	"""Remove line and block comments, leaving string and template contents alone."""
	result: List[str] = []
	i = 0
	n = len(source)

	while i < n:
		c = source[i]

		if c in "'\"`":
			result.append(c)
			i += 1
			while i < n and source[i] != c:
				if source[i] == "\\":
					result.append(source[i:i + 2])
					i += 2
					continue
				if c != "`" and source[i] == "\n":
					break
				result.append(source[i])
				i += 1
			if i < n and source[i] == c:
				result.append(c)
				i += 1
			continue

		if c == "/" and i + 1 < n and source[i + 1] == "/":
			while i < n and source[i] != "\n":
				i += 1
			continue

		if c == "/" and i + 1 < n and source[i + 1] == "*":
			close = source.find("*/", i + 2)
			end = n if close < 0 else close + 2
			# keep line numbers stable
			result.append("\n" * source.count("\n", i, end))
			i = end
			continue

		result.append(c)
		i += 1

	return "".join(result)


def clean_code_for_scanning(source: str) -> str:
	"""Return only the import statements of ``source``, one per line."""
	code = strip_comments(source)
	matches = list(ESM_IMPORT_RE.finditer(code))
	matches.extend(ESM_DYNAMIC_IMPORT_RE.finditer(code))
	matches.sort(key=lambda match: match.start())
	return "\n".join(match.group(0) for match in matches)


def get_specifier(code: str, occurrence: ImportOccurrence) -> Optional[str]:
	text = code[occurrence.start:occurrence.end]
	if not occurrence.dynamic:
		return text
	# Only string literal arguments are supported for dynamic imports
	match = DYNAMIC_SPECIFIER_RE.match(text)
	return match.group(2) if match else None


def split_named_imports(block: str) -> List[str]:
	names: List[str] = []
	for token in SPLIT_NAMED_IMPORTS_RE.split(block):
		name = token.strip().strip("'\"")
		if not name or INLINE_TYPE_RE.match(name):
			continue
		names.append(name)
	return names


def parse_import_statement(code: str, occurrence: ImportOccurrence) -> Optional[ImportRecord]:
	specifier = classify(get_specifier(code, occurrence))
	if not specifier or is_macro(specifier):
		return None

	statement = code[occurrence.statement_start:occurrence.statement_end]
	if TYPE_ONLY_RE.match(statement):
		return None

	if occurrence.dynamic:
		return ImportRecord(specifier=specifier, import_all=True)

	# everything before the opening quote of the specifier
	clause = strip_comments(code[occurrence.statement_start:occurrence.start - 1])
	default_match = DEFAULT_IMPORT_RE.match(clause)
	default = default_match.group(1) if default_match else None
	namespace = "*" in clause
	named_match = HAS_NAMED_IMPORTS_RE.match(clause)
	named = split_named_imports(named_match.group(1)) if named_match else []

	return ImportRecord(
		specifier=specifier,
		import_all=not (default or namespace or named),
		default=default,
		namespace=namespace,
		named=named,
	)


def extract(contents: str, extension: str = "") -> List[ImportRecord]:
	occurrences: Optional[List[ImportOccurrence]] = None
	if extension.lower() not in JSX_EXTENSIONS:
		try:
			occurrences = scan(contents)
		except LexerError as e:
			logger.debug("Lexer failed (%s), retrying on extracted import statements", e)

	if occurrences is None:
		contents = clean_code_for_scanning(contents)
		occurrences = scan(contents)

	records: List[ImportRecord] = []
	for occurrence in occurrences:
		record = parse_import_statement(contents, occurrence)
		if record is not None:
			records.append(record)
	return records
