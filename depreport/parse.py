from __future__ import annotations

import os
from typing import List, Optional

from .extract import extract
from .model import FileResult, PackageImport, ParsedFile, ParseFailure


def read_text(path: str) -> str:
	with open(path, "r", encoding="utf-8") as fh:
		return fh.read()


def parse_file(
	filepath: str,
	contents: str,
	extension: Optional[str] = None,
	default_import_label: Optional[str] = None,
) -> FileResult:
	"""Parse one file's contents in isolation.

	Never raises: a file that cannot be parsed yields a ``ParseFailure`` so a
	single malformed file cannot abort a run. ``default_import_label``, when
	set, replaces the local name of default imports in the export names.
	"""
	if extension is None:
		extension = os.path.splitext(filepath)[1]

	try:
		imports = extract(contents, extension)
	except Exception as e:
		return ParseFailure(filepath=filepath, error=str(e) or type(e).__name__)

	packages: List[PackageImport] = []
	export_names: List[str] = []
	for record in imports:
		names = list(record.named)
		if record.default:
			names.append(default_import_label or record.default)
		packages.append(PackageImport(name=record.specifier, export_names=names))
		export_names.extend(names)

	return ParsedFile(
		filepath=filepath,
		imports=imports,
		packages=packages,
		export_names=export_names,
	)


def parse_path(
	filepath: str,
	root: str = ".",
	default_import_label: Optional[str] = None,
) -> FileResult:
	"""Read ``filepath`` (relative to ``root``) and parse it."""
	try:
		contents = read_text(os.path.join(root, filepath))
	except (OSError, UnicodeDecodeError) as e:
		return ParseFailure(filepath=filepath, error=str(e))
	return parse_file(filepath, contents, default_import_label=default_import_label)
