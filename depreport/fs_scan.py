from __future__ import annotations

import os
from typing import Dict, Iterable, List, Optional

from wcmatch import glob as wcglob


EXTENSION_LANGUAGE: Dict[str, str] = {
	".js": "javascript",
	".jsx": "javascript",
	".mjs": "javascript",
	".cjs": "javascript",
	".ts": "typescript",
	".tsx": "typescript",
	".mts": "typescript",
	".cts": "typescript",
	".vue": "vue",
	".svelte": "svelte",
}


def detect_language(filename: str) -> str:
	_, ext = os.path.splitext(filename)
	return EXTENSION_LANGUAGE.get(ext.lower(), "unknown")


MATCH_FLAGS = wcglob.GLOBSTAR | wcglob.BRACE | wcglob.DOTGLOB | wcglob.FORCEUNIX
EXPAND_FLAGS = wcglob.GLOBSTAR | wcglob.BRACE


def glob_match(value: str, pattern: str) -> bool:
	"""minimatch-style matching: ``*`` stays within a path segment, ``**``
	spans segments and ``{a,b}`` alternates."""
	return wcglob.globmatch(value, pattern, flags=MATCH_FLAGS)


def _normalize(path: str) -> str:
	path = path.replace(os.sep, "/")
	while path.startswith("./"):
		path = path[2:]
	return path


def resolve_files(
	patterns: Iterable[str],
	exclude_glob: Optional[str] = None,
	root: str = ".",
) -> List[str]:
	"""Expand include globs into a deduplicated list of file paths.

	Paths are relative to ``root`` (unless a pattern is absolute) and use
	forward slashes. Patterns prefixed with ``!`` in ``patterns`` are
	treated as additional exclusions.
	"""
	includes: List[str] = []
	excludes: List[str] = []
	for pattern in patterns:
		if pattern.startswith("!"):
			excludes.append(_normalize(pattern[1:]))
		else:
			includes.append(pattern)
	if exclude_glob:
		excludes.append(_normalize(exclude_glob.lstrip("!")))

	files: Dict[str, None] = {}
	for pattern in includes:
		for match in sorted(wcglob.glob(pattern, flags=EXPAND_FLAGS, root_dir=root)):
			if not os.path.isfile(os.path.join(root, match)):
				continue
			path = _normalize(match)
			if any(glob_match(path, ex) for ex in excludes):
				continue
			files.setdefault(path, None)
	return list(files)
