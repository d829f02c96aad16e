"""Classification of raw import specifiers into package or path keys."""

from __future__ import annotations

import re
from typing import Optional
from urllib.parse import quote


# A word character or "@" that is not the start of a URL (ex: https://)
BARE_SPECIFIER_RE = re.compile(r"^[@A-Za-z0-9_](?!.*://)")
JS_EXTENSION_RE = re.compile(r"\.m?js$", re.IGNORECASE)
MACRO_RE = re.compile(r"[./]macro(\.js)?$")
SCOPED_PACKAGE_RE = re.compile(r"^(?:@([^/]+?)[/])?([^/]+?)$")

MAX_PACKAGE_NAME_LENGTH = 214
BLACKLISTED_NAMES = {"node_modules", "favicon.ico"}
SPECIAL_CHARS_RE = re.compile(r"[~'!()*]")

NODE_BUILTINS = frozenset(
	{
		"assert", "async_hooks", "buffer", "child_process", "cluster",
		"console", "constants", "crypto", "dgram", "diagnostics_channel",
		"dns", "domain", "events", "fs", "http", "http2", "https",
		"inspector", "module", "net", "os", "path", "perf_hooks",
		"process", "punycode", "querystring", "readline", "repl",
		"stream", "string_decoder", "sys", "timers", "tls", "trace_events",
		"tty", "url", "util", "v8", "vm", "wasi", "worker_threads", "zlib",
	}
)


def _url_safe(value: str) -> bool:
	# Same safe set as encodeURIComponent
	return quote(value, safe="!*'()") == value


def is_valid_package_name(name: Optional[str]) -> bool:
	"""Return True when ``name`` could be published as a new npm package."""
	if not name:
		return False
	if name.startswith((".", "_")):
		return False
	if name.strip() != name:
		return False
	if name.lower() in BLACKLISTED_NAMES:
		return False
	if name in NODE_BUILTINS:
		return False
	if len(name) > MAX_PACKAGE_NAME_LENGTH:
		return False
	if name.lower() != name:
		return False
	if SPECIAL_CHARS_RE.search(name.split("/")[-1]):
		return False
	if _url_safe(name):
		return True

	match = SCOPED_PACKAGE_RE.match(name)
	if match and match.group(1):
		user, package = match.group(1), match.group(2)
		if package.startswith((".", "_")):
			return False
		return _url_safe(user) and _url_safe(package)
	return False


def remove_query_string(specifier: str) -> str:
	index = specifier.find("?")
	if index >= 0:
		return specifier[:index]
	return specifier


def strip_js_extension(specifier: str) -> str:
	return JS_EXTENSION_RE.sub("", specifier)


def classify(specifier: Optional[str]) -> Optional[str]:
	"""Normalize an import specifier.

	Bare package names are returned as-is. Values carrying a query string or
	a ``.js``/``.mjs`` extension are cleaned, and the extension is only dropped
	when what remains is a valid package name (``lodash.js`` -> ``lodash``).
	Anything else is a path and keeps its extension.
	"""
	if not specifier:
		return None

	if (
		BARE_SPECIFIER_RE.match(specifier)
		and "?" not in specifier
		and not JS_EXTENSION_RE.search(specifier)
	):
		return specifier

	cleaned = remove_query_string(specifier)
	without_extension = strip_js_extension(cleaned)
	if is_valid_package_name(without_extension):
		return without_extension
	return cleaned or None


def is_relative(specifier: str) -> bool:
	return specifier in (".", "..") or specifier.startswith(("./", "../"))


def is_macro(specifier: str) -> bool:
	"""Compile-time macro imports are never run-time dependencies."""
	return bool(MACRO_RE.search(specifier))
