from __future__ import annotations

import logging
import posixpath
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Dict, Iterable, List, Optional, Union

from pydantic import ValidationError

from .errors import ConfigurationError, NoMatchError
from .fs_scan import glob_match, resolve_files
from .model import (
	CamelModel,
	ExportIndexEntry,
	FileResult,
	Package,
	ParsedFile,
	ParseFailure,
	ReportOptions,
)
from .parse import parse_path
from .specifier import is_relative


logger = logging.getLogger(__name__)


def _arrify(value: Union[str, Iterable[str], None]) -> List[str]:
	if value is None:
		return []
	if isinstance(value, str):
		return [value]
	return list(value)


def package_key(filepath: str, specifier: str) -> str:
	"""Relative specifiers are only meaningful next to the file importing them."""
	if is_relative(specifier):
		return posixpath.normpath(posixpath.join(filepath, specifier))
	return specifier


class Report(CamelModel):
	files: List[str] = []
	exclude_glob: Optional[str] = None
	packages: Dict[str, Package] = {}
	export_names: Dict[str, ExportIndexEntry] = {}

	def get_packages(self, patterns: Union[str, Iterable[str]]) -> List[Package]:
		"""Packages whose key matches at least one of ``patterns``."""
		globs = _arrify(patterns)
		return [
			package
			for key, package in self.packages.items()
			if any(glob_match(key, pattern) for pattern in globs)
		]

	def get_by_export_names(self, names: Union[str, Iterable[str]]) -> List[Dict[str, Any]]:
		wanted = set(_arrify(names))
		return [
			entry.model_dump(by_alias=True)
			for name, entry in self.export_names.items()
			if name in wanted
		]

	def to_plain_object(self) -> Dict[str, Any]:
		return {
			"files": list(self.files),
			"excludeGlob": self.exclude_glob,
			"packages": {key: package.to_plain_object() for key, package in self.packages.items()},
			"exportNames": {
				name: entry.model_dump(by_alias=True) for name, entry in self.export_names.items()
			},
		}

	@classmethod
	def from_plain_object(cls, data: Dict[str, Any]) -> "Report":
		return cls.model_validate(data)


class ReportBuilder:
	"""Folds per-file results into the package and export-name indexes.

	Not thread-safe: results must be added from a single thread.
	"""

	def __init__(self) -> None:
		self.packages: Dict[str, Package] = {}
		self.export_names: Dict[str, ExportIndexEntry] = {}

	def add(self, result: Union[ParsedFile, Dict[str, Any]]) -> None:
		parsed = ParsedFile.model_validate(result)
		filepath = parsed.filepath
		for package_import in parsed.packages:
			key = package_key(filepath, package_import.name)
			package = self.packages.get(key)
			if package is None:
				package = self.packages[key] = Package(name=key)

			package.add_filepath(filepath)
			package.add_exports(package_import.export_names, filepath)

			for name in package_import.export_names:
				entry = self.export_names.get(name)
				if entry is None:
					entry = self.export_names[name] = ExportIndexEntry(name=name)
				entry.record(key, filepath)

	def build(self, files: List[str], exclude_glob: Optional[str]) -> Report:
		# the report owns copies; later adds must not reach it
		return Report(
			files=list(files),
			exclude_glob=exclude_glob,
			packages={key: p.model_copy(deep=True) for key, p in self.packages.items()},
			export_names={name: e.model_copy(deep=True) for name, e in self.export_names.items()},
		)


class DependencyReport:
	"""Runs discovery, parallel parsing and aggregation for one set of options."""

	def __init__(self, options: Union[ReportOptions, Dict[str, Any], None] = None) -> None:
		if options is None:
			raise ConfigurationError("No options passed to DependencyReport.")
		if isinstance(options, dict) and "files" not in options:
			raise ConfigurationError("No files passed to DependencyReport.")
		try:
			self.options = ReportOptions.model_validate(options)
		except ValidationError as e:
			raise ConfigurationError(f"Invalid DependencyReport options: {e}") from e

		self.report: Optional[Report] = None
		self.failures: List[ParseFailure] = []

	@property
	def exclude_glob(self) -> str:
		return self.options.resolved_exclude_glob

	def _parse_all(self, filepaths: List[str]) -> Dict[str, FileResult]:
		results: Dict[str, FileResult] = {}
		with ThreadPoolExecutor(max_workers=self.options.workers) as executor:
			future_to_path = {
				executor.submit(
					parse_path,
					filepath,
					root=self.options.root,
					default_import_label=self.options.default_import_label,
				): filepath
				for filepath in filepaths
			}
			for future in as_completed(future_to_path):
				filepath = future_to_path[future]
				try:
					results[filepath] = future.result()
				except Exception as e:
					results[filepath] = ParseFailure(filepath=filepath, error=str(e) or type(e).__name__)
		return results

	def run(self) -> Report:
		filepaths = resolve_files(self.options.files, self.exclude_glob, root=self.options.root)
		if not filepaths:
			raise NoMatchError("No matching files found.")

		results = self._parse_all(filepaths)

		builder = ReportBuilder()
		self.failures = []
		# resolved order, not completion order, keeps filepath lists deterministic
		for filepath in filepaths:
			result = results[filepath]
			if isinstance(result, ParseFailure):
				logger.warning("Failed to parse %s: %s", filepath, result.error)
				self.failures.append(result)
				continue
			builder.add(result)

		self.report = builder.build(list(self.options.files), self.exclude_glob)
		logger.info(
			"Analyzed %d files: %d packages, %d export names, %d failures",
			len(filepaths),
			len(self.report.packages),
			len(self.report.export_names),
			len(self.failures),
		)
		return self.report
