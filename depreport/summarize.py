from __future__ import annotations

from collections import Counter
from typing import Iterable, List

from .fs_scan import detect_language
from .model import Package, ParseFailure
from .report import Report


def summarize_package(p: Package) -> str:
	parts: List[str] = []
	parts.append(f"Package {p.name}: imported by {len(p.filepaths)} files")
	if p.used_exports:
		usage = sorted(p.used_exports.items(), key=lambda item: (-item[1].usage, item[0]))
		parts.append(
			"  Exports: " + ", ".join(f"{name} ({u.usage})" for name, u in usage[:10])
		)
	return "\n".join(parts)


def summarize_report(report: Report, failures: Iterable[ParseFailure] = (), limit: int = 20) -> str:
	failures = list(failures)
	filepaths = {fp for p in report.packages.values() for fp in p.filepaths}
	languages = Counter(detect_language(fp) for fp in filepaths)

	lines: List[str] = []
	lines.append(
		f"Report for {', '.join(report.files)} (excluding {report.exclude_glob}): "
		f"{len(report.packages)} packages, {len(report.export_names)} export names, "
		f"{len(filepaths)} importing files"
	)
	if languages:
		lines.append(
			"Languages: " + ", ".join(f"{lang} {count}" for lang, count in sorted(languages.items()))
		)

	packages = sorted(report.packages.values(), key=lambda p: (-len(p.filepaths), p.name))
	for package in packages[:limit]:
		lines.append(summarize_package(package))

	if failures:
		lines.append(f"Failed to parse {len(failures)} files:")
		for failure in failures:
			lines.append(f"  {failure.filepath}: {failure.error}")
	return "\n".join(lines)
