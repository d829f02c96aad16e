from __future__ import annotations

import argparse
import json
import logging
import sys

import uvicorn

from depreport.errors import ConfigurationError, NoMatchError
from depreport.report import DependencyReport
from depreport.summarize import summarize_report


logger = logging.getLogger("depreport")


def cmd_report(args: argparse.Namespace) -> int:
	try:
		runner = DependencyReport(
			{
				"files": args.patterns,
				"exclude_glob": args.exclude,
				"root": args.root,
				"workers": args.workers,
				"default_import_label": args.default_label,
			}
		)
		report = runner.run()
	except ConfigurationError as e:
		logger.error("%s", e)
		return 2
	except NoMatchError as e:
		logger.error("%s", e)
		return 1

	if args.summary:
		print(summarize_report(report, runner.failures))
		return 0

	if args.packages:
		output = {"packages": [p.to_plain_object() for p in report.get_packages(args.packages)]}
	elif args.export_names:
		output = {"exportNames": report.get_by_export_names(args.export_names)}
	else:
		output = report.to_plain_object()
	print(json.dumps(output, indent=2))
	return 0


def cmd_serve(args: argparse.Namespace) -> int:
	uvicorn.run("api:app", host=args.host, port=args.port, reload=args.reload)
	return 0


def main() -> None:
	parser = argparse.ArgumentParser(prog="depreport")
	parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
	sub = parser.add_subparsers(dest="cmd", required=True)

	pr = sub.add_parser("report", help="Report the packages imported by matching files as JSON")
	pr.add_argument("patterns", nargs="+", help="Glob patterns of files to analyze")
	pr.add_argument("--exclude", default=None, help="Glob of files to skip (default: **/node_modules/**)")
	pr.add_argument("--root", default=".", help="Directory the patterns are relative to")
	pr.add_argument("--workers", type=int, default=None)
	pr.add_argument("--packages", nargs="+", metavar="GLOB", help="Only print packages matching these globs")
	pr.add_argument("--export-names", nargs="+", metavar="NAME", help="Only print these export names")
	pr.add_argument("--default-label", default=None, help="Record default imports under this name")
	pr.add_argument("--summary", action="store_true", help="Print a text summary instead of JSON")
	pr.set_defaults(func=cmd_report)

	ps = sub.add_parser("serve", help="Run FastAPI server")
	ps.add_argument("--host", default="127.0.0.1")
	ps.add_argument("--port", type=int, default=8000)
	ps.add_argument("--reload", action="store_true")
	ps.set_defaults(func=cmd_serve)

	args = parser.parse_args()
	logging.basicConfig(
		level=logging.DEBUG if args.verbose else logging.WARNING,
		format="%(levelname)s %(name)s: %(message)s",
		stream=sys.stderr,
	)
	sys.exit(args.func(args))


if __name__ == "__main__":
	main()
