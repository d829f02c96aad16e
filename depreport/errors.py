from __future__ import annotations


class DepReportError(Exception):
	"""Base class for every error raised by depreport."""


class ConfigurationError(DepReportError):
	"""Options are missing or carry no include patterns."""


class NoMatchError(DepReportError):
	"""File discovery produced zero candidate files."""


class ParseError(DepReportError):
	"""A single file could not be parsed. Never aborts a run."""


class LexerError(ParseError):
	def __init__(self, message: str, position: int) -> None:
		super().__init__(f"{message} at offset {position}")
		self.position = position
