"""Lightweight ES module lexer.

Locates ``import``/``export ... from`` statements and dynamic ``import()``
calls by following just enough of the JavaScript grammar (strings, template
literals, comments, regular expression literals and bracket nesting) to
avoid false matches, without building an AST. Syntax it cannot follow, such
as JSX, raises :class:`LexerError`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .errors import LexerError


@dataclass
class ImportOccurrence:
	# start/end delimit the specifier text: the string contents for static
	# imports, the raw argument expression for dynamic ones.
	start: int
	end: int
	statement_start: int
	statement_end: int
	dynamic: bool = False


_VALUE = "<value>"
_CLOSERS = {")": "(", "]": "[", "}": "{"}
_REGEX_PUNCTUATORS = set("(,=:[!&|?{};+-*%<>~^")
_REGEX_KEYWORDS = {
	"return", "typeof", "instanceof", "in", "of", "new", "delete", "void",
	"throw", "case", "do", "else", "yield", "await", "default",
}


def _is_ident_start(c: str) -> bool:
	return bool(c) and (c.isalpha() or c in "$_" or (ord(c) > 127 and not c.isspace()))


def _is_ident_part(c: str) -> bool:
	return bool(c) and (c.isalnum() or c in "$_" or (ord(c) > 127 and not c.isspace()))


def _is_space(c: str) -> bool:
	return c.isspace() or c == "\ufeff"


class _Scanner:
	def __init__(self, source: str):
		self.source = source
		self.n = len(source)
		self.pos = 0
		self.last: Optional[str] = None
		# (opening token, position, dynamic import owning this paren)
		self.stack: List[Tuple[str, int, Optional[ImportOccurrence]]] = []
		self.occurrences: List[ImportOccurrence] = []

	def peek(self, offset: int = 0) -> str:
		index = self.pos + offset
		return self.source[index] if index < self.n else ""

	def scan(self) -> List[ImportOccurrence]:
		if self.source.startswith("#!"):
			self._skip_line_comment()

		while self.pos < self.n:
			c = self.source[self.pos]
			if _is_space(c):
				self.pos += 1
			elif c == "/":
				self._slash()
			elif c in "'\"":
				self._read_string()
				self.last = _VALUE
			elif c == "`":
				self.pos += 1
				self._read_template(self.pos - 1)
			elif c in "([{":
				self.stack.append((c, self.pos, None))
				self.pos += 1
				self.last = c
			elif c in _CLOSERS:
				self._close(c)
			elif _is_ident_start(c):
				self._word()
			elif c.isdigit() or (c == "." and self.peek(1).isdigit()):
				self.pos += 1
				while self.pos < self.n and (_is_ident_part(self.source[self.pos]) or self.source[self.pos] == "."):
					self.pos += 1
				self.last = _VALUE
			else:
				self.pos += 1
				self.last = c

		if self.stack:
			token, position, _ = self.stack[-1]
			raise LexerError(f"unclosed {token!r}", position)
		return self.occurrences

	# trivia

	def _skip_line_comment(self) -> None:
		newline = self.source.find("\n", self.pos)
		self.pos = self.n if newline < 0 else newline

	def _skip_block_comment(self) -> None:
		close = self.source.find("*/", self.pos + 2)
		if close < 0:
			raise LexerError("unterminated comment", self.pos)
		self.pos = close + 2

	def _skip_trivia(self) -> None:
		while self.pos < self.n:
			c = self.source[self.pos]
			if _is_space(c):
				self.pos += 1
			elif c == "/" and self.peek(1) == "/":
				self._skip_line_comment()
			elif c == "/" and self.peek(1) == "*":
				self._skip_block_comment()
			else:
				return

	# literals

	def _slash(self) -> None:
		nxt = self.peek(1)
		if nxt == "/":
			self._skip_line_comment()
		elif nxt == "*":
			self._skip_block_comment()
		elif self.last is None or self.last in _REGEX_PUNCTUATORS or self.last in _REGEX_KEYWORDS:
			self._read_regex()
			self.last = _VALUE
		else:
			self.pos += 1
			self.last = "/"

	def _read_string(self) -> Tuple[int, int]:
		"""Consume a quoted string, returning the offsets of its contents."""
		start = self.pos
		quote = self.source[start]
		self.pos += 1
		while self.pos < self.n:
			c = self.source[self.pos]
			if c == "\\":
				self.pos += 2
			elif c == quote:
				self.pos += 1
				return start + 1, self.pos - 1
			elif c in "\r\n":
				break
			else:
				self.pos += 1
		raise LexerError("unterminated string", start)

	def _read_template(self, start: int) -> None:
		while self.pos < self.n:
			c = self.source[self.pos]
			if c == "\\":
				self.pos += 2
			elif c == "`":
				self.pos += 1
				self.last = _VALUE
				return
			elif c == "$" and self.peek(1) == "{":
				self.stack.append(("${", self.pos, None))
				self.pos += 2
				self.last = "{"
				return
			else:
				self.pos += 1
		raise LexerError("unterminated template literal", start)

	def _read_regex(self) -> None:
		start = self.pos
		self.pos += 1
		in_class = False
		while True:
			if self.pos >= self.n or self.source[self.pos] in "\r\n":
				raise LexerError("unterminated regular expression", start)
			c = self.source[self.pos]
			if c == "\\":
				self.pos += 2
				continue
			self.pos += 1
			if c == "[":
				in_class = True
			elif c == "]":
				in_class = False
			elif c == "/" and not in_class:
				break
		while self.pos < self.n and _is_ident_part(self.source[self.pos]):
			self.pos += 1

	# brackets

	def _close(self, c: str) -> None:
		if not self.stack:
			raise LexerError(f"unexpected {c!r}", self.pos)
		token, position, occurrence = self.stack.pop()
		if c == "}" and token == "${":
			self.pos += 1
			self._read_template(position)
			return
		if token != _CLOSERS[c]:
			raise LexerError(f"{c!r} does not close {token!r} opened at {position}", self.pos)
		if occurrence is not None:
			occurrence.end = self.pos
			occurrence.statement_end = self.pos + 1
		self.pos += 1
		self.last = _VALUE if c in ")]" else "}"

	# words

	def _read_ident(self) -> str:
		start = self.pos
		while self.pos < self.n and _is_ident_part(self.source[self.pos]):
			self.pos += 1
		return self.source[start:self.pos]

	def _after_dot(self, start: int) -> bool:
		i = start - 1
		while i >= 0 and _is_space(self.source[i]):
			i -= 1
		if i < 0 or self.source[i] != ".":
			return False
		# spread, ex: `...import(x)`
		return not (i >= 2 and self.source[i - 2:i] == "..")

	def _word(self) -> None:
		start = self.pos
		word = self._read_ident()
		if word == "import" and not self._after_dot(start):
			self._import(start)
		elif word == "export" and not self.stack and not self._after_dot(start):
			self._export(start)
		else:
			self.last = word if word in _REGEX_KEYWORDS else _VALUE

	def _add_static(self, statement_start: int) -> None:
		start, end = self._read_string()
		self.occurrences.append(ImportOccurrence(start, end, statement_start, self.pos))
		self.last = _VALUE

	def _import(self, statement_start: int) -> None:
		self._skip_trivia()
		c = self.peek()
		if c == "(":
			occurrence = ImportOccurrence(self.pos + 1, -1, statement_start, -1, dynamic=True)
			self.occurrences.append(occurrence)
			self.stack.append(("(", self.pos, occurrence))
			self.pos += 1
			self.last = "("
		elif c == "." or self.stack:
			# import.meta, or a property/method named "import"
			self.last = _VALUE
		elif c in ("'", '"'):
			self._add_static(statement_start)
		else:
			self._import_clause(statement_start)

	def _skip_clause_braces(self) -> None:
		start = self.pos
		self.pos += 1
		while self.pos < self.n:
			c = self.source[self.pos]
			if c in "'\"":
				self._read_string()
			elif c == "/" and self.peek(1) in ("/", "*"):
				self._skip_trivia()
			elif c == "}":
				self.pos += 1
				return
			else:
				self.pos += 1
		raise LexerError("unterminated import clause", start)

	def _import_clause(self, statement_start: int) -> None:
		while True:
			self._skip_trivia()
			if self.pos >= self.n:
				raise LexerError("unterminated import statement", statement_start)
			c = self.source[self.pos]
			if c == "{":
				self._skip_clause_braces()
			elif c in "*,":
				self.pos += 1
			elif _is_ident_start(c):
				word = self._read_ident()
				if word == "from":
					self._skip_trivia()
					if self.peek() in ("'", '"'):
						self._add_static(statement_start)
						return
			else:
				# not an ES import, ex: TypeScript's `import x = require("x")`
				self.last = _VALUE
				return

	def _export(self, statement_start: int) -> None:
		self._skip_trivia()
		c = self.peek()
		if c == "*":
			self.pos += 1
			self._skip_trivia()
			if self.source.startswith("as", self.pos) and not _is_ident_part(self.peek(2)):
				self.pos += 2
				self._skip_trivia()
				if self.peek() in ("'", '"'):
					self._read_string()
				else:
					self._read_ident()
		elif c == "{":
			self._skip_clause_braces()
		else:
			self.last = None
			return

		clause_end = self.pos
		self._skip_trivia()
		if self.source.startswith("from", self.pos) and not _is_ident_part(self.peek(4)):
			self.pos += 4
			self._skip_trivia()
			if self.peek() in ("'", '"'):
				self._add_static(statement_start)
				return
		# local export list, nothing imported
		self.pos = clause_end
		self.last = "}"


def scan(source: str) -> List[ImportOccurrence]:
	"""Return every import occurrence in ``source``, in order of appearance."""
	return _Scanner(source).scan()
