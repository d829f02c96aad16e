from textwrap import dedent

import pytest

from depreport.errors import LexerError
from depreport.lexer import scan


def specifiers(source):
	return [source[o.start:o.end] for o in scan(source)]


def test_static_imports():
	code = dedent(
		"""
		import { a } from "pkg";
		import Default, * as ns from 'other'
		import './side-effect.css'
		import {
			b,
			c as d,
		} from 'multi'
		"""
	)
	occurrences = scan(code)
	assert [code[o.start:o.end] for o in occurrences] == ["pkg", "other", "./side-effect.css", "multi"]
	assert not any(o.dynamic for o in occurrences)
	first = occurrences[0]
	assert code[first.statement_start:first.statement_end] == 'import { a } from "pkg"'


def test_dynamic_import():
	code = "async function load() { const m = await import('./lazy'); return m }"
	occurrences = scan(code)
	assert len(occurrences) == 1
	assert occurrences[0].dynamic
	assert code[occurrences[0].start:occurrences[0].end] == "'./lazy'"


def test_dynamic_import_inside_template():
	assert specifiers("const t = `${import('a')}`") == ["'a'"]


def test_ignores_lookalikes():
	code = dedent(
		"""
		// import a from 'commented'
		/* import b from 'block' */
		const s = "import c from 'string'"
		const r = /import d from 'regex'/g
		const url = import.meta.url
		loader.import('method')
		"""
	)
	assert scan(code) == []


def test_export_from():
	code = dedent(
		"""
		export { a } from 'b'
		export * from 'c'
		export * as ns from 'd'
		export { e };
		export const f = 1 / 2
		"""
	)
	assert specifiers(code) == ["b", "c", "d"]


@pytest.mark.parametrize(
	"code",
	[
		"const el = <div>it's broken</div>;",
		"function f() {\n\treturn 1\n",
		"const s = 'unterminated\n",
		"const t = `never closed",
		"/* open comment",
		"import { a from 'x'",
		"call(]",
	],
)
def test_lexer_errors(code):
	with pytest.raises(LexerError):
		scan(code)


def test_property_named_import_after_whitespace():
	code = "loader\n\t.  import('x')\nconst all = [...import.meta.urls]"
	assert scan(code) == []


def test_many_imports():
	code = "\n".join(f"import {{ a{i} }} from 'pkg-{i}'" for i in range(20000))
	occurrences = scan(code)
	assert len(occurrences) == 20000
	assert code[occurrences[-1].start:occurrences[-1].end] == "pkg-19999"
