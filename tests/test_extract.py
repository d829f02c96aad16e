from textwrap import dedent

from depreport.extract import clean_code_for_scanning, extract, strip_comments
from depreport.model import ImportRecord


JSX_SOURCE = dedent(
	"""
	// import Ignored from 'ignored'
	import React from 'react'
	import { render } from 'react-dom'
	const App = () => <div className="app">Don't panic</div>
	const Lazy = React.lazy(() => import('./Lazy'))
	render(<App />, root)
	"""
)


def test_named_imports_drop_aliases():
	records = extract("import { foo, bar as baz } from 'my-pkg'")
	assert records == [
		ImportRecord(specifier="my-pkg", import_all=False, default=None, namespace=False, named=["foo", "bar"])
	]


def test_default_and_named():
	(record,) = extract("import React, { useState, useEffect } from 'react'")
	assert record.default == "React"
	assert record.named == ["useState", "useEffect"]
	assert not record.import_all


def test_namespace_import():
	(record,) = extract("import * as path from 'path'")
	assert record.namespace
	assert record.default is None
	assert record.named == []
	assert not record.import_all


def test_side_effect_import():
	(record,) = extract("import './styles.css'")
	assert record.specifier == "./styles.css"
	assert record.import_all
	assert record.default is None and record.named == [] and not record.namespace


def test_dynamic_imports():
	code = dedent(
		"""
		const a = import('./lazy.js')
		const b = import(name)
		const c = import(`./pages/${page}`)
		"""
	)
	records = extract(code)
	assert [r.specifier for r in records] == ["./lazy.js"]
	assert records[0].import_all


def test_skips_type_only_and_macros():
	code = dedent(
		"""
		import type { Props } from './types'
		export type { Shape } from './shapes'
		import styled from 'styled-components/macro'
		import { type Foo, bar } from 'lib'
		"""
	)
	records = extract(code, ".ts")
	assert [(r.specifier, r.named) for r in records] == [("lib", ["bar"])]


def test_export_from_counts_as_import():
	records = extract("export { a, b as c } from 'pkg'\nexport * from 'all'")
	assert [(r.specifier, r.named, r.namespace) for r in records] == [
		("pkg", ["a", "b"], False),
		("all", [], True),
	]


def test_jsx_falls_back_to_textual_extraction():
	records = extract(JSX_SOURCE, ".jsx")
	assert [r.specifier for r in records] == ["react", "react-dom", "./Lazy"]
	assert records[0].default == "React"
	assert records[1].named == ["render"]
	assert records[2].import_all


def test_lexer_failure_uses_same_fallback():
	assert extract(JSX_SOURCE, ".js") == extract(JSX_SOURCE, ".jsx")


def test_clean_code_for_scanning():
	code = dedent(
		"""
		/* import nope from 'nope' */
		import a from 'a' // trailing
		const x = <X/>
		import('./b')
		import { c } from "c"
		"""
	)
	assert clean_code_for_scanning(code).splitlines() == [
		"import a from 'a'",
		"import('./b')",
		'import { c } from "c"',
	]


def test_strip_comments_keeps_strings():
	code = 'const url = "http://example.com" // comment\nconst s = `/* kept */`'
	assert strip_comments(code) == 'const url = "http://example.com" \nconst s = `/* kept */`'


def test_comments_inside_import_clause():
	(record,) = extract("import {\n\ta, // first\n\tb, /* second */\n} from 'pkg'")
	assert record.named == ["a", "b"]

	(record,) = extract("import /* ui */ React from 'react'")
	assert record.default == "React"
	assert not record.namespace
	assert not record.import_all
