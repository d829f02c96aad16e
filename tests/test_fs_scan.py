import pytest

from depreport.fs_scan import detect_language, glob_match, resolve_files


@pytest.mark.parametrize(
	"value, pattern, expected",
	[
		("lodash", "lodash*", True),
		("lodash.merge", "lodash*", True),
		("lodash/fp", "lodash*", False),
		("react", "lodash*", False),
		("@scope/pkg", "@scope/*", True),
		("src/a.js", "**/*.js", True),
		("a.js", "**/*.js", True),
		("node_modules/x/index.js", "**/node_modules/**", True),
		("src/node_modules/x.js", "**/node_modules/**", True),
		("src/modules/x.js", "**/node_modules/**", False),
		("b.ts", "*.{js,ts}", True),
		("b.css", "*.{js,ts}", False),
		("v1.js", "v[0-9].js", True),
	],
)
def test_glob_match(value, pattern, expected):
	assert glob_match(value, pattern) is expected


def test_detect_language():
	assert detect_language("src/App.TSX") == "typescript"
	assert detect_language("index.mjs") == "javascript"
	assert detect_language("README.md") == "unknown"


def test_resolve_files(tmp_path):
	for rel in ["src/a.js", "src/b.ts", "src/c.css", "node_modules/dep/index.js", "src/skip.test.js"]:
		path = tmp_path / rel
		path.parent.mkdir(parents=True, exist_ok=True)
		path.write_text("")

	files = resolve_files(
		["**/*.js", "src/*.js", "**/*.ts", "!**/*.test.js"],
		"**/node_modules/**",
		root=str(tmp_path),
	)
	assert files == ["src/a.js", "src/b.ts"]


def test_resolve_files_no_match(tmp_path):
	assert resolve_files(["**/*.js"], root=str(tmp_path)) == []


def test_resolve_files_brace_patterns(tmp_path):
	for rel in ["src/a.js", "src/b.ts", "src/c.css"]:
		path = tmp_path / rel
		path.parent.mkdir(parents=True, exist_ok=True)
		path.write_text("")

	assert resolve_files(["src/*.{js,ts}"], root=str(tmp_path)) == ["src/a.js", "src/b.ts"]
