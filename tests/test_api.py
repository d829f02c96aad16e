from fastapi.testclient import TestClient

from api import app


client = TestClient(app)


def write_project(tmp_path):
	(tmp_path / "a.js").write_text("import React, { useState } from 'react'\nimport { merge } from 'lodash'\n")
	(tmp_path / "b.js").write_text("import { merge } from 'lodash.merge'\n")


def test_report(tmp_path):
	write_project(tmp_path)
	resp = client.post("/report", json={"root": str(tmp_path), "files": ["*.js"]})
	assert resp.status_code == 200
	body = resp.json()
	assert set(body["report"]["packages"]) == {"react", "lodash", "lodash.merge"}
	assert body["report"]["excludeGlob"] == "**/node_modules/**"
	assert body["failures"] == []


def test_report_queries(tmp_path):
	write_project(tmp_path)
	resp = client.post("/report", json={"root": str(tmp_path), "files": ["*.js"], "packages": ["lodash*"]})
	assert {p["name"] for p in resp.json()["packages"]} == {"lodash", "lodash.merge"}

	resp = client.post("/report", json={"root": str(tmp_path), "files": ["*.js"], "export_names": ["merge"]})
	(entry,) = resp.json()["exportNames"]
	assert set(entry["packages"]) == {"lodash", "lodash.merge"}


def test_report_errors(tmp_path):
	assert client.post("/report", json={"root": str(tmp_path), "files": []}).status_code == 400
	assert client.post("/report", json={"root": str(tmp_path), "files": ["*.js"]}).status_code == 404
	assert client.post("/report", json={"root": str(tmp_path / "nope"), "files": ["*.js"]}).status_code == 400
