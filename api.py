from __future__ import annotations

import os
from typing import List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from depreport.errors import ConfigurationError, NoMatchError
from depreport.report import DependencyReport


app = FastAPI(title="Dependency Report")


class ReportRequest(BaseModel):
	root: str = "."
	files: List[str]
	exclude_glob: Optional[str] = None
	default_import_label: Optional[str] = None
	packages: Optional[List[str]] = None
	export_names: Optional[List[str]] = None


@app.post("/report")
def report(req: ReportRequest) -> dict:
	root = os.path.abspath(req.root)
	if not os.path.isdir(root):
		raise HTTPException(status_code=400, detail=f"Invalid root: {root}")

	try:
		runner = DependencyReport(
			{
				"files": req.files,
				"exclude_glob": req.exclude_glob,
				"root": root,
				"default_import_label": req.default_import_label,
			}
		)
		result = runner.run()
	except ConfigurationError as e:
		raise HTTPException(status_code=400, detail=str(e))
	except NoMatchError as e:
		raise HTTPException(status_code=404, detail=str(e))

	failures = [f.model_dump() for f in runner.failures]
	if req.packages:
		return {
			"packages": [p.to_plain_object() for p in result.get_packages(req.packages)],
			"failures": failures,
		}
	if req.export_names:
		return {"exportNames": result.get_by_export_names(req.export_names), "failures": failures}
	return {"report": result.to_plain_object(), "failures": failures}


def create_app() -> FastAPI:
	return app
