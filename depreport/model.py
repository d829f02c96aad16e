from __future__ import annotations

from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


DEFAULT_EXCLUDE_GLOB = "**/node_modules/**"


class CamelModel(BaseModel):
	# camelCase on the wire, snake_case in Python
	model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ImportRecord(CamelModel):
	specifier: str
	import_all: bool = False
	default: Optional[str] = None
	namespace: bool = False
	named: List[str] = []


class PackageImport(CamelModel):
	name: str
	export_names: List[str] = []


class ParsedFile(CamelModel):
	filepath: str
	imports: List[ImportRecord] = []
	packages: List[PackageImport] = []
	export_names: List[str] = []


class ParseFailure(CamelModel):
	filepath: str
	error: str


FileResult = Union[ParsedFile, ParseFailure]


class ExportUsage(CamelModel):
	usage: int = 0
	filepaths: List[str] = []

	@model_validator(mode="after")
	def _usage_matches_filepaths(self) -> "ExportUsage":
		if self.usage != len(self.filepaths):
			raise ValueError(
				f"usage {self.usage} does not match {len(self.filepaths)} filepaths"
			)
		return self

	def record(self, filepath: str) -> None:
		self.filepaths.append(filepath)
		self.usage += 1


class Package(CamelModel):
	name: str
	filepaths: List[str] = []
	used_exports: Dict[str, ExportUsage] = {}

	def add_filepath(self, filepath: str) -> None:
		if filepath not in self.filepaths:
			self.filepaths.append(filepath)

	def add_exports(self, export_names: List[str], filepath: str) -> None:
		for name in export_names:
			self.used_exports.setdefault(name, ExportUsage()).record(filepath)

	def to_plain_object(self) -> dict:
		return self.model_dump(by_alias=True)


class ExportIndexEntry(CamelModel):
	name: str
	packages: Dict[str, ExportUsage] = {}

	def record(self, package_key: str, filepath: str) -> None:
		self.packages.setdefault(package_key, ExportUsage()).record(filepath)


class ReportOptions(CamelModel):
	files: List[str] = Field(min_length=1)
	exclude_glob: Optional[str] = None
	root: str = "."
	workers: Optional[int] = Field(default=None, ge=1)
	default_import_label: Optional[str] = None

	@field_validator("files", mode="before")
	@classmethod
	def _coerce_files(cls, value):
		if isinstance(value, str):
			return [value]
		return value

	@property
	def resolved_exclude_glob(self) -> str:
		return self.exclude_glob or DEFAULT_EXCLUDE_GLOB
