"""JSON persistence utilities for OCR outputs."""
from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from types import TracebackType
from typing import IO, Any


def format_json(data: Any) -> str:
	"""Render data as pretty-printed JSON."""
	return json.dumps(data, ensure_ascii=False, indent=2)


def _default_file_mode() -> int:
	"""Permission bits a plain ``open(path, "w")`` would give under the current umask."""
	umask = os.umask(0)
	os.umask(umask)
	return 0o666 & ~umask


def dump_json_atomic(data: Any, path: Path) -> Path:
	"""Write pretty JSON to ``path`` via a temporary sibling file and a rename.

	A failed write leaves any previous file at ``path`` untouched. The final file
	gets the same permissions as a plain write.
	"""
	fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
	try:
		with os.fdopen(fd, "w", encoding="utf-8") as handle:
			handle.write(format_json(data))
			handle.flush()
			os.fsync(handle.fileno())
		os.chmod(tmp_name, _default_file_mode())
		os.replace(tmp_name, path)
	except BaseException:
		Path(tmp_name).unlink(missing_ok=True)
		raise
	return path


class JsonlWriter:
	"""Append compact JSON objects, one per line, to a file truncated on open."""

	def __init__(self, path: Path) -> None:
		self.path = path
		self._handle: IO[str] | None = None
		self.lines_written = 0

	def open(self) -> JsonlWriter:
		self._handle = self.path.open("w", encoding="utf-8")
		return self

	def write(self, record: Any) -> None:
		if self._handle is None:
			raise RuntimeError(f"JSONL writer for {self.path} is not open")
		self._handle.write(json.dumps(record, ensure_ascii=False))
		self._handle.write("\n")
		self._handle.flush()
		self.lines_written += 1

	def close(self) -> None:
		if self._handle is not None:
			self._handle.close()
			self._handle = None

	def __enter__(self) -> JsonlWriter:
		return self.open()

	def __exit__(
		self,
		exc_type: type[BaseException] | None,
		exc: BaseException | None,
		tb: TracebackType | None,
	) -> None:
		self.close()
