"""File helpers shared by the JSON repositories."""

from __future__ import annotations

import json
from pathlib import Path


class JsonFile:
    """A JSON document on disk, created with *default* when missing."""

    def __init__(self, file_path: Path, default: str = "[]") -> None:
        self._file_path = file_path
        self._default = default
        self._ensure_file()

    @property
    def path(self) -> Path:
        return self._file_path

    def load(self):
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def persist(self, data) -> None:
        self._file_path.write_text(
            json.dumps(data, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text(self._default, encoding="utf-8")
