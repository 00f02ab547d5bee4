"""On-disk datafiles for the embedded engine.

One file per collection, one MongoDB Extended JSON document per line.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from bson import json_util

DATAFILE_SUFFIX = ".jsonl"


def datafile_path(database_path: str, collection_name: str) -> Path:
    return Path(database_path).resolve() / f"{collection_name}{DATAFILE_SUFFIX}"


def read_datafile(path: Path) -> list[dict[str, Any]]:
    """Read every document from ``path``, creating an empty datafile if missing."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.touch(exist_ok=True)
    with path.open(encoding="utf-8") as fh:
        return [json_util.loads(line) for line in fh if line.strip()]


def write_datafile(path: Path, docs: list[dict[str, Any]]) -> None:
    """Replace the contents of ``path`` with ``docs``."""
    tmp = path.with_name(path.name + ".tmp")
    with tmp.open("w", encoding="utf-8") as fh:
        for doc in docs:
            fh.write(json_util.dumps(doc))
            fh.write("\n")
    tmp.replace(path)
