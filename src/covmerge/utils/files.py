"""Resolving, reading and writing coverage JSON files."""

from __future__ import annotations

import glob
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from covmerge.errors import NoFilesMatchedError, ReportLoadError

logger = logging.getLogger(__name__)

OUTPUT_FILENAME = "coverage.json"


def expand_pattern(pattern: str) -> list[str]:
    """Resolve a glob *pattern* to a sorted list of matching files.

    ``**`` matches any number of directories. Directories matched by the
    pattern are skipped.

    Raises:
        NoFilesMatchedError: Nothing matched *pattern*.
    """
    files = sorted({match for match in glob.glob(pattern, recursive=True) if Path(match).is_file()})
    if not files:
        raise NoFilesMatchedError(pattern)
    return files


def read_json(path: str | Path) -> Any:
    """Read and decode one JSON file.

    Raises:
        ReportLoadError: The file cannot be read, is not UTF-8, or is not
            valid JSON.
    """
    file_path = Path(path)
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        msg = f"Failed to read coverage file {file_path}: {e}"
        raise ReportLoadError(msg) from e
    except UnicodeDecodeError as e:
        msg = f"Failed to parse coverage file {file_path}: {e}"
        raise ReportLoadError(msg) from e

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        msg = f"Failed to parse coverage file {file_path}: {e}"
        raise ReportLoadError(msg) from e


def write_json(data: Any, path: str | Path = OUTPUT_FILENAME) -> str:
    """Write *data* as 2-space indented JSON and return the path written.

    The JSON goes to a temporary file next to *path* that replaces it once
    fully written, so a failed write leaves any previous file untouched.
    """
    output_path = Path(path)
    content = json.dumps(data, indent=2, ensure_ascii=False)

    tmp = tempfile.NamedTemporaryFile(
        "w",
        encoding="utf-8",
        dir=output_path.parent,
        prefix=f".{output_path.name}.",
        suffix=".tmp",
        delete=False,
    )
    tmp_path = Path(tmp.name)
    try:
        with tmp:
            tmp.write(content)
        os.replace(tmp_path, output_path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise
    return str(output_path)
