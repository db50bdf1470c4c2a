from __future__ import annotations

import json
import os
import tempfile
from typing import Any


def read_json_content(source, expect_object: bool = False):
    """Read JSON from a file-like object, an uploaded file or a path.

    With ``expect_object`` a top-level value other than a JSON object is
    rejected, which is what the flattener needs for source catalogues.
    """
    if source is None:
        raise ValueError("No file given.")

    if hasattr(source, 'read'):
        if hasattr(source, 'seek'):
            source.seek(0)
        content = source.read()
        if isinstance(content, bytes):
            content = content.decode('utf-8')
        data = json.loads(content)
    else:
        # Gradio hands over tempfile wrappers exposing the path as .name
        path = source if isinstance(source, (str, os.PathLike)) else source.name
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)

    if expect_object and not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object at the top level, got {type(data).__name__}.")
    return data


def write_json_atomic(path, data: Any) -> None:
    """Write ``data`` as JSON, replacing ``path`` only once the write succeeded."""
    path = os.fspath(path)
    directory = os.path.dirname(path) or '.'
    os.makedirs(directory, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=directory, suffix='.tmp')
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
            f.write('\n')
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise
