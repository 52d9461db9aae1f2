from __future__ import annotations

import re
from pathlib import Path

TAG_RE = re.compile(r"<[^>]+>")


def strip_tags(html_text: str) -> str:
    return TAG_RE.sub("", html_text)


def write_text(path: Path, text: str) -> None:
    """Write ``text`` to ``path`` through a sibling temp file.

    The target is only replaced once the full document is on disk, so a failed
    write never leaves a truncated file behind.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f".{path.name}.tmp")
    try:
        with open(tmp_path, "w", encoding="utf-8", newline="\n") as handle:
            handle.write(text)
        tmp_path.replace(path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise
