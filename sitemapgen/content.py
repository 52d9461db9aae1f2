from __future__ import annotations

import html as html_lib
import math
import re
from pathlib import Path
from typing import Optional

import markdown

from .render import strip_tags

CONTENT_EXTENSION = ".mdx"
REQUIRED_FIELDS = ("title", "description", "publishedDate", "readingTime", "category")
WORDS_PER_MINUTE = 200
WORD_RE = re.compile(r"[A-Za-z0-9]+(?:'[A-Za-z0-9]+)?")
# MDX import/export lines and JSX component tags are not prose.
MDX_STATEMENT_RE = re.compile(r"^\s*(?:import|export)\s.*$", re.MULTILINE)
JSX_TAG_RE = re.compile(r"</?[A-Z][\w.]*[^>]*?/?>")


def list_documents(directory: Path, extension: str = CONTENT_EXTENSION) -> Optional[list[str]]:
    """Return the sorted content file names in ``directory``.

    ``None`` means the collection directory does not exist at all, which is a
    normal outcome. Errors reading a directory that does exist propagate.
    """
    if not directory.exists():
        return None
    return sorted(
        entry.name for entry in directory.iterdir() if entry.name.endswith(extension) and entry.is_file()
    )


def slug_from_filename(name: str, extension: str = CONTENT_EXTENSION) -> str:
    if extension and name.endswith(extension):
        return name[: -len(extension)]
    return name


def list_slugs(directory: Path, extension: str = CONTENT_EXTENSION) -> Optional[list[str]]:
    names = list_documents(directory, extension)
    if names is None:
        return None
    return [slug_from_filename(name, extension) for name in names]


def parse_front_matter(text: str) -> tuple[dict, str]:
    clean_text = text.lstrip("\ufeff")
    lines = clean_text.splitlines()
    if not lines or lines[0].strip() != "---":
        return {}, clean_text

    end = None
    for i in range(1, len(lines)):
        if lines[i].strip() == "---":
            end = i
            break
    if end is None:
        return {}, clean_text

    meta = {}
    for line in lines[1:end]:
        line = line.strip()
        if not line or line.startswith("#") or ":" not in line:
            continue
        key, value = line.split(":", 1)
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
            value = value[1:-1]
        meta[key.strip()] = value
    body = "\n".join(lines[end + 1 :])
    return meta, body


def validate_document(meta: dict) -> list[str]:
    return [field for field in REQUIRED_FIELDS if not str(meta.get(field) or "").strip()]


def count_words(text: str) -> int:
    return len(WORD_RE.findall(html_lib.unescape(text)))


def estimate_reading_time(body: str) -> str:
    body = MDX_STATEMENT_RE.sub("", body)
    body = JSX_TAG_RE.sub("", body)
    md = markdown.Markdown(extensions=["fenced_code", "tables"])
    words = count_words(strip_tags(md.convert(body)))
    minutes = max(1, math.ceil(words / WORDS_PER_MINUTE))
    return f"{minutes} min read"


def check_collection(directory: Path, extension: str = CONTENT_EXTENSION) -> list[tuple[str, list[str]]]:
    """Audit the front matter of every document in a collection.

    Returns ``(filename, problems)`` pairs for documents that have problems.
    """
    names = list_documents(directory, extension)
    if not names:
        return []
    report = []
    for name in names:
        try:
            text = (directory / name).read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            report.append((name, [f"not valid UTF-8: {exc}"]))
            continue
        meta, body = parse_front_matter(text)
        problems = [f"missing front matter field: {field}" for field in validate_document(meta)]
        if "readingTime" not in meta and body.strip():
            problems.append(f"suggested readingTime: {estimate_reading_time(body)}")
        if problems:
            report.append((name, problems))
    return report
