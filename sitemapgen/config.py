from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Callable

try:
    import tomllib as toml
except ImportError:
    try:
        import tomli as toml
    except ImportError:  # pragma: no cover - optional dependency
        toml = None

try:
    import yaml
except ImportError:  # pragma: no cover - optional dependency
    yaml = None

from .content import CONTENT_EXTENSION
from .utils import parse_float

BASE_URL = "https://aiperformanceoptimization.com"
SITEMAP_PATH = "public/sitemap.xml"
CONTENT_DIR = "src/content"
LEARN_COLLECTION = "learn"
BLOG_COLLECTION = "blog"
CHANGE_FREQUENCIES = ("always", "hourly", "daily", "weekly", "monthly", "yearly", "never")

STATIC_ROUTES = [
    {"path": "/", "priority": 1.0, "changefreq": "weekly"},
    {"path": "/blog", "priority": 0.8, "changefreq": "weekly"},
    {"path": "/learn", "priority": 0.9, "changefreq": "weekly"},
    {"path": "/model-connectivity", "priority": 0.7, "changefreq": "monthly"},
    {"path": "/tools", "priority": 0.7, "changefreq": "monthly"},
    {"path": "/strategies", "priority": 0.7, "changefreq": "monthly"},
]


def config_format(path: Path) -> tuple[str, Callable[[str], object]]:
    suffix = path.suffix.lower()
    if suffix == ".toml":
        if toml is None:
            print("TOML config requires tomllib (Python 3.11+) or tomli.", file=sys.stderr)
            sys.exit(1)
        return "TOML", toml.loads
    if suffix in {".yml", ".yaml"}:
        if yaml is None:
            print("YAML config requires PyYAML.", file=sys.stderr)
            sys.exit(1)
        return "YAML", yaml.safe_load
    return "JSON", json.loads


def load_config(path: Path) -> dict:
    """Read the sitemap config; a missing file means every default applies."""
    if not path.exists():
        return {}
    label, loads = config_format(path)
    try:
        data = loads(path.read_text(encoding="utf-8"))
    except Exception as exc:
        print(f"Invalid {label} in config file {path}: {exc}", file=sys.stderr)
        sys.exit(1)
    if data is None:
        return {}
    if not isinstance(data, dict):
        print(f"{label} config must be a mapping: {path}", file=sys.stderr)
        sys.exit(1)
    return data


def resolve_static_routes(config: dict) -> list[dict]:
    raw_routes = config.get("static_routes")
    if raw_routes is None:
        return [dict(route) for route in STATIC_ROUTES]
    if not isinstance(raw_routes, list):
        print("static_routes must be a list of tables.", file=sys.stderr)
        sys.exit(1)
    routes = []
    for index, raw in enumerate(raw_routes):
        if not isinstance(raw, dict) or not str(raw.get("path") or "").strip():
            print(f"static_routes[{index}] needs a path.", file=sys.stderr)
            sys.exit(1)
        priority = parse_float(raw.get("priority"), -1.0)
        if not 0.0 <= priority <= 1.0:
            print(f"static_routes[{index}] priority must be between 0.0 and 1.0.", file=sys.stderr)
            sys.exit(1)
        changefreq = str(raw.get("changefreq") or "").strip().lower()
        if changefreq not in CHANGE_FREQUENCIES:
            print(
                f"static_routes[{index}] changefreq must be one of: {', '.join(CHANGE_FREQUENCIES)}.",
                file=sys.stderr,
            )
            sys.exit(1)
        routes.append({"path": str(raw["path"]).strip(), "priority": priority, "changefreq": changefreq})
    return routes


def build_settings(args: object, config: dict) -> dict:
    content_dir = Path(getattr(args, "content_dir", CONTENT_DIR))
    extension = str(getattr(args, "extension", CONTENT_EXTENSION) or CONTENT_EXTENSION)
    if not extension.startswith("."):
        extension = f".{extension}"
    return {
        "base_url": str(getattr(args, "base_url", BASE_URL)).strip().rstrip("/"),
        "output": Path(getattr(args, "output", SITEMAP_PATH)),
        "learn_dir": content_dir / LEARN_COLLECTION,
        "blog_dir": content_dir / BLOG_COLLECTION,
        "extension": extension,
        "static_routes": resolve_static_routes(config),
    }
