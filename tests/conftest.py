from __future__ import annotations

from pathlib import Path

import pytest

from sitemapgen.config import STATIC_ROUTES

FRONT_MATTER = """---
title: "{title}"
description: "A short summary."
publishedDate: "2025-01-01"
readingTime: "5 min read"
category: "Guides"
---

# {title}

Some prose about model latency.
"""


def write_doc(directory: Path, name: str, title: str = "Untitled") -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text(FRONT_MATTER.format(title=title), encoding="utf-8")
    return path


@pytest.fixture
def site(tmp_path: Path) -> Path:
    content = tmp_path / "src" / "content"
    write_doc(content / "learn", "getting-started.mdx", "Getting Started")
    write_doc(content / "learn", "advanced-topic.mdx", "Advanced Topic")
    write_doc(content / "blog", "launch-post.mdx", "Launch Post")
    return tmp_path


@pytest.fixture
def settings(site: Path) -> dict:
    content = site / "src" / "content"
    return {
        "base_url": "https://aiperformanceoptimization.com",
        "output": site / "public" / "sitemap.xml",
        "learn_dir": content / "learn",
        "blog_dir": content / "blog",
        "extension": ".mdx",
        "static_routes": [dict(route) for route in STATIC_ROUTES],
    }
