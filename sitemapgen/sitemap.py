from __future__ import annotations

import datetime as dt
import html
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Callable, Optional

from .content import list_slugs
from .render import write_text
from .utils import format_date, format_priority, join_url

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
GETTING_STARTED_SLUG = "getting-started"
GROUPS = ("static", "learn", "blog")


def learn_priority(slug: str) -> float:
    return 0.8 if slug == GETTING_STARTED_SLUG else 0.7


def blog_priority(slug: str) -> float:
    return 0.6


def static_urls(base_url: str, routes: list[dict], lastmod: str) -> list[dict]:
    return [
        {
            "loc": join_url(base_url, route["path"]),
            "lastmod": lastmod,
            "changefreq": route["changefreq"],
            "priority": route["priority"],
        }
        for route in routes
    ]


def collection_urls(
    base_url: str, prefix: str, slugs: Optional[list[str]], lastmod: str, priority_for: Callable[[str], float]
) -> list[dict]:
    if not slugs:
        return []
    return [
        {
            "loc": join_url(base_url, f"{prefix}/{slug}"),
            "lastmod": lastmod,
            "changefreq": "monthly",
            "priority": priority_for(slug),
        }
        for slug in slugs
    ]


def collect_urls(settings: dict, today: dt.date) -> dict[str, list[dict]]:
    """Build every URL entry for one run, grouped by category.

    All entries share ``today`` as their lastmod. A missing collection
    directory contributes no entries.
    """
    lastmod = format_date(today)
    base_url = settings["base_url"]
    extension = settings["extension"]
    return {
        "static": static_urls(base_url, settings["static_routes"], lastmod),
        "learn": collection_urls(
            base_url, "learn", list_slugs(Path(settings["learn_dir"]), extension), lastmod, learn_priority
        ),
        "blog": collection_urls(
            base_url, "blog", list_slugs(Path(settings["blog_dir"]), extension), lastmod, blog_priority
        ),
    }


def flatten_urls(urls: dict[str, list[dict]]) -> list[dict]:
    return [entry for group in GROUPS for entry in urls.get(group, [])]


def render_sitemap(urls: dict[str, list[dict]]) -> str:
    items = []
    for entry in flatten_urls(urls):
        items.append(
            "\n".join(
                [
                    "  <url>",
                    f"    <loc>{html.escape(entry['loc'], quote=False)}</loc>",
                    f"    <lastmod>{entry['lastmod']}</lastmod>",
                    f"    <changefreq>{entry['changefreq']}</changefreq>",
                    f"    <priority>{format_priority(entry['priority'])}</priority>",
                    "  </url>",
                ]
            )
        )
    return "\n".join(
        [
            '<?xml version="1.0" encoding="UTF-8"?>',
            f'<urlset xmlns="{SITEMAP_NS}">',
            *items,
            "</urlset>",
        ]
    )


def parse_sitemap(text: str) -> list[dict]:
    root = ET.fromstring(text.encode("utf-8"))
    ns = {"sm": SITEMAP_NS}
    entries = []
    for node in root.findall("sm:url", ns):
        entries.append(
            {
                "loc": (node.findtext("sm:loc", "", ns) or "").strip(),
                "lastmod": (node.findtext("sm:lastmod", "", ns) or "").strip(),
                "changefreq": (node.findtext("sm:changefreq", "", ns) or "").strip(),
                "priority": float(node.findtext("sm:priority", "0", ns)),
            }
        )
    return entries


def build_sitemap(settings: dict, today: Optional[dt.date] = None) -> dict[str, list[dict]]:
    if today is None:
        today = dt.datetime.now(dt.timezone.utc).date()
    urls = collect_urls(settings, today)
    write_text(Path(settings["output"]), render_sitemap(urls))
    return urls
