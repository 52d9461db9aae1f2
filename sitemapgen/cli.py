from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

from .config import BASE_URL, CONTENT_DIR, SITEMAP_PATH, build_settings, load_config
from .content import CONTENT_EXTENSION, check_collection
from .sitemap import build_sitemap
from .utils import parse_bool


def check_content(settings: dict) -> bool:
    ok = True
    for directory in (settings["learn_dir"], settings["blog_dir"]):
        for name, problems in check_collection(Path(directory), settings["extension"]):
            ok = False
            for problem in problems:
                print(f"{Path(directory) / name}: {problem}", file=sys.stderr)
    return ok


def print_summary(urls: dict, output: Path) -> None:
    total = sum(len(items) for items in urls.values())
    print("Sitemap generated successfully.")
    print(f"Total URLs: {total}")
    print(f"  - Static pages: {len(urls['static'])}")
    print(f"  - Learn articles: {len(urls['learn'])}")
    print(f"  - Blog posts: {len(urls['blog'])}")
    print(f"Location: {output}")


def run(args: argparse.Namespace, config: dict) -> int:
    settings = build_settings(args, config)
    print("Generating sitemap...")
    try:
        if args.check and not check_content(settings):
            print("Content check failed. Sitemap not written.", file=sys.stderr)
            return 1
        urls = build_sitemap(settings)
    except OSError as exc:
        print(f"Error generating sitemap: {exc}", file=sys.stderr)
        return 1
    print_summary(urls, settings["output"])
    return 0


def main(argv: list[str] | None = None) -> None:
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument(
        "--config",
        default="sitemap.toml",
        help="Path to sitemap config file (TOML/YAML/JSON).",
    )
    pre_args, _ = pre_parser.parse_known_args(argv)
    config = load_config(Path(pre_args.config))

    def cfg_str(key: str, default: str) -> str:
        value = config.get(key)
        return default if value is None else str(value)

    def cfg_bool(key: str, default: bool) -> bool:
        value = config.get(key)
        return parse_bool(value) if value is not None else default

    parser = argparse.ArgumentParser(description="Generate sitemap.xml for the static site.")
    parser.add_argument("--config", default=pre_args.config, help="Path to sitemap config file (TOML/YAML/JSON).")
    parser.add_argument("--base-url", default=cfg_str("base_url", BASE_URL), help="Domain prefix for every loc.")
    parser.add_argument("--output", default=cfg_str("output", SITEMAP_PATH), help="Path of the sitemap file to write.")
    parser.add_argument(
        "--content-dir",
        default=cfg_str("content_dir", CONTENT_DIR),
        help="Directory holding the learn and blog collections.",
    )
    parser.add_argument(
        "--extension",
        default=cfg_str("extension", CONTENT_EXTENSION),
        help="File extension of content documents.",
    )
    parser.add_argument(
        "--check",
        action=argparse.BooleanOptionalAction,
        default=cfg_bool("check", False),
        help="Audit content front matter before writing the sitemap.",
    )
    args = parser.parse_args(argv)
    start = time.perf_counter()
    status = run(args, config)
    if status:
        sys.exit(status)
    elapsed = time.perf_counter() - start
    print(f"Build completed in {elapsed:.2f}s.")
