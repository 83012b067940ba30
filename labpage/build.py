from __future__ import annotations

import argparse
import shutil
import sys
from pathlib import Path
from typing import Any

from bs4 import BeautifulSoup

from labpage.config import PREFIX, Settings, read_settings
from labpage.loader import load_json
from labpage.schema import Schema
from labpage.sections import render_all

ERROR_BANNER = '<p style="padding:1rem;color:#b00020;">Content failed to load. Please refresh.</p>'


def _parse(template_html: str) -> BeautifulSoup:
    return BeautifulSoup(template_html, "html.parser")


def render_page(template_html: str, data: Any, schema: Schema, year: int | None = None) -> BeautifulSoup:
    page = _parse(template_html)
    render_all(page, data, schema, year=year)
    return page


def render_error_page(template_html: str, schema: Schema) -> BeautifulSoup:
    page = _parse(template_html)
    if schema.error_mode != "banner":
        return page
    banner = _parse(ERROR_BANNER).p
    target = page.body or page
    target.insert(0, banner)
    return page


def _read_template(settings: Settings) -> str:
    page_path = settings.page_path
    if not page_path.exists():
        raise SystemExit(f"Missing host page: {page_path}")
    return page_path.read_text(encoding="utf-8")


def _write(path: Path, page: BeautifulSoup) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(str(page), encoding="utf-8")


def _copy_assets(settings: Settings) -> None:
    source_root = settings.page_path.parent.resolve()
    site_dir = settings.site_dir.resolve()
    if source_root == site_dir:
        return
    for name in settings.assets:
        src = source_root / name
        if not src.is_dir():
            continue
        for path in src.rglob("*"):
            if path.is_dir():
                continue
            if site_dir in path.resolve().parents:
                continue
            target = site_dir / path.relative_to(source_root)
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(path, target)


def build(settings: Settings, year: int | None = None) -> int:
    template_html = _read_template(settings)
    schema = settings.schema_obj()
    output_path = settings.output_path
    _copy_assets(settings)
    try:
        data = load_json(settings.content, base_dir=settings.page_path.parent)
        page = render_page(template_html, data, schema, year=year)
    except Exception as exc:
        print(f"{PREFIX} {exc}", file=sys.stderr)
        _write(output_path, render_error_page(template_html, schema))
        return 1
    _write(output_path, page)
    print(f"{PREFIX} Rendered {settings.page} -> {output_path}")
    return 0


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render the lab homepage from its content document.")
    parser.add_argument("--config", type=Path, help="Path to site.json (default: ./site.json if present).")
    parser.add_argument("--base-dir", type=Path, help="Directory relative paths resolve against.")
    parser.add_argument("--page", help="Host page template.")
    parser.add_argument("--content", help="Content document path or URL, relative to the host page.")
    parser.add_argument("--out", dest="output", help="Where to write the rendered page.")
    parser.add_argument("--schema", choices=["inline", "assets"], help="Content document shape.")
    parser.add_argument("--year", type=int, help="Year stamped into the footer.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = read_settings(
        args.config,
        args.base_dir,
        page=args.page,
        content=args.content,
        output=args.output,
        schema=args.schema,
    )
    return build(settings, year=args.year)


if __name__ == "__main__":
    raise SystemExit(main())
