from __future__ import annotations

import argparse
import urllib.parse
from pathlib import Path

from bs4 import BeautifulSoup

from labpage.config import PREFIX, read_settings

NEW_TAB_REL = {"noopener", "noreferrer"}


def _is_internal_link(url: str) -> bool:
    if url.startswith(("#", "//")):
        return False
    return not urllib.parse.urlparse(url).scheme


def _check_target_exists(source_file: Path, site_dir: Path, url: str) -> bool:
    """
    Checks if the target file exists.
    Handles relative paths and absolute paths (relative to site root).
    Ignores query parameters and fragments.
    """
    url_clean = urllib.parse.unquote(url.split("?")[0].split("#")[0])
    if not url_clean:
        return True

    if url_clean.startswith("/"):
        target_path = site_dir / url_clean.lstrip("/")
    else:
        target_path = source_file.parent / url_clean

    if target_path.is_dir():
        return (target_path / "index.html").exists()
    return target_path.exists()


def _rel_values(anchor) -> set[str]:
    rel = anchor.get("rel") or []
    if isinstance(rel, str):
        rel = rel.split()
    return {value.lower() for value in rel}


def check_page(path: Path, site_dir: Path) -> tuple[list[str], list[str]]:
    """Return ``(broken, unsafe)`` references found in one rendered page."""
    soup = BeautifulSoup(path.read_text(encoding="utf-8", errors="ignore"), "html.parser")
    broken: list[str] = []
    unsafe: list[str] = []

    for node in soup.find_all(True):
        for attr in ("href", "src"):
            url = (node.get(attr) or "").strip()
            if url and _is_internal_link(url) and not _check_target_exists(path, site_dir, url):
                broken.append(url)

    for anchor in soup.find_all("a", target="_blank"):
        if not NEW_TAB_REL <= _rel_values(anchor):
            unsafe.append(anchor.get("href") or "(no href)")
    return broken, unsafe


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Check links in the rendered site.")
    parser.add_argument("--config", type=Path, help="Path to site.json.")
    parser.add_argument("--site-dir", type=Path, help="Rendered site directory (default: output directory).")
    args = parser.parse_args(argv)

    site_dir = args.site_dir or read_settings(args.config).site_dir
    if not site_dir.exists():
        print(f"{PREFIX} {site_dir} not found. Run labpage first.")
        return 1

    broken_links: list[tuple[Path, str]] = []
    unsafe_links: list[tuple[Path, str]] = []
    for path in sorted(site_dir.rglob("*.html")):
        broken, unsafe = check_page(path, site_dir)
        broken_links.extend((path, url) for url in broken)
        unsafe_links.extend((path, url) for url in unsafe)

    exit_code = 0

    if broken_links:
        print(f"{PREFIX} Broken internal links found:")
        for path, url in broken_links:
            print(f"  {path.relative_to(site_dir)}: {url}")
        exit_code = 1

    if unsafe_links:
        print(f"{PREFIX} New-tab links missing rel=\"noopener noreferrer\":")
        for path, url in unsafe_links:
            print(f"  {path.relative_to(site_dir)}: {url}")
        exit_code = 1

    if exit_code == 0:
        print(f"{PREFIX} Link verification passed. No broken internal links or unsafe new-tab links found.")

    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
