"""Report the element ids each section renderer writes and the keys it reads."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import TypedDict

from bs4 import BeautifulSoup

from labpage.config import PREFIX, read_settings
from labpage.schema import Schema

# section -> (element ids, keys read from the section's sub-tree)
SECTION_IDS: dict[str, tuple[list[str], list[str]]] = {
    "favicon": (["favicon"], ["favicon"]),
    "meta": ([], ["title", "description"]),
    "header": (["brand-name"], ["labName"]),
    "hero": (
        ["hero-tagline-1", "hero-tagline-2", "hero-animation", "hero-logo"],
        ["tagline1", "tagline2", "animation", "logo"],
    ),
    "about": (["about-title", "about-text"], ["title", "text"]),
    "research": (["research-title", "research-list"], ["title", "items"]),
    "people": (["people-title", "people-list"], ["title", "groups"]),
    "publications": (["publications-title", "publications-list"], ["title", "groups"]),
    "photos": (["photos-title", "photos-grid"], ["title", "items"]),
    "contact": (["contact-title", "contact-text"], ["title", "text", "email"]),
    "footer": (
        ["year", "footer-owner", "footer-disclaimer", "footer-license"],
        ["owner", "disclaimer", "licenseText", "sourceCode"],
    ),
}


class ContractRow(TypedDict):
    section: str
    ids: list[str]
    keys: list[str]


def _section_path(schema: Schema, section: str) -> str:
    if section in {"favicon", "header"}:
        return schema.header_key
    if section == "hero":
        return schema.hero_key
    if section in {"meta", "footer"}:
        return section
    return f"{schema.sections_key}.{section}"


def build_contract(schema: Schema) -> list[ContractRow]:
    rows: list[ContractRow] = []
    for section, (ids, keys) in SECTION_IDS.items():
        path = _section_path(schema, section)
        rows.append(
            ContractRow(
                section=section,
                ids=list(ids),
                keys=[f"{path}.{key}" for key in keys],
            )
        )
    return rows


def missing_ids(page_html: str, contract: list[ContractRow]) -> list[str]:
    page = BeautifulSoup(page_html, "html.parser")
    missing = []
    for row in contract:
        for element_id in row["ids"]:
            if page.find(id=element_id) is None:
                missing.append(element_id)
    return missing


def format_contract(contract: list[ContractRow], missing: list[str]) -> str:
    lines: list[str] = [f"{PREFIX} DOM contract"]
    for index, row in enumerate(contract, start=1):
        lines.append(f"{PREFIX} {index}. {row['section']}")
        for element_id in row["ids"]:
            flag = "  (missing)" if element_id in missing else ""
            lines.append(f"{PREFIX}    #{element_id}{flag}")
        lines.append(f"{PREFIX}    <- {', '.join(row['keys'])}")
    if missing:
        lines.append(f"{PREFIX} {len(missing)} id(s) missing from the host page; those fields are skipped.")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Show which host page ids each section renderer fills.")
    parser.add_argument("--config", type=Path, help="Path to site.json.")
    parser.add_argument("--page", type=Path, help="Host page to check (default: configured page).")
    parser.add_argument("--strict", action="store_true", help="Exit 1 when any id is missing.")
    args = parser.parse_args(argv)

    settings = read_settings(args.config)
    page_path = args.page or settings.page_path
    if not page_path.exists():
        raise SystemExit(f"Missing host page: {page_path}")
    contract = build_contract(settings.schema_obj())
    missing = missing_ids(page_path.read_text(encoding="utf-8"), contract)
    print(format_contract(contract, missing))
    if missing and args.strict:
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
