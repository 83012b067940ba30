from __future__ import annotations

import argparse
import json
import re
from pathlib import Path
from typing import Any

from labpage.config import PREFIX, read_settings
from labpage.schema import Schema

NO_YEAR = "n.d."
SKIPPED_TYPES = {"comment", "string", "preamble"}

ENTRY_PATTERN = re.compile(r"@(\w+)\s*{\s*([^,\s{}]+)\s*,", re.MULTILINE)
FIELD_PATTERN = re.compile(r"(\w+)\s*=\s*")


def _read_value(content: str, pos: int) -> tuple[str, int]:
    if content[pos] == "{":
        pos += 1
        balance = 1
        start = pos
        while balance > 0 and pos < len(content):
            if content[pos] == "{":
                balance += 1
            elif content[pos] == "}":
                balance -= 1
            pos += 1
        return content[start:pos - 1], pos
    if content[pos] == '"':
        pos += 1
        start = pos
        while pos < len(content):
            if content[pos] == '"' and content[pos - 1] != "\\":
                break
            pos += 1
        return content[start:pos], pos + 1
    start = pos
    while pos < len(content) and content[pos] not in ",}":
        pos += 1
    return content[start:pos].strip(), pos


def _clean(value: str) -> str:
    value = value.replace("{", "").replace("}", "")
    return re.sub(r"\s+", " ", value).strip()


def parse_bibtex(content: str) -> list[dict[str, str]]:
    """
    Parses BibTeX content into a list of dictionaries.
    Handles braced, quoted and bare field values.
    """
    entries = []
    pos = 0
    while True:
        match = ENTRY_PATTERN.search(content, pos)
        if not match:
            break

        entry_type = match.group(1).lower()
        fields: dict[str, str] = {}
        current = match.end()
        while current < len(content):
            while current < len(content) and content[current] in " \t\r\n,":
                current += 1
            if current >= len(content):
                break
            if content[current] == "}":
                current += 1
                break
            field_match = FIELD_PATTERN.match(content, current)
            if not field_match:
                # Unexpected char, skip to recover
                current += 1
                continue
            current = field_match.end()
            if current >= len(content):
                break
            value, current = _read_value(content, current)
            fields[field_match.group(1).lower()] = _clean(value)
        pos = current

        if entry_type in SKIPPED_TYPES:
            continue
        entries.append({"type": entry_type, "key": match.group(2).strip(), **fields})
    return entries


def format_entry(entry: dict[str, str]) -> str:
    authors = entry.get("author", "Unknown").replace(" and ", ", ")
    year = entry.get("year") or NO_YEAR
    title = entry.get("title", "Untitled")
    source = (
        entry.get("journal")
        or entry.get("booktitle")
        or entry.get("publisher")
        or entry.get("school")
        or entry.get("institution")
        or ""
    )
    text = f"{authors} ({year}). {title}."
    if source:
        text += f" {source}."
    if entry.get("note"):
        text += f" ({entry['note']})."
    return text


def entry_url(entry: dict[str, str]) -> str:
    if entry.get("url"):
        return entry["url"]
    doi = entry.get("doi", "")
    if doi:
        return doi if doi.startswith("http") else f"https://doi.org/{doi}"
    return ""


def group_by_year(entries: list[dict[str, str]]) -> list[dict[str, Any]]:
    """Publication groups, newest year first, undated entries last."""
    grouped: dict[str, list[dict[str, str]]] = {}
    for entry in entries:
        year = (entry.get("year") or "").strip() or NO_YEAR
        grouped.setdefault(year, []).append(entry)

    def sort_key(year: str) -> tuple[int, int, str]:
        if year == NO_YEAR:
            return (2, 0, "")
        leading = re.match(r"\d+", year)
        if leading is None:
            return (1, 0, year)
        return (0, -int(leading.group(0)), year)

    groups = []
    for year in sorted(grouped, key=sort_key):
        items = []
        for entry in grouped[year]:
            item = {"text": format_entry(entry)}
            url = entry_url(entry)
            if url:
                item["url"] = url
            items.append(item)
        groups.append({"year": year, "items": items})
    return groups


def merge_publications(data: dict[str, Any], groups: list[dict[str, Any]], schema: Schema) -> dict[str, Any]:
    if not isinstance(data.get(schema.sections_key), dict):
        data[schema.sections_key] = {}
    sections = data[schema.sections_key]
    if not isinstance(sections.get("publications"), dict):
        sections["publications"] = {}
    publications = sections["publications"]
    publications["groups"] = groups
    return data


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Import a BibTeX file into the publications section.")
    parser.add_argument("bib", type=Path, help="BibTeX file to import.")
    parser.add_argument("--config", type=Path, help="Path to site.json.")
    parser.add_argument("--content", type=Path, help="Content document to update (default: configured content).")
    parser.add_argument("--out", type=Path, help="Write the merged document here instead of in place.")
    args = parser.parse_args(argv)

    if not args.bib.exists():
        raise SystemExit(f"Missing BibTeX file: {args.bib}")
    settings = read_settings(args.config)
    content_path = args.content or settings.page_path.parent / settings.content
    if content_path.exists():
        data = json.loads(content_path.read_text(encoding="utf-8"))
    else:
        data = {}
    if not isinstance(data, dict):
        raise SystemExit(f"Content document must hold a JSON object: {content_path}")

    entries = parse_bibtex(args.bib.read_text(encoding="utf-8"))
    groups = group_by_year(entries)
    merge_publications(data, groups, settings.schema_obj())

    output_path = args.out or content_path
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    print(f"{PREFIX} Imported {len(entries)} entries in {len(groups)} groups -> {output_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
