from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Mapping

# (link key, label, document icon key)
PROFILE_LINKS = [
    ("linkedin", "LinkedIn", "linkedInIcon"),
    ("scholar", "Google Scholar", "googleScholarIcon"),
    ("github", "GitHub", "githubIcon"),
]

ICON_ASSETS = {
    "linkedin": "assets/icons/linkedin.svg",
    "scholar": "assets/icons/google-scholar.svg",
    "github": "assets/icons/github.svg",
}

ICON_SOURCES = {"document", "assets"}
ERROR_MODES = {"banner", "log"}


def _mapping(value: Any) -> Mapping[str, Any] | None:
    if isinstance(value, Mapping):
        return value
    return None


@dataclass(frozen=True)
class Schema:
    name: str
    header_key: str = "head"
    hero_key: str = "hero"
    sections_key: str = "main"
    icon_source: str = "document"
    error_mode: str = "banner"
    icon_paths: Mapping[str, str] = field(default_factory=lambda: dict(ICON_ASSETS))
    contact_sentinel: str = "principal investigator"
    footer_sentinel: str = "Website source code"

    def header(self, data: Any) -> Mapping[str, Any] | None:
        return _mapping((_mapping(data) or {}).get(self.header_key))

    def hero(self, data: Any) -> Mapping[str, Any] | None:
        return _mapping((_mapping(data) or {}).get(self.hero_key))

    def section(self, data: Any, name: str) -> Mapping[str, Any] | None:
        sections = _mapping((_mapping(data) or {}).get(self.sections_key))
        if sections is None:
            return None
        return _mapping(sections.get(name))

    def top(self, data: Any, name: str) -> Mapping[str, Any] | None:
        return _mapping((_mapping(data) or {}).get(name))

    def profile_icons(self, people: Mapping[str, Any]) -> list[tuple[str, str, dict[str, str] | None]]:
        """Return ``(key, label, icon)`` for every profile link kind.

        ``icon`` is ``{"src", "alt"}`` or ``None`` when no usable image exists.
        """
        icons = []
        for key, label, doc_key in PROFILE_LINKS:
            icon = None
            if self.icon_source == "assets":
                src = self.icon_paths.get(key)
                if src:
                    icon = {"src": src, "alt": label}
            else:
                raw = _mapping(people.get(doc_key))
                if raw and raw.get("src"):
                    icon = {"src": raw["src"], "alt": label if raw.get("alt") is None else raw["alt"]}
            icons.append((key, label, icon))
        return icons


PRESETS = {
    "inline": Schema(name="inline"),
    "assets": Schema(
        name="assets",
        header_key="hero",
        sections_key="sections",
        icon_source="assets",
        error_mode="log",
    ),
}


def get_schema(name: str = "inline", **overrides: Any) -> Schema:
    try:
        preset = PRESETS[name]
    except KeyError:
        raise ValueError(f"Unknown schema: {name!r} (expected one of {', '.join(sorted(PRESETS))})") from None
    overrides = {key: value for key, value in overrides.items() if value is not None}
    if overrides.get("icon_source", preset.icon_source) not in ICON_SOURCES:
        raise ValueError(f"Unknown icon source: {overrides['icon_source']!r}")
    if overrides.get("error_mode", preset.error_mode) not in ERROR_MODES:
        raise ValueError(f"Unknown error mode: {overrides['error_mode']!r}")
    if "icon_paths" in overrides:
        overrides["icon_paths"] = {**preset.icon_paths, **overrides["icon_paths"]}
    return replace(preset, **overrides)
