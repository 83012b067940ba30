from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

from labpage.schema import ERROR_MODES, PRESETS, Schema, get_schema

PREFIX = "[LAB]"
CONFIG_NAME = "site.json"

DEFAULTS: dict[str, Any] = {
    "page": "index.html",
    "content": "content/content.json",
    "output": "site/index.html",
    "schema": "inline",
    "error_mode": "",
    "icon_paths": {},
    "contact_sentinel": "",
    "footer_sentinel": "",
    "assets": ["assets", "content"],
}


@dataclass
class Settings:
    base_dir: Path
    page: str = DEFAULTS["page"]
    content: str = DEFAULTS["content"]
    output: str = DEFAULTS["output"]
    schema: str = DEFAULTS["schema"]
    error_mode: str = ""
    icon_paths: dict[str, str] = field(default_factory=dict)
    contact_sentinel: str = ""
    footer_sentinel: str = ""
    assets: list[str] = field(default_factory=lambda: list(DEFAULTS["assets"]))

    @property
    def page_path(self) -> Path:
        return self._resolve(self.page)

    @property
    def output_path(self) -> Path:
        return self._resolve(self.output)

    @property
    def site_dir(self) -> Path:
        return self.output_path.parent

    def _resolve(self, raw: str) -> Path:
        path = Path(raw)
        if path.is_absolute():
            return path
        return self.base_dir / path

    def schema_obj(self) -> Schema:
        return get_schema(
            self.schema,
            error_mode=self.error_mode or None,
            icon_paths=self.icon_paths or None,
            contact_sentinel=self.contact_sentinel or None,
            footer_sentinel=self.footer_sentinel or None,
        )


def warn(message: str) -> None:
    print(f"{PREFIX} {message}", file=sys.stderr)


def _read_config_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        config = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid config file {path}: {exc}") from exc
    if not isinstance(config, dict):
        raise SystemExit(f"Config file must hold a JSON object: {path}")
    return config


def read_settings(
    config_path: Path | None = None,
    base_dir: Path | None = None,
    **overrides: Any,
) -> Settings:
    base_dir = (base_dir or Path.cwd()).resolve()
    if config_path is None:
        config_path = base_dir / CONFIG_NAME
    elif not config_path.exists():
        raise SystemExit(f"Missing config file: {config_path}")

    config = dict(DEFAULTS)
    config.update(_read_config_file(config_path))
    config.update({key: value for key, value in overrides.items() if value is not None})

    schema = str(config.get("schema") or "").strip().lower()
    if schema not in PRESETS:
        warn(f"Unknown schema {schema!r}, using {DEFAULTS['schema']!r}")
        schema = DEFAULTS["schema"]
    error_mode = str(config.get("error_mode") or "").strip().lower()
    if error_mode and error_mode not in ERROR_MODES:
        warn(f"Unknown error_mode {error_mode!r}, using the schema default")
        error_mode = ""
    icon_paths = config.get("icon_paths") or {}
    if not isinstance(icon_paths, dict):
        warn("icon_paths must be an object, ignoring it")
        icon_paths = {}

    assets = config.get("assets")
    if isinstance(assets, str):
        assets = [assets]
    if not isinstance(assets, list):
        warn("assets must be a list of directories, ignoring it")
        assets = []

    known = {item.name for item in fields(Settings)}
    for key in config:
        if key not in known:
            warn(f"Ignoring unknown config key {key!r}")

    return Settings(
        base_dir=base_dir,
        page=str(config["page"]),
        content=str(config["content"]),
        output=str(config["output"]),
        schema=schema,
        error_mode=error_mode,
        icon_paths={str(key): str(value) for key, value in icon_paths.items()},
        contact_sentinel=str(config.get("contact_sentinel") or ""),
        footer_sentinel=str(config.get("footer_sentinel") or ""),
        assets=[str(item) for item in assets],
    )
