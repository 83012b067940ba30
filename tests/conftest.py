from __future__ import annotations

import copy
import json
from pathlib import Path

import pytest
from bs4 import BeautifulSoup

from labpage.schema import get_schema

TESTS_DIR = Path(__file__).resolve().parent
HOST_PAGE = (TESTS_DIR / "host_page.html").read_text(encoding="utf-8")

DOCUMENT = {
    "meta": {"title": "Adaptive Systems Lab", "description": "Collective systems research."},
    "head": {"labName": "Adaptive Systems Lab", "favicon": "assets/favicon.ico"},
    "hero": {
        "tagline1": "Understanding collective behaviour",
        "tagline2": "from cells to societies",
        "logo": {"src": "assets/logo.svg", "alt": "Lab logo"},
    },
    "main": {
        "about": {"title": "About us", "text": "We study adaptive wholes."},
        "research": {
            "items": [
                {"name": "Swarms", "image": "img/swarm.jpg", "description": "Coordination."},
                {"name": "Morphogenesis"},
            ]
        },
        "people": {
            "linkedInIcon": {"src": "icons/in.svg", "alt": "LinkedIn icon"},
            "githubIcon": {"src": "icons/gh.svg"},
            "groups": [
                {
                    "groupTitle": "PI",
                    "members": [
                        {
                            "name": "Alex Example",
                            "photo": "img/alex.jpg",
                            "role": "Professor",
                            "email": "alex@example.org",
                            "description": "Runs the lab.",
                            "links": {
                                "linkedin": "https://linkedin.example/alex",
                                "scholar": "https://scholar.example/alex",
                                "github": "",
                            },
                        }
                    ],
                },
                {"members": [{"name": "Sam Sample"}]},
            ],
        },
        "publications": {
            "groups": [
                {
                    "year": 2025,
                    "items": [
                        {"text": "Linked paper.", "url": "https://doi.org/10.1/x"},
                        {"text": "Plain paper."},
                    ],
                }
            ]
        },
        "photos": {"title": "Gallery", "items": [{"image": "img/a.jpg", "caption": "Retreat"}, {"image": "img/b.jpg"}]},
        "contact": {
            "text": "Please contact the principal investigator for details.",
            "email": "alex@example.org",
        },
    },
    "footer": {
        "owner": "Adaptive Systems Lab",
        "disclaimer": "No warranty.",
        "licenseText": "Website source code is MIT licensed.",
        "sourceCode": "https://github.com/example/site",
    },
}


@pytest.fixture
def page() -> BeautifulSoup:
    return BeautifulSoup(HOST_PAGE, "html.parser")


@pytest.fixture
def document() -> dict:
    return copy.deepcopy(DOCUMENT)


@pytest.fixture
def schema():
    return get_schema("inline")


@pytest.fixture
def site(tmp_path: Path, document: dict) -> Path:
    """A project directory holding a host page and its content document."""
    (tmp_path / "index.html").write_text(HOST_PAGE, encoding="utf-8")
    content_dir = tmp_path / "content"
    content_dir.mkdir()
    (content_dir / "content.json").write_text(json.dumps(document), encoding="utf-8")
    return tmp_path


@pytest.fixture
def host_html() -> str:
    return HOST_PAGE
