"""Tests for the section renderers."""

from __future__ import annotations

import pytest

from labpage.dom import find, set_text
from labpage.schema import get_schema
from labpage.sections import (
    RENDERERS,
    render_about,
    render_all,
    render_contact,
    render_footer,
    render_header,
    render_hero,
    render_meta,
    render_people,
    render_photos,
    render_publications,
    render_research,
)


def _rel(tag) -> str:
    rel = tag.get("rel")
    return " ".join(rel) if isinstance(rel, list) else rel


def test_renderers_run_in_fixed_order():
    assert [name for name, _ in RENDERERS] == [
        "favicon",
        "meta",
        "header",
        "hero",
        "about",
        "research",
        "people",
        "publications",
        "photos",
        "contact",
        "footer",
    ]


def test_render_all_populates_page(page, document, schema):
    render_all(page, document, schema, year=2031)

    assert page.title.string == "Adaptive Systems Lab"
    assert page.find("meta", attrs={"name": "description"})["content"] == "Collective systems research."
    assert find(page, "favicon")["href"] == "assets/favicon.ico"
    assert find(page, "brand-name").get_text() == "Adaptive Systems Lab"
    assert find(page, "hero-tagline-1").get_text() == "Understanding collective behaviour"
    assert find(page, "hero-logo")["src"] == "assets/logo.svg"
    assert find(page, "hero-logo")["alt"] == "Lab logo"
    assert find(page, "about-title").get_text() == "About us"
    assert find(page, "year").get_text() == "2031"


@pytest.mark.parametrize(
    "section, container_id, title_id",
    [
        ("about", "about-text", "about-title"),
        ("research", "research-list", "research-title"),
        ("people", "people-list", "people-title"),
        ("publications", "publications-list", "publications-title"),
        ("photos", "photos-grid", "photos-title"),
        ("contact", "contact-text", "contact-title"),
    ],
)
def test_missing_section_leaves_region_untouched(page, document, schema, section, container_id, title_id):
    del document["main"][section]
    render_all(page, document, schema, year=2031)
    assert find(page, container_id).contents == []
    assert find(page, title_id).contents == []


def test_empty_document_renders_nothing_but_year(page, schema):
    render_all(page, {}, schema, year=2031)
    assert find(page, "brand-name").contents == []
    assert find(page, "footer-license").contents == []
    assert find(page, "year").get_text() == "2031"
    assert page.title.string == "Lab"


def test_non_mapping_document_is_tolerated(page, schema):
    render_all(page, ["not", "a", "mapping"], schema, year=2031)
    assert find(page, "research-list").contents == []


def test_meta_creates_missing_title(schema):
    from bs4 import BeautifulSoup

    page = BeautifulSoup("<html><head></head><body></body></html>", "html.parser")
    render_meta(page, {"meta": {"title": "New title"}}, schema)
    assert page.head.title.string == "New title"


def test_header_and_hero_clear_absent_fields(page, schema):
    find(page, "brand-name").string = "Old"
    find(page, "hero-tagline-2").string = "Old"
    render_header(page, {"head": {}}, schema)
    render_hero(page, {"hero": {"tagline1": "Only one"}}, schema)
    assert find(page, "brand-name").contents == []
    assert find(page, "hero-tagline-1").get_text() == "Only one"
    assert find(page, "hero-tagline-2").contents == []


def test_about_defaults_title(page, schema):
    render_about(page, {"main": {"about": {"text": "Body"}}}, schema)
    assert find(page, "about-title").get_text() == "About"
    assert find(page, "about-text").get_text() == "Body"


def test_research_items(page, document, schema):
    render_research(page, document, schema)
    assert find(page, "research-title").get_text() == "Research"
    items = find(page, "research-list").select("li.research-item")
    assert len(items) == 2

    first, second = items
    assert first.select_one("h3.research-name").get_text() == "Swarms"
    image = first.select_one("img.research-image")
    assert image["src"] == "img/swarm.jpg"
    assert image["alt"] == "Research image 1"
    assert image["loading"] == "lazy"
    assert first.select_one("p.research-description").get_text() == "Coordination."

    assert second.select_one("img") is None
    assert second.select_one("p") is None


def test_rerender_does_not_accumulate(page, document, schema):
    render_research(page, document, schema)
    render_people(page, document, schema)
    render_publications(page, document, schema)
    render_photos(page, document, schema)

    document["main"]["research"]["items"] = [{"name": "Only"}]
    document["main"]["photos"]["items"] = []
    render_research(page, document, schema)
    render_people(page, document, schema)
    render_publications(page, document, schema)
    render_photos(page, document, schema)

    assert len(page.select("li.research-item")) == 1
    assert len(page.select("section.people-group")) == 2
    assert len(page.select("li.pub-item")) == 2
    assert page.select("figure.photo-card") == []


def test_people_groups_and_cards(page, document, schema):
    render_people(page, document, schema)
    groups = page.select("#people-list > section.people-group")
    assert len(groups) == 2
    assert groups[0].select_one("h3.people-group-title").get_text() == "PI"
    assert groups[1].select_one("h3") is None

    card = groups[0].select_one("li.person-card")
    children = [child["class"] for child in card.find_all(recursive=False)]
    assert children == [
        "person-name",
        "person-photo",
        "person-links",
        "person-role",
        "person-email",
        "person-description",
    ]
    assert card.select_one("img.person-photo")["alt"] == "Alex Example photo"
    mail = card.select_one("p.person-email a")
    assert mail["href"] == "mailto:alex@example.org"
    assert mail.get_text() == "alex@example.org"


def test_person_links_only_for_url_and_icon_pairs(page, document, schema):
    render_people(page, document, schema)
    card = page.select_one("li.person-card")
    links = card.select("div.person-links > a.person-link")
    # scholar has a URL but no icon, github has an icon but no URL
    assert [link["aria-label"] for link in links] == ["LinkedIn"]

    link = links[0]
    assert link["href"] == "https://linkedin.example/alex"
    assert link["target"] == "_blank"
    assert _rel(link) == "noopener noreferrer"
    assert link["title"] == "LinkedIn"
    icon = link.select_one("img.person-link-icon")
    assert icon["src"] == "icons/in.svg"
    assert icon["alt"] == "LinkedIn icon"


def test_person_without_links_has_no_links_container(page, document, schema):
    render_people(page, document, schema)
    sam = page.select("li.person-card")[1]
    assert sam.select_one("div.person-links") is None
    assert sam.select_one("img.person-photo") is None


def test_person_links_with_no_valid_pair_are_dropped(page, document, schema):
    member = document["main"]["people"]["groups"][0]["members"][0]
    member["links"] = {"scholar": "https://scholar.example/alex", "github": ""}
    render_people(page, document, schema)
    assert page.select_one("div.person-links") is None


def test_unnamed_member_photo_alt(page, schema):
    data = {"main": {"people": {"groups": [{"members": [{"photo": "p.jpg"}]}]}}}
    render_people(page, data, schema)
    assert page.select_one("img.person-photo")["alt"] == "Lab member photo"


def test_publications_link_and_plain_items(page, document, schema):
    render_publications(page, document, schema)
    assert find(page, "publications-title").get_text() == "Publications"
    assert page.select_one("h3.pub-year-title").get_text() == "2025"

    linked, plain = page.select("li.pub-item")
    anchor = linked.select_one("a.pub-link")
    assert anchor["href"] == "https://doi.org/10.1/x"
    assert anchor["target"] == "_blank"
    assert _rel(anchor) == "noopener noreferrer"
    assert anchor.get_text() == "Linked paper."

    assert plain.select_one("a") is None
    assert plain.select_one("span").get_text() == "Plain paper."


def test_publication_visible_text_matches_with_or_without_url(page, schema):
    data = {
        "main": {
            "publications": {
                "groups": [{"items": [{"text": "Same text.", "url": "https://x.example"}, {"text": "Same text."}]}]
            }
        }
    }
    render_publications(page, data, schema)
    texts = [item.get_text() for item in page.select("li.pub-item")]
    assert texts == ["Same text.", "Same text."]
    assert page.select_one("h3.pub-year-title") is None


def test_photos(page, document, schema):
    render_photos(page, document, schema)
    assert find(page, "photos-title").get_text() == "Gallery"
    cards = page.select("#photos-grid > figure.photo-card")
    assert len(cards) == 2
    assert cards[0].select_one("figcaption.photo-caption").get_text() == "Retreat"
    assert cards[1].select_one("img.photo-image")["alt"] == "Photo 2"
    assert cards[1].select_one("figcaption") is None


def test_contact_splices_mailto(page, document, schema):
    render_contact(page, document, schema)
    node = find(page, "contact-text")
    anchor = node.select_one("a")
    assert anchor["href"] == "mailto:alex@example.org"
    assert anchor.get_text() == "principal investigator"
    assert node.contents[0] == "Please contact the "
    assert node.contents[2] == " for details."
    assert node.get_text() == document["main"]["contact"]["text"]
    assert find(page, "contact-title").get_text() == "Contact"


@pytest.mark.parametrize(
    "text, email",
    [
        ("Please contact the principal investigator for details.", ""),
        ("Please write to the lab office.", "alex@example.org"),
    ],
)
def test_contact_plain_text_fallback(page, schema, text, email):
    render_contact(page, {"main": {"contact": {"text": text, "email": email}}}, schema)
    node = find(page, "contact-text")
    assert node.find("a") is None
    assert node.get_text() == text


def test_footer_license_link(page, document, schema):
    render_footer(page, document, schema, year=2031)
    assert find(page, "footer-owner").get_text() == "Adaptive Systems Lab"
    assert find(page, "footer-disclaimer").get_text() == "No warranty."
    node = find(page, "footer-license")
    anchor = node.select_one("a")
    assert anchor["href"] == "https://github.com/example/site"
    assert anchor["target"] == "_blank"
    assert _rel(anchor) == "noopener noreferrer"
    assert anchor.get_text() == "Website source code"
    assert node.get_text() == "Website source code is MIT licensed."


def test_footer_without_source_code_is_plain(page, document, schema):
    document["footer"]["sourceCode"] = ""
    render_footer(page, document, schema, year=2031)
    node = find(page, "footer-license")
    assert node.find("a") is None
    assert node.get_text() == "Website source code is MIT licensed."


def test_assets_schema_reads_alternate_keys(page):
    schema = get_schema("assets")
    data = {
        "hero": {"labName": "Lab B", "favicon": "fav.png", "tagline1": "Hello"},
        "sections": {
            "people": {
                "groups": [
                    {"members": [{"name": "Kim", "links": {"github": "https://github.com/kim"}}]},
                ]
            },
            "about": {"text": "Second shape."},
        },
    }
    render_all(page, data, schema, year=2031)
    assert find(page, "brand-name").get_text() == "Lab B"
    assert find(page, "favicon")["href"] == "fav.png"
    assert find(page, "hero-tagline-1").get_text() == "Hello"
    assert find(page, "about-text").get_text() == "Second shape."

    link = page.select_one("a.person-link")
    assert link["href"] == "https://github.com/kim"
    icon = link.select_one("img.person-link-icon")
    assert icon["src"] == "assets/icons/github.svg"
    assert icon["alt"] == "GitHub"


def test_custom_sentinel(page):
    schema = get_schema("inline", contact_sentinel="lab manager")
    data = {"main": {"contact": {"text": "Ask the lab manager.", "email": "m@example.org"}}}
    render_contact(page, data, schema)
    assert find(page, "contact-text").select_one("a").get_text() == "lab manager"


@pytest.mark.parametrize(
    "renderer, section, title_id",
    [
        (render_about, "about", "about-title"),
        (render_research, "research", "research-title"),
        (render_people, "people", "people-title"),
        (render_publications, "publications", "publications-title"),
        (render_photos, "photos", "photos-title"),
        (render_contact, "contact", "contact-title"),
    ],
)
def test_explicit_empty_title_is_kept(page, schema, renderer, section, title_id):
    """An empty title in the document clears the heading instead of using the default."""
    set_text(page, title_id, "Stale")
    renderer(page, {"main": {section: {"title": ""}}}, schema)
    assert find(page, title_id).contents == []


def test_explicit_empty_alt_drops_attribute(page, schema):
    data = {
        "main": {
            "research": {"items": [{"image": "x.png", "alt": ""}]},
            "photos": {"items": [{"image": "y.png", "alt": ""}]},
        }
    }
    render_research(page, data, schema)
    render_photos(page, data, schema)
    assert not page.select_one("img.research-image").has_attr("alt")
    assert not page.select_one("img.photo-image").has_attr("alt")


def test_empty_member_name_and_icon_alt_are_not_defaulted(page, schema):
    data = {
        "main": {
            "people": {
                "linkedInIcon": {"src": "icons/in.svg", "alt": ""},
                "groups": [
                    {
                        "members": [
                            {"name": "", "photo": "p.jpg", "links": {"linkedin": "https://linkedin.example/x"}},
                        ]
                    }
                ],
            }
        }
    }
    render_people(page, data, schema)
    assert page.select_one("img.person-photo")["alt"] == " photo"
    icon = page.select_one("img.person-link-icon")
    assert icon["src"] == "icons/in.svg"
    assert not icon.has_attr("alt")
