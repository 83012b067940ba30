from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Mapping

from bs4 import BeautifulSoup

from labpage.dom import clear_children, el, find, set_attr, set_text, splice_link
from labpage.schema import Schema

NEW_TAB = {"target": "_blank", "rel": "noopener noreferrer"}


def _default(value: Any, fallback: Any) -> Any:
    return fallback if value is None else value


def _items(section: Mapping[str, Any], key: str) -> list[Any]:
    value = section.get(key)
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, Mapping)]


def render_favicon(page: BeautifulSoup, data: Any, schema: Schema) -> None:
    header = schema.header(data)
    if not header or not header.get("favicon"):
        return
    set_attr(page, "favicon", "href", header["favicon"])


def render_meta(page: BeautifulSoup, data: Any, schema: Schema) -> None:
    meta = schema.top(data, "meta")
    if not meta:
        return
    title = meta.get("title")
    if title:
        title_tag = page.title
        if title_tag is None and page.head is not None:
            title_tag = page.new_tag("title")
            page.head.append(title_tag)
        if title_tag is not None:
            title_tag.string = str(title)
    description = meta.get("description")
    meta_desc = page.find("meta", attrs={"name": "description"})
    if meta_desc is not None and description:
        meta_desc["content"] = str(description)


def render_header(page: BeautifulSoup, data: Any, schema: Schema) -> None:
    header = schema.header(data)
    if header is None:
        return
    set_text(page, "brand-name", header.get("labName"))


def render_hero(page: BeautifulSoup, data: Any, schema: Schema) -> None:
    hero = schema.hero(data)
    if hero is None:
        return
    set_text(page, "hero-tagline-1", hero.get("tagline1"))
    set_text(page, "hero-tagline-2", hero.get("tagline2"))
    for key, element_id in (("animation", "hero-animation"), ("logo", "hero-logo")):
        image = hero.get(key)
        if isinstance(image, Mapping):
            set_attr(page, element_id, "src", image.get("src"))
            set_attr(page, element_id, "alt", image.get("alt") or "")


def render_about(page: BeautifulSoup, data: Any, schema: Schema) -> None:
    about = schema.section(data, "about")
    if about is None:
        return
    set_text(page, "about-title", _default(about.get("title"), "About"))
    set_text(page, "about-text", about.get("text"))


def render_research(page: BeautifulSoup, data: Any, schema: Schema) -> None:
    research = schema.section(data, "research")
    if research is None:
        return
    set_text(page, "research-title", _default(research.get("title"), "Research"))

    container = find(page, "research-list")
    if container is None:
        return
    clear_children(container)
    for index, item in enumerate(_items(research, "items"), start=1):
        li = el(page, "li", class_name="research-item")
        if item.get("name"):
            li.append(el(page, "h3", class_name="research-name", text=item["name"]))
        if item.get("image"):
            li.append(
                el(
                    page,
                    "img",
                    class_name="research-image",
                    attrs={
                        "src": item["image"],
                        "alt": _default(item.get("alt"), f"Research image {index}"),
                        "loading": "lazy",
                    },
                )
            )
        if item.get("description"):
            li.append(el(page, "p", class_name="research-description", text=item["description"]))
        container.append(li)


def _person_links(page: BeautifulSoup, member: Mapping[str, Any], icons: list) -> Any:
    links = member.get("links")
    if not isinstance(links, Mapping):
        return None
    wrap = el(page, "div", class_name="person-links")
    for key, label, icon in icons:
        url = links.get(key)
        if not url or icon is None:
            continue
        anchor = el(
            page,
            "a",
            class_name="person-link",
            attrs={"href": url, **NEW_TAB, "aria-label": label, "title": label},
        )
        anchor.append(
            el(
                page,
                "img",
                class_name="person-link-icon",
                attrs={"src": icon["src"], "alt": icon["alt"], "loading": "lazy"},
            )
        )
        wrap.append(anchor)
    if not wrap.contents:
        return None
    return wrap


def _person_card(page: BeautifulSoup, member: Mapping[str, Any], icons: list) -> Any:
    card = el(page, "li", class_name="person-card")
    name = member.get("name")
    if name:
        card.append(el(page, "h4", class_name="person-name", text=name))
    if member.get("photo"):
        card.append(
            el(
                page,
                "img",
                class_name="person-photo",
                attrs={"src": member["photo"], "alt": f"{_default(name, 'Lab member')} photo", "loading": "lazy"},
            )
        )
    links = _person_links(page, member, icons)
    if links is not None:
        card.append(links)
    if member.get("role"):
        card.append(el(page, "p", class_name="person-role", text=member["role"]))
    if member.get("email"):
        email = el(page, "p", class_name="person-email")
        email.append(el(page, "a", text=member["email"], attrs={"href": f"mailto:{member['email']}"}))
        card.append(email)
    if member.get("description"):
        card.append(el(page, "p", class_name="person-description", text=member["description"]))
    return card


def render_people(page: BeautifulSoup, data: Any, schema: Schema) -> None:
    people = schema.section(data, "people")
    if people is None:
        return
    set_text(page, "people-title", _default(people.get("title"), "People"))

    container = find(page, "people-list")
    if container is None:
        return
    clear_children(container)
    icons = schema.profile_icons(people)
    for group in _items(people, "groups"):
        group_wrap = el(page, "section", class_name="people-group")
        if group.get("groupTitle"):
            group_wrap.append(el(page, "h3", class_name="people-group-title", text=group["groupTitle"]))
        cards = el(page, "ul", class_name="people-cards")
        for member in _items(group, "members"):
            cards.append(_person_card(page, member, icons))
        group_wrap.append(cards)
        container.append(group_wrap)


def render_publications(page: BeautifulSoup, data: Any, schema: Schema) -> None:
    pubs = schema.section(data, "publications")
    if pubs is None:
        return
    set_text(page, "publications-title", _default(pubs.get("title"), "Publications"))

    container = find(page, "publications-list")
    if container is None:
        return
    clear_children(container)
    for group in _items(pubs, "groups"):
        year_wrap = el(page, "section", class_name="pub-year")
        if group.get("year"):
            year_wrap.append(el(page, "h3", class_name="pub-year-title", text=str(group["year"])))
        pub_list = el(page, "ul", class_name="pub-list")
        for item in _items(group, "items"):
            li = el(page, "li", class_name="pub-item")
            text = item.get("text") or ""
            if item.get("url"):
                li.append(el(page, "a", class_name="pub-link", text=text, attrs={"href": item["url"], **NEW_TAB}))
            else:
                li.append(el(page, "span", text=text))
            pub_list.append(li)
        year_wrap.append(pub_list)
        container.append(year_wrap)


def render_photos(page: BeautifulSoup, data: Any, schema: Schema) -> None:
    photos = schema.section(data, "photos")
    if photos is None:
        return
    set_text(page, "photos-title", _default(photos.get("title"), "Photos"))

    grid = find(page, "photos-grid")
    if grid is None:
        return
    clear_children(grid)
    for index, item in enumerate(_items(photos, "items"), start=1):
        figure = el(page, "figure", class_name="photo-card")
        if item.get("image"):
            figure.append(
                el(
                    page,
                    "img",
                    class_name="photo-image",
                    attrs={"src": item["image"], "alt": _default(item.get("alt"), f"Photo {index}"), "loading": "lazy"},
                )
            )
        if item.get("caption"):
            figure.append(el(page, "figcaption", class_name="photo-caption", text=item["caption"]))
        grid.append(figure)


def render_contact(page: BeautifulSoup, data: Any, schema: Schema) -> None:
    contact = schema.section(data, "contact")
    if contact is None:
        return
    set_text(page, "contact-title", _default(contact.get("title"), "Contact"))

    email = contact.get("email") or ""
    anchor = None
    if email:
        anchor = el(page, "a", text=schema.contact_sentinel, attrs={"href": f"mailto:{email}"})
    splice_link(find(page, "contact-text"), str(contact.get("text") or ""), schema.contact_sentinel, anchor)


def render_footer(page: BeautifulSoup, data: Any, schema: Schema, year: int | None = None) -> None:
    set_text(page, "year", str(year or datetime.now().year))
    footer = schema.top(data, "footer")
    if footer is None:
        return
    set_text(page, "footer-owner", footer.get("owner"))
    set_text(page, "footer-disclaimer", footer.get("disclaimer"))

    url = footer.get("sourceCode") or ""
    anchor = None
    if url:
        anchor = el(page, "a", text=schema.footer_sentinel, attrs={"href": url, **NEW_TAB})
    splice_link(find(page, "footer-license"), str(footer.get("licenseText") or ""), schema.footer_sentinel, anchor)


RENDERERS: list[tuple[str, Callable[..., None]]] = [
    ("favicon", render_favicon),
    ("meta", render_meta),
    ("header", render_header),
    ("hero", render_hero),
    ("about", render_about),
    ("research", render_research),
    ("people", render_people),
    ("publications", render_publications),
    ("photos", render_photos),
    ("contact", render_contact),
    ("footer", render_footer),
]


def render_all(page: BeautifulSoup, data: Any, schema: Schema, year: int | None = None) -> None:
    for name, renderer in RENDERERS:
        if name == "footer":
            renderer(page, data, schema, year=year)
        else:
            renderer(page, data, schema)
