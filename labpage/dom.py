from __future__ import annotations

from typing import Any, Mapping

from bs4 import BeautifulSoup, NavigableString, Tag


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


def find(page: BeautifulSoup, element_id: str) -> Tag | None:
    if page is None or not element_id:
        return None
    return page.find(id=element_id)


def set_text(page: BeautifulSoup, element_id: str, text: Any) -> None:
    node = find(page, element_id)
    if node is None:
        return
    node.clear()
    if not _is_blank(text):
        node.append(NavigableString(str(text)))


def set_attr(page: BeautifulSoup, element_id: str, attr: str, value: Any) -> None:
    node = find(page, element_id)
    if node is None:
        return
    if _is_blank(value):
        node.attrs.pop(attr, None)
    else:
        node[attr] = str(value)


def clear_children(node: Tag | None) -> None:
    if node is None:
        return
    node.clear()


def el(
    page: BeautifulSoup,
    tag: str,
    *,
    class_name: str | None = None,
    text: Any = None,
    attrs: Mapping[str, Any] | None = None,
) -> Tag:
    node = page.new_tag(tag)
    if class_name:
        node["class"] = class_name
    if text is not None:
        node.append(NavigableString(str(text)))
    for key, value in (attrs or {}).items():
        if not _is_blank(value):
            node[key] = str(value)
    return node


def text_node(text: str) -> NavigableString:
    return NavigableString(text)


def splice_link(node: Tag | None, text: str, sentinel: str, anchor: Tag | None) -> None:
    """Write ``text`` into ``node``, swapping the first ``sentinel`` for ``anchor``.

    Without an anchor, or when the sentinel does not occur, the text is written
    verbatim. Surrounding text is never altered.
    """
    if node is None:
        return
    node.clear()
    text = text or ""
    if anchor is None or not sentinel or sentinel not in text:
        if text:
            node.append(text_node(text))
        return
    before, _, after = text.partition(sentinel)
    if before:
        node.append(text_node(before))
    node.append(anchor)
    if after:
        node.append(text_node(after))
