"""
SPDX-License-Identifier: LicenseRef-NonCommercial-Only
© 2025 github.com/defmon3 — Non-commercial use only. Commercial use requires permission.

document.py – parsing into a BeautifulSoup tree, and the markup written out.
"""

import logging
from collections.abc import Mapping

from bs4 import BeautifulSoup, Tag
from bs4.dammit import EntitySubstitution

log = logging.getLogger(__name__)

HTML_NAMESPACE = "http://www.w3.org/1999/xhtml"
SVG_NAMESPACE = "http://www.w3.org/2000/svg"
MATHML_NAMESPACE = "http://www.w3.org/1998/Math/MathML"

# Parsing starts in the "in body" insertion mode, like a fragment in a <div>.
_FRAGMENT_PREFIX = "<!DOCTYPE html><body>"

VOID_ELEMENTS = frozenset(
    {"area", "base", "br", "col", "embed", "hr", "img", "input", "link", "meta", "source", "track", "wbr"}
    | {"basefont", "bgsound", "frame", "keygen", "param"}
)

# Text children are written unescaped.
RAW_TEXT_ELEMENTS = frozenset({"script", "style"})

# The parser drops one newline right after these start tags.
NEWLINE_EATING_ELEMENTS = frozenset({"pre", "textarea", "listing"})


def parse_fragment(text: str) -> BeautifulSoup:
    """
    Parse untrusted markup with the HTML5 tree construction rules.

    :param text: Markup to parse.
    :returns: The parsed document; the fragment is the children of ``body``.
    """
    soup = BeautifulSoup(_FRAGMENT_PREFIX + text, "html5lib", multi_valued_attributes=None)
    log.debug("Parsed fragment of %d characters", len(text))
    return soup


def is_html(tag: Tag) -> bool:
    return (tag.namespace or HTML_NAMESPACE) == HTML_NAMESPACE


def is_void(tag: Tag) -> bool:
    """:returns: Whether ``tag`` is written without an end tag."""
    return is_html(tag) and tag.name in VOID_ELEMENTS


def eats_newline(tag: Tag) -> bool:
    return is_html(tag) and tag.name in NEWLINE_EATING_ELEMENTS


def start_tag(name: str, attrs: Mapping[str, str]) -> str:
    """
    Write a start tag with attributes in the given order.

    Values get ``&``, ``<`` and ``>`` escaped and are quoted by
    BeautifulSoup's rules: double quotes, single quotes when the value holds
    only double quotes, ``&quot;`` when it holds both.
    """
    parts = [name]
    for key, value in attrs.items():
        parts.append(f"{key}={EntitySubstitution.substitute_xml(value, make_quoted_attribute=True)}")
    return "<" + " ".join(parts) + ">"


def end_tag(name: str) -> str:
    return f"</{name}>"


def text_node(text: str, parent: Tag) -> str:
    if is_html(parent) and parent.name in RAW_TEXT_ELEMENTS:
        return str(text)
    return EntitySubstitution.substitute_xml(text)


def comment_node(text: str) -> str:
    return f"<!--{text}-->"
