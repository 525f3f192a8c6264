"""
SPDX-License-Identifier: LicenseRef-NonCommercial-Only
© 2025 github.com/defmon3 — Non-commercial use only. Commercial use requires permission.

tree.py – the keep / unwrap / drop walk over a parsed fragment.
"""

import logging

from bs4 import NavigableString, Tag
from bs4.element import Comment, PreformattedString

from .attributes import AttributeFilter, ascii_lower
from .document import (
    HTML_NAMESPACE,
    MATHML_NAMESPACE,
    SVG_NAMESPACE,
    comment_node,
    eats_newline,
    end_tag,
    is_void,
    start_tag,
    text_node,
)
from .policy import Policy

log = logging.getLogger(__name__)

# MathML elements whose children are parsed as HTML.
MATHML_TEXT_INTEGRATION_POINTS = frozenset({"mi", "mo", "mn", "ms", "mtext", "annotation-xml"})


def namespace_switch_allowed(parent: Tag, child: Tag) -> bool:
    """
    Check that ``child`` may sit directly under ``parent``.

    After unwrapping, an element can end up under a parent the parser never
    gave it. A namespace change that the HTML parser could not have produced
    there would re-parse differently, so such elements are unwrapped too.
    """
    parent_ns = parent.namespace or HTML_NAMESPACE
    child_ns = child.namespace or HTML_NAMESPACE
    if parent_ns == child_ns:
        return True
    if parent_ns == HTML_NAMESPACE:
        if child_ns == SVG_NAMESPACE:
            return child.name == "svg"
        if child_ns == MATHML_NAMESPACE:
            return child.name == "math"
        return False
    if parent_ns == MATHML_NAMESPACE:
        return parent.name in MATHML_TEXT_INTEGRATION_POINTS
    if parent_ns == SVG_NAMESPACE:
        return parent.name == "foreignObject"
    return False


class TreeSanitizer:
    """
    Writes the sanitized markup of a fragment.

    The walk is pre-order and driven by an explicit stack holding
    ``(node, kept parent)`` pairs and pending end tags, so nesting depth never
    touches the interpreter's recursion limit. Markup is written as the walk
    goes; no output tree is built, so the cost stays linear in the input.
    """

    def __init__(self, policy: Policy, attributes: AttributeFilter | None = None) -> None:
        self.policy = policy
        self.attributes = attributes or AttributeFilter(policy)

    def sanitize(self, fragment: Tag) -> str:
        """
        :param fragment: Element whose children are the input. It is not
            modified.
        :returns: The sanitized markup of its children.
        """
        policy = self.policy
        out: list[str] = []
        stack: list = [(child, fragment) for child in reversed(fragment.contents)]
        # True right after a pre/textarea/listing start tag
        leading = False
        dropped = unwrapped = 0

        while stack:
            item = stack.pop()
            if isinstance(item, str):
                out.append(item)
                leading = False
                continue

            node, parent = item
            if isinstance(node, Comment):
                if policy.strip_comments:
                    dropped += 1
                else:
                    out.append(comment_node(node))
                    leading = False
                continue
            if isinstance(node, PreformattedString):
                # doctype, CDATA, processing instruction, declaration
                dropped += 1
                continue
            if isinstance(node, NavigableString):
                text = text_node(node, parent)
                if leading and text.startswith("\n"):
                    text = "\n" + text
                if text:
                    out.append(text)
                    leading = False
                continue
            if not isinstance(node, Tag):
                continue

            name = ascii_lower(node.name)
            if name in policy.clean_content_tags:
                dropped += 1
                continue

            if name in policy.tags and namespace_switch_allowed(parent, node):
                attrs = self.attributes.filter(node.name, node.attrs)
                self.attributes.inject_link_rel(node.name, attrs)
                out.append(start_tag(node.name, attrs))
                if is_void(node):
                    leading = False
                    continue
                stack.append(end_tag(node.name))
                stack.extend((child, node) for child in reversed(node.contents))
                leading = eats_newline(node)
            else:
                unwrapped += 1
                stack.extend((child, parent) for child in reversed(node.contents))

        log.debug("Sanitized fragment: dropped=%d unwrapped=%d", dropped, unwrapped)
        return "".join(out)
