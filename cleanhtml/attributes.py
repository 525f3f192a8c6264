"""
SPDX-License-Identifier: LicenseRef-NonCommercial-Only
© 2025 github.com/defmon3 — Non-commercial use only. Commercial use requires permission.

attributes.py – per-element attribute filtering and link hardening.
"""

import logging
import re
import string
from collections.abc import Mapping

from .policy import Policy
from .urls import check_url, is_url_attribute

log = logging.getLogger(__name__)

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)
_ASCII_WHITESPACE = re.compile(r"[\t\n\x0c\r ]+")


def ascii_lower(value: str) -> str:
    return value.translate(_ASCII_LOWER)


def split_tokens(value: str) -> list[str]:
    """Split a space separated token list the way HTML does."""
    return [token for token in _ASCII_WHITESPACE.split(value) if token]


class AttributeFilter:
    """
    Attribute rules of one policy, compiled for lookups by lowercase name.

    :param policy: Validated policy. Held by reference and never modified.
    """

    def __init__(self, policy: Policy) -> None:
        self.policy = policy
        self._values = {
            tag: {attr: frozenset(ascii_lower(v) for v in values) for attr, values in per_tag.items()}
            for tag, per_tag in policy.tag_attribute_values.items()
        }
        self._prefixes = tuple(sorted(policy.generic_attribute_prefixes or ()))
        self._link_rel = None if policy.link_rel is None else split_tokens(policy.link_rel)

    def is_eligible(self, tag: str, attr: str) -> bool:
        """
        :param tag: Lowercase tag name.
        :param attr: Lowercase attribute name.
        :returns: Whether the policy names this attribute for this tag at all.
        """
        policy = self.policy
        if attr in policy.generic_attributes:
            return True
        if self._prefixes and attr.startswith(self._prefixes):
            return True
        if attr in policy.tag_attributes.get(tag, ()):
            return True
        if attr == "class" and tag in policy.allowed_classes:
            return True
        return attr in self._values.get(tag, ())

    def check(self, tag: str, attr: str, value: str) -> str | None:
        """
        Run one attribute through every rule of the policy.

        :param tag: Lowercase tag name.
        :param attr: Lowercase attribute name.
        :param value: Attribute value as parsed.
        :returns: The value to keep, or ``None`` when the attribute is dropped.
        """
        policy = self.policy
        if not self.is_eligible(tag, attr):
            return None

        allowed_values = self._values.get(tag, {}).get(attr)
        if allowed_values is not None and ascii_lower(value) not in allowed_values:
            return None

        if is_url_attribute(tag, attr):
            value = check_url(value, policy.url_schemes, policy.url_relative)
            if value is None:
                return None

        if attr == "class":
            classes = policy.allowed_classes.get(tag)
            if classes is not None:
                value = " ".join(token for token in split_tokens(value) if token in classes)
                if not value:
                    return None

        if attr == "id" and policy.id_prefix is not None and not value.startswith(policy.id_prefix):
            value = policy.id_prefix + value

        if policy.attribute_filter is not None:
            value = policy.attribute_filter(tag, attr, value)
        return value

    def filter(self, tag: str, attrs: Mapping[str, str]) -> dict[str, str]:
        """
        Filter the attributes of a kept element.

        :param tag: Tag name as parsed.
        :param attrs: Attributes in source order.
        :returns: Surviving attributes, still in source order, with forced
                  values from ``set_tag_attribute_values`` applied.
        """
        key = ascii_lower(tag)
        kept: dict[str, str] = {}
        for name, value in attrs.items():
            if value is None:
                value = ""
            elif not isinstance(value, str):
                value = " ".join(value)
            value = self.check(key, ascii_lower(name), value)
            if value is not None:
                kept[name] = value

        forced = self.policy.set_tag_attribute_values.get(key)
        if forced:
            names = {ascii_lower(name): name for name in kept}
            for attr, value in forced.items():
                kept[names.get(attr, attr)] = value
        return kept

    def inject_link_rel(self, tag: str, attrs: dict[str, str]) -> None:
        """
        Merge the policy's ``link_rel`` tokens into ``rel`` of a link.

        Only applies to ``a`` elements that kept their ``href``. Existing
        tokens come first; duplicates are dropped.
        """
        if not self._link_rel or ascii_lower(tag) != "a" or "href" not in attrs:
            return
        tokens = split_tokens(attrs.get("rel", "")) + self._link_rel
        attrs["rel"] = " ".join(dict.fromkeys(tokens))
