#!/usr/bin/env python3
# /// script
# requires-python = "==3.12.9"
# dependencies = ["beautifulsoup4", "html5lib"]
# ///

"""
SPDX-License-Identifier: LicenseRef-NonCommercial-Only
© 2025 github.com/defmon3 — Non-commercial use only. Commercial use requires permission.

sanitize.py – HTML sanitization entry points.
"""

import logging

from .attributes import AttributeFilter
from .document import parse_fragment
from .policy import DEFAULT_POLICY, Policy
from .tree import TreeSanitizer

log = logging.getLogger(__name__)

# Upper bound on sanitize passes while waiting for the output to settle.
MAX_PASSES = 4


class Sanitizer:
    """
    A policy compiled for repeated use.

    Holds nothing but the immutable policy and lookups derived from it, so a
    single instance can be shared between threads without locking.

    :param policy: Validated policy; defaults to :data:`DEFAULT_POLICY`.
    """

    __slots__ = ("_policy", "_tree")

    def __init__(self, policy: Policy = DEFAULT_POLICY) -> None:
        if not isinstance(policy, Policy):
            raise TypeError(f"expected a Policy, got {type(policy).__name__}")
        self._policy = policy
        self._tree = TreeSanitizer(policy, AttributeFilter(policy))

    @property
    def policy(self) -> Policy:
        return self._policy

    def clean(self, text: str | bytes) -> str:
        """
        Sanitize untrusted HTML.

        Unwrapping can leave an element where the parser would not put it, so
        the result is parsed and sanitized again until it stops changing.

        :param text: Markup; bytes are decoded as UTF-8 with replacement.
        :returns: Sanitized markup. Returns "" for input that is neither
                  text nor bytes.
        """
        if isinstance(text, bytes):
            text = text.decode("utf-8", errors="replace")
        elif not isinstance(text, str):
            log.debug("Ignoring non-text input of type %s", type(text).__name__)
            return ""
        if not text:
            return ""

        result = self._sanitize(text)
        for passes in range(2, MAX_PASSES + 1):
            again = self._sanitize(result)
            if again == result:
                break
            log.debug("Output changed on re-parse, pass %d", passes)
            result = again
        else:
            log.warning("Output still changing after %d passes", MAX_PASSES)
        log.debug("Cleaned %d characters into %d", len(text), len(result))
        return result

    def _sanitize(self, text: str) -> str:
        soup = parse_fragment(text)
        return self._tree.sanitize(soup.body)


_default_sanitizer = Sanitizer()


def clean(text: str | bytes) -> str:
    """
    Sanitize untrusted HTML with the default policy.

    The defaults keep common formatting tags, drop ``script`` and ``style``
    with their content, allow a conservative set of URL schemes, mark links
    ``noopener noreferrer`` and strip comments.

    :param text: Markup to sanitize.
    :returns: Sanitized markup.
    """
    return _default_sanitizer.clean(text)
