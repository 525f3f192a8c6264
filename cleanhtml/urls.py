"""
SPDX-License-Identifier: LicenseRef-NonCommercial-Only
© 2025 github.com/defmon3 — Non-commercial use only. Commercial use requires permission.

urls.py – URL-bearing attributes and scheme checks.
"""

import enum
import re
from dataclasses import dataclass
from urllib.parse import urljoin

# Attributes that carry a URL on any element.
URL_ATTRIBUTES = frozenset(
    {"href", "src", "cite", "action", "formaction", "poster", "longdesc", "background", "xlink:href"}
)

# Attributes that carry a URL only on specific elements.
TAG_URL_ATTRIBUTES = frozenset({("object", "data"), ("a", "ping")})

# Browsers trim these from both ends of a URL before looking at it.
_C0_AND_SPACE = "".join(chr(c) for c in range(0x21))
_TAB_OR_NEWLINE = re.compile(r"[\t\n\r]")
_SCHEME = re.compile(r"([A-Za-z][A-Za-z0-9+.\-]*):")
SCHEME_NAME = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*\Z")


class UrlRelative(enum.Enum):
    """What to do with URLs that have no scheme."""

    PASS_THROUGH = "pass-through"
    DENY = "deny"


@dataclass(frozen=True, slots=True)
class RewriteWithBase:
    """Resolve relative URLs against ``base``, which must be absolute."""

    base: str


def is_url_attribute(tag: str, attribute: str) -> bool:
    return attribute in URL_ATTRIBUTES or (tag, attribute) in TAG_URL_ATTRIBUTES


def url_scheme(value: str) -> str | None:
    """
    Extract the scheme of a URL the way a browser would see it.

    :param value: Attribute value as decoded by the parser.
    :returns: The lowercased scheme, or ``None`` for a relative URL.
    """
    url = _TAB_OR_NEWLINE.sub("", value.strip(_C0_AND_SPACE))
    match = _SCHEME.match(url)
    if match is None:
        return None
    return match.group(1).lower()


def check_url(
    value: str,
    schemes: frozenset[str],
    relative: "UrlRelative | RewriteWithBase",
) -> str | None:
    """
    Decide whether a URL attribute value survives.

    :param value: Attribute value.
    :param schemes: Allowed lowercase schemes.
    :param relative: Handling for scheme-less URLs.
    :returns: The value to keep (possibly rewritten), or ``None`` to drop the
              attribute.
    """
    scheme = url_scheme(value)
    if scheme is not None:
        return value if scheme in schemes else None
    if relative is UrlRelative.DENY:
        return None
    if isinstance(relative, RewriteWithBase):
        return urljoin(relative.base, value)
    return value
