"""
SPDX-License-Identifier: LicenseRef-NonCommercial-Only
© 2025 github.com/defmon3 — Non-commercial use only. Commercial use requires permission.

policy.py – the immutable sanitization policy.

A :class:`Policy` is validated once, when it is built. Every collection is
normalized to a ``frozenset`` (maps to read-only mappings of frozensets), so a
policy handed to a :class:`~cleanhtml.sanitize.Sanitizer` can never change
underneath it. Use :meth:`Policy.replace` to derive a modified policy.
"""

import dataclasses
import logging
import re
from collections.abc import Callable, Collection, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .defaults import (
    DEFAULT_CLEAN_CONTENT_TAGS,
    DEFAULT_GENERIC_ATTRIBUTES,
    DEFAULT_LINK_REL,
    DEFAULT_STRIP_COMMENTS,
    DEFAULT_TAG_ATTRIBUTES,
    DEFAULT_TAGS,
    DEFAULT_URL_SCHEMES,
)
from .errors import CLASS_AUTHORITY, CLEAN_CONTENT_OVERLAP, MALFORMED, REL_AUTHORITY, PolicyConflict
from .urls import SCHEME_NAME, RewriteWithBase, UrlRelative, url_scheme

log = logging.getLogger(__name__)

AttributeCallback = Callable[[str, str, str], str | None]

# Characters that cannot appear in a tag or attribute name we would emit.
_BAD_NAME = re.compile(r"[\s\"'<>/=\x00-\x1f\x7f]")

# Raw payload keys, as sent by the original JSON configuration.
RAW_KEYS = {
    "tags": "tags",
    "cleanContentTags": "clean_content_tags",
    "genericAttributes": "generic_attributes",
    "genericAttributePrefixes": "generic_attribute_prefixes",
    "tagAttributes": "tag_attributes",
    "tagAttributeValues": "tag_attribute_values",
    "setTagAttributeValues": "set_tag_attribute_values",
    "urlSchemes": "url_schemes",
    "urlRelative": "url_relative",
    "linkRel": "link_rel",
    "allowedClasses": "allowed_classes",
    "stripComments": "strip_comments",
    "idPrefix": "id_prefix",
}


def _name(kind: str, value: Any) -> str:
    if not isinstance(value, str) or not value or _BAD_NAME.search(value):
        raise PolicyConflict(MALFORMED, f"invalid {kind} name: {value!r}")
    return value.lower()


def _names(kind: str, values: Any) -> frozenset[str]:
    if isinstance(values, str) or not isinstance(values, Collection):
        raise PolicyConflict(MALFORMED, f"{kind} names must be a collection of strings, got {values!r}")
    return frozenset(_name(kind, v) for v in values)


def _strings(kind: str, values: Any) -> frozenset[str]:
    if isinstance(values, str) or not isinstance(values, Collection):
        raise PolicyConflict(MALFORMED, f"{kind} must be a collection of strings, got {values!r}")
    if not all(isinstance(v, str) for v in values):
        raise PolicyConflict(MALFORMED, f"{kind} must only contain strings, got {values!r}")
    return frozenset(values)


def _mapping(kind: str, value: Any) -> Mapping:
    if not isinstance(value, Mapping):
        raise PolicyConflict(MALFORMED, f"{kind} must be a mapping, got {value!r}")
    return value


def _scheme(value: Any) -> str:
    if not isinstance(value, str) or not SCHEME_NAME.match(value):
        raise PolicyConflict(MALFORMED, f"invalid URL scheme: {value!r}")
    return value.lower()


def _optional_string(kind: str, value: Any) -> str | None:
    if value is not None and not isinstance(value, str):
        raise PolicyConflict(MALFORMED, f"{kind} must be a string or None, got {value!r}")
    return value


@dataclass(frozen=True, slots=True)
class Policy:
    """
    Allow-list driven description of what survives sanitization.

    :param tags: Tags kept as elements. Other tags are unwrapped.
    :param clean_content_tags: Tags removed together with everything inside.
    :param generic_attributes: Attributes allowed on every kept tag.
    :param generic_attribute_prefixes: Attribute name prefixes allowed on every
        kept tag (``data-`` style), or ``None``.
    :param tag_attributes: Tag name to attributes allowed on that tag.
    :param tag_attribute_values: Tag name to attribute name to the literal
        values that attribute may take.
    :param set_tag_attribute_values: Tag name to attribute name to a value the
        attribute is forced to.
    :param url_schemes: Schemes permitted in URL-bearing attributes.
    :param url_relative: Handling of URLs without a scheme.
    :param link_rel: Space separated tokens merged into ``rel`` of links, or
        ``None``.
    :param allowed_classes: Tag name to the class tokens kept on that tag.
    :param strip_comments: Remove comments when true.
    :param id_prefix: Prefix prepended to every kept ``id``, or ``None``.
    :param attribute_filter: Optional ``(tag, attribute, value)`` hook run last
        on surviving attributes; returns the value to keep or ``None``.
    :raises PolicyConflict: When the fields contradict each other or contain
        malformed names.
    """

    tags: Collection[str] = DEFAULT_TAGS
    clean_content_tags: Collection[str] = DEFAULT_CLEAN_CONTENT_TAGS
    generic_attributes: Collection[str] = DEFAULT_GENERIC_ATTRIBUTES
    generic_attribute_prefixes: Collection[str] | None = None
    tag_attributes: Mapping[str, Collection[str]] = field(default_factory=lambda: DEFAULT_TAG_ATTRIBUTES)
    tag_attribute_values: Mapping[str, Mapping[str, Collection[str]]] = field(default_factory=dict)
    set_tag_attribute_values: Mapping[str, Mapping[str, str]] = field(default_factory=dict)
    url_schemes: Collection[str] = DEFAULT_URL_SCHEMES
    url_relative: UrlRelative | RewriteWithBase = UrlRelative.PASS_THROUGH
    link_rel: str | None = DEFAULT_LINK_REL
    allowed_classes: Mapping[str, Collection[str]] = field(default_factory=dict)
    strip_comments: bool = DEFAULT_STRIP_COMMENTS
    id_prefix: str | None = None
    attribute_filter: AttributeCallback | None = None

    def __post_init__(self) -> None:
        self._normalize()
        self._check_conflicts()

    def _normalize(self) -> None:
        setattr_ = object.__setattr__
        setattr_(self, "tags", _names("tag", self.tags))
        setattr_(self, "clean_content_tags", _names("tag", self.clean_content_tags))
        setattr_(self, "generic_attributes", _names("attribute", self.generic_attributes))

        if self.generic_attribute_prefixes is not None:
            prefixes = _strings("attribute prefixes", self.generic_attribute_prefixes)
            for prefix in prefixes:
                _name("attribute prefix", prefix)
            setattr_(self, "generic_attribute_prefixes", frozenset(p.lower() for p in prefixes))

        setattr_(
            self,
            "tag_attributes",
            MappingProxyType(
                {
                    _name("tag", tag): _names("attribute", attrs)
                    for tag, attrs in _mapping("tag_attributes", self.tag_attributes).items()
                }
            ),
        )
        setattr_(
            self,
            "tag_attribute_values",
            MappingProxyType(
                {
                    _name("tag", tag): MappingProxyType(
                        {
                            _name("attribute", attr): _strings("attribute values", values)
                            for attr, values in _mapping("tag_attribute_values", per_tag).items()
                        }
                    )
                    for tag, per_tag in _mapping("tag_attribute_values", self.tag_attribute_values).items()
                }
            ),
        )

        forced: dict[str, Mapping[str, str]] = {}
        for tag, per_tag in _mapping("set_tag_attribute_values", self.set_tag_attribute_values).items():
            values = {}
            for attr, value in _mapping("set_tag_attribute_values", per_tag).items():
                if not isinstance(value, str):
                    raise PolicyConflict(MALFORMED, f"forced value for {tag}[{attr}] must be a string, got {value!r}")
                values[_name("attribute", attr)] = value
            forced[_name("tag", tag)] = MappingProxyType(values)
        setattr_(self, "set_tag_attribute_values", MappingProxyType(forced))

        if isinstance(self.url_schemes, str) or not isinstance(self.url_schemes, Collection):
            raise PolicyConflict(MALFORMED, f"url_schemes must be a collection, got {self.url_schemes!r}")
        setattr_(self, "url_schemes", frozenset(_scheme(s) for s in self.url_schemes))

        if isinstance(self.url_relative, RewriteWithBase):
            if not isinstance(self.url_relative.base, str) or url_scheme(self.url_relative.base) is None:
                raise PolicyConflict(MALFORMED, f"relative URL base must be absolute: {self.url_relative.base!r}")
        elif not isinstance(self.url_relative, UrlRelative):
            raise PolicyConflict(MALFORMED, f"invalid url_relative: {self.url_relative!r}")

        setattr_(
            self,
            "allowed_classes",
            MappingProxyType(
                {
                    _name("tag", tag): _strings("class names", classes)
                    for tag, classes in _mapping("allowed_classes", self.allowed_classes).items()
                }
            ),
        )

        if not isinstance(self.strip_comments, bool):
            raise PolicyConflict(MALFORMED, f"strip_comments must be a bool, got {self.strip_comments!r}")
        _optional_string("link_rel", self.link_rel)
        _optional_string("id_prefix", self.id_prefix)
        if self.attribute_filter is not None and not callable(self.attribute_filter):
            raise PolicyConflict(MALFORMED, f"attribute_filter must be callable, got {self.attribute_filter!r}")

    def _check_conflicts(self) -> None:
        for tag in sorted(self.clean_content_tags):
            if tag in self.tags:
                raise PolicyConflict(CLEAN_CONTENT_OVERLAP, f"`{tag}` appears in clean_content_tags and in tags")
            for kind in ("tag_attributes", "tag_attribute_values", "set_tag_attribute_values"):
                if tag in getattr(self, kind):
                    raise PolicyConflict(CLEAN_CONTENT_OVERLAP, f"`{tag}` appears in clean_content_tags and in {kind}")

        for tag in sorted(self.allowed_classes):
            if self._grants(tag, "class"):
                raise PolicyConflict(
                    CLASS_AUTHORITY,
                    f"`class` is allowed as an attribute on `{tag}` and also filtered by allowed_classes",
                )

        if self.link_rel is not None:
            if self._grants("a", "rel"):
                raise PolicyConflict(
                    REL_AUTHORITY,
                    "`rel` is an allowed attribute while link_rel is set; set link_rel to None",
                )

    def _grants(self, tag: str, attr: str) -> bool:
        """Whether ``attr`` on ``tag`` passes as an ordinary attribute."""
        if attr in self.generic_attributes or attr in self.tag_attributes.get(tag, ()):
            return True
        if any(attr.startswith(prefix) for prefix in self.generic_attribute_prefixes or ()):
            return True
        return attr in self.tag_attribute_values.get(tag, ())

    def replace(self, **changes: Any) -> "Policy":
        """
        Build a new policy with some fields changed.

        :param changes: Field names and their new values.
        :returns: A newly validated policy; ``self`` is untouched.
        """
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Policy":
        """
        Build a policy from a raw JSON-style payload.

        :param raw: Mapping with camelCase keys (``cleanContentTags``,
            ``tagAttributes``...). Lists stand for sets, objects for maps,
            ``null`` for unset optional fields. Missing keys keep their
            defaults.
        :returns: A validated policy.
        :raises PolicyConflict: On unknown keys, wrong types or conflicts.
        """
        if not isinstance(raw, Mapping):
            raise PolicyConflict(MALFORMED, f"policy payload must be an object, got {type(raw).__name__}")
        unknown = sorted(set(raw) - set(RAW_KEYS))
        if unknown:
            raise PolicyConflict(MALFORMED, f"unknown policy keys: {', '.join(map(str, unknown))}")

        kwargs = {RAW_KEYS[key]: value for key, value in raw.items()}
        if "url_relative" in kwargs:
            kwargs["url_relative"] = _url_relative_from_raw(kwargs["url_relative"])
        log.debug("Building policy from payload keys: %s", sorted(raw))
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """
        :returns: The policy as a JSON-serializable payload accepted by
                  :meth:`from_dict`. ``attribute_filter`` is not included.
        """
        if isinstance(self.url_relative, RewriteWithBase):
            relative: Any = {"rewriteWithBase": self.url_relative.base}
        else:
            relative = self.url_relative.value
        return {
            "tags": sorted(self.tags),
            "cleanContentTags": sorted(self.clean_content_tags),
            "genericAttributes": sorted(self.generic_attributes),
            "genericAttributePrefixes": (
                None if self.generic_attribute_prefixes is None else sorted(self.generic_attribute_prefixes)
            ),
            "tagAttributes": {tag: sorted(attrs) for tag, attrs in sorted(self.tag_attributes.items())},
            "tagAttributeValues": {
                tag: {attr: sorted(values) for attr, values in sorted(per_tag.items())}
                for tag, per_tag in sorted(self.tag_attribute_values.items())
            },
            "setTagAttributeValues": {
                tag: dict(sorted(per_tag.items())) for tag, per_tag in sorted(self.set_tag_attribute_values.items())
            },
            "urlSchemes": sorted(self.url_schemes),
            "urlRelative": relative,
            "linkRel": self.link_rel,
            "allowedClasses": {tag: sorted(classes) for tag, classes in sorted(self.allowed_classes.items())},
            "stripComments": self.strip_comments,
            "idPrefix": self.id_prefix,
        }


def _url_relative_from_raw(value: Any) -> UrlRelative | RewriteWithBase:
    if isinstance(value, Mapping) and set(value) == {"rewriteWithBase"}:
        return RewriteWithBase(value["rewriteWithBase"])
    try:
        return UrlRelative(value)
    except ValueError:
        raise PolicyConflict(MALFORMED, f"invalid urlRelative: {value!r}") from None


DEFAULT_POLICY = Policy()
