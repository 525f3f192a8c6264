"""
SPDX-License-Identifier: LicenseRef-NonCommercial-Only
© 2025 github.com/defmon3 — Non-commercial use only. Commercial use requires permission.

defaults.py – default allow-lists.

These tables pin the security posture of ammonia 3.1.2. Downstream users
audit against them, so they are copied as published and must not be widened
or narrowed here.
"""

DEFAULT_TAGS = frozenset(
    {
        "a", "abbr", "acronym", "area", "article", "aside", "b", "bdi",
        "bdo", "blockquote", "br", "caption", "center", "cite", "code",
        "col", "colgroup", "data", "dd", "del", "details", "dfn", "div",
        "dl", "dt", "em", "figcaption", "figure", "footer", "h1", "h2",
        "h3", "h4", "h5", "h6", "header", "hgroup", "hr", "i", "img",
        "ins", "kbd", "li", "map", "mark", "nav", "ol", "p", "pre",
        "q", "rp", "rt", "rtc", "ruby", "s", "samp", "small", "span",
        "strike", "strong", "sub", "summary", "sup", "table", "tbody",
        "td", "th", "thead", "time", "tr", "tt", "u", "ul", "var", "wbr",
    }
)  # fmt: skip

DEFAULT_CLEAN_CONTENT_TAGS = frozenset({"script", "style"})

DEFAULT_GENERIC_ATTRIBUTES = frozenset({"lang", "title"})

DEFAULT_TAG_ATTRIBUTES = {
    "a": frozenset({"href", "hreflang"}),
    "bdo": frozenset({"dir"}),
    "blockquote": frozenset({"cite"}),
    "col": frozenset({"align", "char", "charoff", "span"}),
    "colgroup": frozenset({"align", "char", "charoff", "span"}),
    "del": frozenset({"cite", "datetime"}),
    "hr": frozenset({"align", "size", "width"}),
    "img": frozenset({"align", "alt", "height", "src", "width"}),
    "ins": frozenset({"cite", "datetime"}),
    "ol": frozenset({"start"}),
    "q": frozenset({"cite"}),
    "table": frozenset({"align", "char", "charoff", "summary"}),
    "tbody": frozenset({"align", "char", "charoff"}),
    "td": frozenset({"align", "char", "charoff", "colspan", "headers", "rowspan"}),
    "tfoot": frozenset({"align", "char", "charoff"}),
    "th": frozenset({"align", "char", "charoff", "colspan", "headers", "rowspan", "scope"}),
    "thead": frozenset({"align", "char", "charoff"}),
    "tr": frozenset({"align", "char", "charoff"}),
}

DEFAULT_URL_SCHEMES = frozenset(
    {
        "bitcoin", "ftp", "ftps", "geo", "http", "https", "im", "irc", "ircs",
        "magnet", "mailto", "mms", "mx", "news", "nntp", "openpgp4fpr", "sip",
        "sms", "smsto", "ssh", "tel", "url", "webcal", "wtai", "xmpp",
    }
)  # fmt: skip

DEFAULT_LINK_REL = "noopener noreferrer"

DEFAULT_STRIP_COMMENTS = True
