"""
SPDX-License-Identifier: LicenseRef-NonCommercial-Only
© 2025 github.com/defmon3 — Non-commercial use only. Commercial use requires permission.

text.py – plain-text escaping.
"""

_ESCAPES = str.maketrans(
    {
        "<": "&lt;",  # starts a tag
        ">": "&gt;",  # ends an unquoted attribute
        '"': "&quot;",
        "'": "&apos;",
        "`": "&grave;",
        "/": "&#47;",  # ends an unquoted attribute, closes tags
        "&": "&amp;",  # starts a character reference
        "=": "&#61;",
        " ": "&#32;",
        "\t": "&#9;",
        "\n": "&#10;",
        "\x0c": "&#12;",
        "\r": "&#13;",
        "\x00": "&#65533;",
    }
)


def clean_text(text: str) -> str:
    """
    Turn an arbitrary string into inert HTML text.

    Every character with a meaning to the HTML parser is replaced by a
    character reference; nothing is parsed. The result is safe as element
    content and as a quoted attribute value such as ``title``.

    It is not safe inside ``<script>`` or ``<style>``, nor for attribute
    microsyntaxes like ``class`` or ``id``. ``<textarea>`` still drops a
    leading newline even when it is encoded.

    :param text: Any string.
    :returns: The escaped string.
    """
    return text.translate(_ESCAPES)
