from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from cleanhtml import DEFAULT_POLICY, Sanitizer, clean
from tests.conftest import data_path, read_text


def case_pairs() -> list[tuple[Path, Path]]:
    """
    :return: List of (html_path, expected_html_path) pairs
    """
    root = data_path()
    return [
        (root / "post.html", root / "post.expected.html"),
        (root / "widgets.html", root / "widgets.expected.html"),
    ]


@pytest.mark.parametrize(("html_path", "expected_path"), case_pairs())
def test_clean_matches_golden(html_path: Path, expected_path: Path) -> None:
    """
    :param html_path: HTML input path
    :param expected_path: Expected sanitized HTML path
    """
    html = read_text(html_path).strip()
    expected = read_text(expected_path).strip()
    assert clean(html) == expected


def test_empty_input() -> None:
    assert clean("") == ""


def test_non_text_input_is_empty() -> None:
    assert clean(None) == ""  # type: ignore[arg-type]


def test_bytes_are_decoded() -> None:
    assert clean("<b>café</b>".encode("utf-8")) == "<b>café</b>"


def test_script_removed_with_content() -> None:
    assert clean("XSS<script>attack</script>") == "XSS"


def test_default_policy_keeps_paragraph() -> None:
    assert Sanitizer().clean("XSS<script>attack</script><p>foo</p>") == "XSS<p>foo</p>"


def test_disallowed_paragraph_is_unwrapped(make_sanitizer) -> None:
    sanitizer = make_sanitizer(tags=DEFAULT_POLICY.tags - {"p"})
    assert sanitizer.clean("XSS<script>attack</script><p>foo</p>") == "XSSfoo"


def test_style_removed_even_at_start() -> None:
    assert clean("<style>body { color: red }</style>text") == "text"


def test_title_is_unwrapped_in_flow_content() -> None:
    assert clean("<title>t</title>x") == "tx"


def test_doctype_is_dropped() -> None:
    assert clean("<!DOCTYPE html>x") == "x"


def test_javascript_href_dropped() -> None:
    assert clean('<a href="javascript:alert(1)">x</a>') == "<a>x</a>"


def test_https_href_kept_with_rel() -> None:
    assert clean('<a href="https://e.org">x</a>') == '<a href="https://e.org" rel="noopener noreferrer">x</a>'


@pytest.mark.parametrize(
    "href",
    [
        "  JaVaScRiPt:alert(1)",
        "java&#x09;script:alert(1)",
        "java&#x0A;script:alert(1)",
        "&#x01;javascript:alert(1)",
        "vbscript:msgbox(1)",
        "data:text/html;base64,PHNjcmlwdD5hbGVydCgxKTwvc2NyaXB0Pg==",
    ],
)
def test_obfuscated_schemes_dropped(href: str) -> None:
    """
    :param href: Raw attribute source, entities undecoded
    """
    assert clean(f'<a href="{href}">x</a>') == "<a>x</a>"


def test_relative_href_kept_and_escaped() -> None:
    assert clean('<a href="/search?q=1&amp;p=2">x</a>') == (
        '<a href="/search?q=1&amp;p=2" rel="noopener noreferrer">x</a>'
    )


def test_event_handlers_dropped() -> None:
    assert clean('<p onclick="x()" title="t">a</p>') == '<p title="t">a</p>'


def test_image_attributes() -> None:
    assert clean('<img src="x.png" alt="a" onerror="x()">') == '<img src="x.png" alt="a">'


def test_text_is_escaped() -> None:
    assert clean("1 &lt; 2 &amp;&amp; 3 &gt; 2") == "1 &lt; 2 &amp;&amp; 3 &gt; 2"


def test_attribute_quotes() -> None:
    assert clean("<p title='a\"b'>x</p>") == "<p title='a\"b'>x</p>"
    assert clean('<p title="a&quot;b\'c">x</p>') == '<p title="a&quot;b\'c">x</p>'


def test_void_elements() -> None:
    assert clean("a<br/>b<hr>") == "a<br>b<hr>"


def test_comments_stripped_by_default() -> None:
    assert clean("a<!-- c -->b") == "ab"


def test_comments_kept_when_asked(make_sanitizer) -> None:
    assert make_sanitizer(strip_comments=False).clean("a<!-- c -->b") == "a<!-- c -->b"


def test_leading_newline_in_pre_survives() -> None:
    assert clean("<pre>\n\nx</pre>") == "<pre>\n\nx</pre>"


IDEMPOTENCE_CASES = [
    "XSS<script>attack</script><p>foo</p>",
    '<a href="https://e.org" rel="author">x</a>',
    "<pre>\n\n\nx</pre>",
    "<table><td>a<p>b</table>c",
    "<p>unclosed <b>bold <i>both</p> tail",
    "<svg><p>breakout</p></svg>",
    "<math><mi><b>x</b></mi><style><img src=x onerror=alert(1)></style></math>",
    "<noscript><p title=\"</noscript><img src=x onerror=alert(1)>\"></noscript>",
    "<a href=\"/a?b=1&c=2\" title='\"'>q</a>",
    "é‮<b>\U0001f600</b>\x00",
    "<table><tfoot><tr><td>x</td></tr></tfoot></table>",
    "<p><button><p>x</p></button></p>",
    "<a href=\"/a\"><object><a href=\"/b\">y</a></object></a>",
]


@pytest.mark.parametrize(
    ("html", "expected"),
    [
        (
            "<table><tfoot><tr><td>x</td></tr></tfoot></table>",
            "<table><tbody><tr><td>x</td></tr></tbody></table>",
        ),
        ("<p><button><p>x</p></button></p>", "<p></p><p>x</p><p></p>"),
        (
            '<a href="/a"><object><a href="/b">y</a></object></a>',
            '<a href="/a" rel="noopener noreferrer"></a><a href="/b" rel="noopener noreferrer">y</a>',
        ),
    ],
)
def test_unwrapping_settles_into_parser_shape(html: str, expected: str) -> None:
    """
    :param html: Input whose unwrapped element held structure in place
    :param expected: Output that re-parses to itself
    """
    assert clean(html) == expected


@pytest.mark.parametrize("html", IDEMPOTENCE_CASES)
def test_clean_is_idempotent(html: str) -> None:
    """
    :param html: Adversarial or malformed input
    """
    once = clean(html)
    assert clean(once) == once


@pytest.mark.parametrize("html", IDEMPOTENCE_CASES)
def test_no_active_content_survives(html: str) -> None:
    """
    :param html: Adversarial or malformed input
    """
    out = clean(html).lower()
    assert "<script" not in out
    assert "onerror=" not in out or "&lt;img" in out
    assert "<img src=x" not in out


def test_sanitizer_is_shareable_between_threads() -> None:
    sanitizer = Sanitizer()
    inputs = [f'<p id="{i}">{i}<script>{i}</script></p>' for i in range(200)]
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(sanitizer.clean, inputs))
    assert results == [f"<p>{i}</p>" for i in range(200)]
