import pytest

from word_crawler.components.html_parser import PageParser, ParseConfig
from word_crawler.errors import ParseError


PAGE = """<!DOCTYPE html>
<html>
<head><title>Title text</title><style>p { color: red }</style></head>
<body>
  <h1>Heading</h1>
  <!-- hidden comment -->
  <script>var hidden = "script";</script>
  <noscript>enable javascript</noscript>
  <div>Outer <span>inner</span></div>
  <a href="/first">First</a>
  <a name="anchor-without-href">Nothing</a>
  <a href="https://other.org/second">Second</a>
</body>
</html>
"""


def visible_words(page):
    return " ".join(page.text_fragments()).split()


def test_text_fragments_exclude_hidden_content():
    page = PageParser().parse(PAGE)
    words = visible_words(page)

    assert words == ["Heading", "Outer", "inner", "First", "Nothing", "Second"]


def test_text_fragments_is_lazy():
    fragments = PageParser().parse(PAGE).text_fragments()
    assert iter(fragments) is fragments


def test_hrefs_in_document_order():
    page = PageParser().parse(PAGE)
    assert page.hrefs() == ["/first", "https://other.org/second"]


def test_document_without_body():
    page = PageParser().parse("plain text with <a href='x'>a link</a>")

    assert visible_words(page) == ["plain", "text", "with", "a", "link"]
    assert page.hrefs() == ["x"]


def test_head_text_skipped_without_body_tag():
    page = PageParser().parse("<html><head><title>Hidden Title</title></head><p>hi</p></html>")
    assert list(page.text_fragments()) == ["hi"]

    page = PageParser().parse("<title>Bare title</title><p>shown</p>")
    assert visible_words(page) == ["shown"]


def test_custom_excluded_tags():
    parser = PageParser(ParseConfig(excluded_tags=["nav"]))
    page = parser.parse("<body><nav>menu</nav><p>content</p></body>")

    assert visible_words(page) == ["content"]


def test_unknown_parser_raises_parse_error():
    parser = PageParser(ParseConfig(parser="no-such-parser"))
    with pytest.raises(ParseError):
        parser.parse("<p>text</p>")
