"""Tests for the streaming token reader."""

import pytest

from ob_blog.markup.errors import MalformedDocument
from ob_blog.markup.reader import TokenReader
from ob_blog.markup.tokens import (
    CData,
    Comment,
    Declaration,
    ElementClose,
    ElementOpen,
    EndOfInput,
    Text,
)


def test_reader_yields_tokens_in_order():
    tokens = list(TokenReader("<ul><!-- OB --><li id='a'>x</li></ul>"))

    assert [type(t) for t in tokens] == [
        ElementOpen,
        Comment,
        ElementOpen,
        Text,
        ElementClose,
        ElementClose,
        EndOfInput,
    ]
    assert tokens[1].content == " OB "
    assert tokens[2].attributes == (("id", "a"),)
    assert tokens[3].raw == "x"


def test_reader_raw_text_reproduces_document():
    source = (
        '<?xml version="1.0"?>\n<rss version="2.0"><channel>\n'
        "<item id='1'><description><![CDATA[<p>a & b</p>]]>\n</description></item>\n"
        "</channel></rss>\n"
    )

    assert "".join(t.raw for t in TokenReader(source)) == source


def test_reader_parses_attribute_quoting_styles():
    (token, _end) = list(TokenReader("<a href=\"/x\" data-id='42' hidden rel=me>"))

    assert token.attributes == (("href", "/x"), ("data-id", "42"), ("hidden", ""), ("rel", "me"))
    assert token.has_value("42")
    assert not token.self_closing


def test_reader_flags_self_closing_and_void_elements():
    tokens = list(TokenReader('<br/><img src="a.png"><meta charset="utf-8"><p>'))

    assert [t.self_closing for t in tokens[:4]] == [True, True, True, False]


def test_reader_cdata_and_declarations():
    tokens = list(TokenReader("<!DOCTYPE html><![CDATA[<b>x</b>]]>"))

    assert isinstance(tokens[0], Declaration)
    assert tokens[0].raw == "<!DOCTYPE html>"
    assert isinstance(tokens[1], CData)
    assert tokens[1].content == "<b>x</b>"


def test_reader_reads_script_body_as_text():
    tokens = list(TokenReader("<script>if (a < b) { x(); }</script>"))

    assert isinstance(tokens[1], Text)
    assert tokens[1].raw == "if (a < b) { x(); }"
    assert isinstance(tokens[2], ElementClose)


def test_reader_is_not_restartable():
    reader = TokenReader("<p>x</p>")
    first = list(reader)

    assert isinstance(first[-1], EndOfInput)
    assert list(reader) == []


def test_reader_reports_byte_offsets():
    tokens = list(TokenReader("é<b>"))

    # "é" is two bytes in UTF-8
    assert tokens[1].offset == 2


def test_reader_rejects_unterminated_comment():
    with pytest.raises(MalformedDocument) as excinfo:
        list(TokenReader("<p>ok</p><!-- never closed"))

    assert excinfo.value.offset == len("<p>ok</p>")


def test_reader_rejects_stray_angle_bracket():
    with pytest.raises(MalformedDocument) as excinfo:
        list(TokenReader("<p>1 < 2</p>"))

    assert excinfo.value.offset == len("<p>1 ")
