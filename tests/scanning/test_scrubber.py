"""Tests for comment and string scrubbing."""

from archmap.scanning.dialects import PHP
from archmap.scanning.scrubber import scrub


class TestCommentRemoval:
    """Comments of every style disappear, their line breaks stay."""

    def test_line_comments(self):
        text = "$a = 1; // if ($x) {}\n$b = 2; # while ($y) {}\n"
        result = scrub(text, PHP)
        assert "if" not in result
        assert "while" not in result
        assert result == "$a = 1; \n$b = 2; \n"

    def test_block_comment_keeps_line_count(self):
        text = "<?php\n/**\n * class Hidden\n * use Foo\\Bar;\n */\nclass Visible {}\n"
        result = scrub(text, PHP)
        assert "Hidden" not in result
        assert "Foo" not in result
        assert result.count("\n") == text.count("\n")
        assert result.splitlines()[5] == "class Visible {}"

    def test_unterminated_block_comment_runs_to_end(self):
        text = "class A {}\n/* class B {}\nclass C {}\n"
        result = scrub(text, PHP)
        assert "class A" in result
        assert "class B" not in result
        assert "class C" not in result
        assert result.count("\n") == 3


class TestLineEndings:
    """Line count survives any line-ending convention."""

    def test_carriage_return_only_comment(self):
        text = "<?php\r/* a\rb\rc */\rclass A {}\r"
        result = scrub(text, PHP)
        assert result == "<?php\r\r\r\rclass A {}\r"
        assert len(result.splitlines()) == len(text.splitlines())

    def test_crlf_string(self):
        text = "$s = 'a\r\nb';\r\nclass A {}\r\n"
        result = scrub(text, PHP)
        assert result == "$s = ''\r\n;\r\nclass A {}\r\n"
        assert len(result.splitlines()) == len(text.splitlines())

    def test_crlf_line_comment_keeps_break(self):
        text = "// note\r\nclass A {}\r\n"
        assert scrub(text, PHP) == "\r\nclass A {}\r\n"


class TestStringRemoval:
    """String bodies are replaced by an empty pair of the opening quote."""

    def test_single_and_double_quotes(self):
        result = scrub("$a = 'if ($x)'; $b = \"foreach ($y)\";", PHP)
        assert result == "$a = ''; $b = \"\";"

    def test_escaped_quote_inside_string(self):
        result = scrub(r"$a = 'it\'s ? here'; $b = 1;", PHP)
        assert result == "$a = ''; $b = 1;"

    def test_multiline_string_keeps_line_count(self):
        text = "$sql = \"SELECT *\nFROM t\nWHERE a = ?\";\n$x = 1;\n"
        result = scrub(text, PHP)
        assert "?" not in result
        assert result.count("\n") == text.count("\n")

    def test_comment_marker_inside_string_is_string(self):
        result = scrub("$url = 'http://example.com'; $n = 2;", PHP)
        assert result == "$url = ''; $n = 2;"

    def test_quote_inside_comment_is_comment(self):
        result = scrub("// don't\n$a = 'b';\n", PHP)
        assert result == "\n$a = '';\n"

    def test_unterminated_string_left_alone(self):
        text = "$a = 'open\n"
        assert scrub(text, PHP) == text
