"""Tests for the safedown command-line tool."""

import io
from unittest.mock import patch

from safedown.__main__ import main


class TestMain:
    """Test the command-line entry point."""

    def test_file_to_stdout(self, tmp_path, capsys):
        """Test converting a file and printing the result."""
        source = tmp_path / "comment.txt"
        source.write_text("Hello *world*\n\n* one\n", encoding="utf-8")

        assert main([str(source)]) == 0
        captured = capsys.readouterr()
        assert captured.out == "<p>Hello <em>world</em></p><ul><li><p>one</p></li></ul>\n"
        assert captured.err == ""

    def test_stdin(self, capsys):
        """Test converting standard input."""
        with patch("sys.stdin", io.StringIO("a < b")):
            assert main(["-"]) == 0

        assert capsys.readouterr().out == "<p>a &lt; b</p>\n"

    def test_stdin_is_the_default(self, capsys):
        """Test that standard input is used when no file is given."""
        with patch("sys.stdin", io.StringIO("> quoted")):
            assert main([]) == 0

        assert capsys.readouterr().out == "<blockquote><p>quoted</p></blockquote>\n"

    def test_output_file(self, tmp_path, capsys):
        """Test writing the result to a file."""
        source = tmp_path / "in.txt"
        source.write_text("text", encoding="utf-8")
        output = tmp_path / "out.html"

        assert main([str(source), "-o", str(output)]) == 0
        assert output.read_text(encoding="utf-8") == "<p>text</p>\n"
        assert capsys.readouterr().out == ""

    def test_links_are_mangled_by_default(self, capsys):
        """Test that links are inert without a link option."""
        with patch("sys.stdin", io.StringIO("[a](http://a.com) http://b.com")):
            assert main([]) == 0

        assert capsys.readouterr().out == "<p>a hxxp //b.com</p>\n"

    def test_allow_links(self, capsys):
        """Test that --allow-links renders anchors."""
        with patch("sys.stdin", io.StringIO("[a](http://a.com)")):
            assert main(["--allow-links"]) == 0

        assert capsys.readouterr().out == '<p><a href="http://a.com">a</a></p>\n'

    def test_allow_scheme(self, capsys):
        """Test that --allow-scheme only allows the named schemes."""
        with patch("sys.stdin", io.StringIO("[a](https://a.com) [b](http://b.com)")):
            assert main(["--allow-scheme", "https"]) == 0

        assert capsys.readouterr().out == '<p><a href="https://a.com">a</a> b</p>\n'

    def test_max_depth(self, capsys):
        """Test that --max-depth limits nesting."""
        with patch("sys.stdin", io.StringIO("> > a")):
            assert main(["--max-depth", "1"]) == 0

        assert capsys.readouterr().out == "<blockquote><p>&gt; a</p></blockquote>\n"

    def test_verbose(self, capsys):
        """Test that --verbose turns on debug logging."""
        with patch("sys.stdin", io.StringIO("text")), patch("logging.basicConfig") as mock_basic_config:
            assert main(["-v"]) == 0

        mock_basic_config.assert_called_once()
        assert capsys.readouterr().out == "<p>text</p>\n"

    def test_missing_file(self, tmp_path, capsys):
        """Test that a missing input file is reported."""
        assert main([str(tmp_path / "missing.txt")]) == 1
        assert "File not found" in capsys.readouterr().err

    def test_unreadable_input(self, tmp_path, capsys):
        """Test that an input path that can't be read is reported."""
        assert main([str(tmp_path)]) == 1
        assert "Error: Cannot read" in capsys.readouterr().err

    def test_unwritable_output(self, tmp_path, capsys):
        """Test that an output path that can't be written is reported."""
        with patch("sys.stdin", io.StringIO("text")):
            assert main(["-o", str(tmp_path)]) == 1

        assert "Error: Cannot write" in capsys.readouterr().err

    def test_conflicting_link_options(self, capsys):
        """Test that --allow-links and --allow-scheme can't be combined."""
        assert main(["--allow-links", "--allow-scheme", "https"]) == 1
        assert "Cannot use both" in capsys.readouterr().err

    def test_invalid_max_depth(self, capsys):
        """Test that an unusable nesting depth is reported."""
        with patch("sys.stdin", io.StringIO("text")):
            assert main(["--max-depth", "0"]) == 1

        assert "max_nesting_depth must be at least 1" in capsys.readouterr().err
