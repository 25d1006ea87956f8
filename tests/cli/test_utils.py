"""Tests for CLI utility functions."""

import io

from chromedriver_installer.cli.utils import print_error, safe_print


class TestPrintError:
    def test_message(self, capsys):
        """Test error goes to stderr with prefix."""
        print_error("Something failed")

        captured = capsys.readouterr()
        assert captured.err == "ERROR: Something failed\n"
        assert captured.out == ""

    def test_details(self, capsys):
        """Test details are printed indented on the next line."""
        print_error("Something failed", "more context")

        assert capsys.readouterr().err == "ERROR: Something failed\n  more context\n"


class _AsciiStream(io.StringIO):
    encoding = "ascii"

    def write(self, s):
        s.encode("ascii")
        return super().write(s)


class TestSafePrint:
    def test_plain(self, capsys):
        """Test regular message goes to stdout."""
        safe_print("ChromeDriver 2.41 installed")

        assert capsys.readouterr().out == "ChromeDriver 2.41 installed\n"

    def test_unencodable_characters_replaced(self):
        """Test characters the stream cannot encode are replaced."""
        stream = _AsciiStream()

        safe_print("installed ✓", file=stream)

        assert stream.getvalue() == "installed ?\n"
