"""Unit tests for the markturn command line entry point."""

import io
from pathlib import Path

import pytest

from markturn.cli import main
from markturn.constants import EXIT_FILE_ERROR, EXIT_SUCCESS, EXIT_VALIDATION_ERROR


@pytest.fixture
def html_file(isolated_cwd: Path) -> Path:
    path = isolated_cwd / "page.html"
    path.write_text("<h1>Title</h1><p>Some <em>text</em>.</p>", encoding="utf-8")
    return path


@pytest.mark.unit
@pytest.mark.cli
class TestMain:
    """Test main() input, output and exit codes."""

    def test_file_to_stdout(self, clean_env, html_file, capsys):
        assert main([str(html_file)]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "# Title\n\nSome *text*.\n"

    def test_stdin(self, clean_env, isolated_cwd, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("<ul><li>one</li><li>two</li></ul>"))
        assert main([]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "- one\n- two\n"

    def test_dash_reads_stdin(self, clean_env, isolated_cwd, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("<p>dash</p>"))
        assert main(["-"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "dash\n"

    def test_output_file(self, clean_env, html_file, capsys):
        out = html_file.parent / "page.md"
        assert main([str(html_file), "-o", str(out)]) == EXIT_SUCCESS
        assert out.read_text(encoding="utf-8") == "# Title\n\nSome *text*.\n"
        assert capsys.readouterr().out == ""

    def test_options_from_flags(self, clean_env, html_file, capsys):
        assert main([str(html_file), "--heading-style", "setext", "--em-delimiter", "_"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "Title\n=====\n\nSome _text_.\n"

    def test_options_from_environment(self, clean_env, html_file, monkeypatch, capsys):
        monkeypatch.setenv("MARKTURN_HEADING_STYLE", "setext")
        assert main([str(html_file)]) == EXIT_SUCCESS
        assert capsys.readouterr().out.startswith("Title\n=====\n")

    def test_options_from_config(self, clean_env, html_file, capsys):
        (html_file.parent / ".markturn.yaml").write_text("em-delimiter: _\n", encoding="utf-8")
        assert main([str(html_file)]) == EXIT_SUCCESS
        assert capsys.readouterr().out.endswith("Some _text_.\n")

    def test_options_from_pyproject(self, clean_env, html_file, capsys):
        (html_file.parent / "pyproject.toml").write_text(
            '[tool.markturn]\nheading_style = "setext"\n', encoding="utf-8"
        )
        assert main([str(html_file)]) == EXIT_SUCCESS
        assert capsys.readouterr().out.startswith("Title\n=====\n")

    def test_missing_input(self, clean_env, isolated_cwd, capsys):
        assert main(["missing.html"]) == EXIT_FILE_ERROR
        assert "Input file not found: missing.html" in capsys.readouterr().err

    def test_invalid_environment_choice(self, clean_env, html_file, monkeypatch, capsys):
        monkeypatch.setenv("MARKTURN_HEADING_STYLE", "underline")
        assert main([str(html_file)]) == EXIT_VALIDATION_ERROR
        assert "heading_style" in capsys.readouterr().err

    def test_bad_config_file(self, clean_env, html_file, capsys):
        config = html_file.parent / "broken.toml"
        config.write_text("heading_style = ", encoding="utf-8")
        assert main([str(html_file), "--config", str(config)]) == EXIT_VALIDATION_ERROR
        assert "Invalid TOML" in capsys.readouterr().err

    def test_unwritable_output(self, clean_env, html_file, capsys):
        out = html_file.parent / "no-such-dir" / "page.md"
        assert main([str(html_file), "-o", str(out)]) == EXIT_FILE_ERROR
        assert "Could not write output" in capsys.readouterr().err

    def test_version(self, clean_env, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert "markturn" in capsys.readouterr().out

    def test_verbose_enables_debug_logging(self, clean_env, html_file, capsys):
        assert main([str(html_file), "--verbose"]) == EXIT_SUCCESS
        assert "DEBUG:" in capsys.readouterr().err
