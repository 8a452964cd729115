"""Unit tests for the dynamic parser and option resolution."""

import argparse
from dataclasses import fields

import pytest

from markturn import __version__
from markturn.cli import build_options
from markturn.cli.actions import TrackingStoreAction, TrackingStoreFalseAction, TrackingStoreTrueAction
from markturn.cli.builder import DynamicCLIBuilder, create_parser
from markturn.options import MarkdownOptions


def parse(argv):
    builder = DynamicCLIBuilder()
    parser = builder.build_parser()
    return builder, parser.parse_args(argv)


@pytest.mark.unit
@pytest.mark.cli
class TestDynamicCLIBuilder:
    """Test parser generation from option metadata."""

    def test_snake_to_kebab(self):
        assert DynamicCLIBuilder.snake_to_kebab("link_reference_style") == "link-reference-style"

    def test_infer_cli_name(self):
        builder = DynamicCLIBuilder()
        assert builder.infer_cli_name("heading_style") == "--heading-style"
        assert builder.infer_cli_name("escape_special", is_boolean_with_true_default=True) == "--no-escape-special"

    def test_option_actions(self, clean_env):
        builder, _ = parse([])
        actions = builder.option_actions
        assert isinstance(actions["heading_style"], TrackingStoreAction)
        assert isinstance(actions["preformatted_code"], TrackingStoreTrueAction)
        assert isinstance(actions["escape_special"], TrackingStoreFalseAction)
        assert actions["escape_special"].option_strings == ["--no-escape-special"]
        assert actions["list_marker_space_count"].type is int
        assert "rules" not in actions
        assert "keep_replacement" not in actions

    def test_every_visible_field_has_a_flag(self, clean_env):
        builder, _ = parse([])
        visible = {f.name for f in fields(MarkdownOptions) if not f.metadata.get("exclude_from_cli", False)}
        assert set(builder.option_actions) == visible

    def test_defaults_match_options(self, clean_env):
        _, args = parse([])
        defaults = MarkdownOptions()
        assert args.heading_style == defaults.heading_style
        assert args.fence == defaults.fence
        assert args.escape_special is True
        assert args.input is None
        assert args.log_level == "WARNING"

    def test_choices_enforced(self, clean_env, capsys):
        with pytest.raises(SystemExit) as exc_info:
            parse(["--heading-style", "underline"])
        assert exc_info.value.code == 2
        assert "invalid choice" in capsys.readouterr().err

    def test_int_type_enforced(self, clean_env):
        with pytest.raises(SystemExit):
            parse(["--list-marker-space-count", "two"])

    def test_log_level_case_insensitive(self, clean_env):
        _, args = parse(["--log-level", "debug"])
        assert args.log_level == "DEBUG"

    def test_version(self, clean_env, capsys):
        with pytest.raises(SystemExit) as exc_info:
            create_parser().parse_args(["--version"])
        assert exc_info.value.code == 0
        assert capsys.readouterr().out.strip() == f"markturn {__version__}"


@pytest.mark.unit
@pytest.mark.cli
class TestBuildOptions:
    """Test precedence between flags, environment and configuration files."""

    def test_defaults(self, clean_env, isolated_cwd):
        builder, args = parse([])
        assert build_options(args, builder.option_actions) == MarkdownOptions()

    def test_flags(self, clean_env, isolated_cwd):
        builder, args = parse(["--heading-style", "setext", "--no-escape-special", "--list-marker-space-count", "2"])
        options = build_options(args, builder.option_actions)
        assert options.heading_style == "setext"
        assert options.escape_special is False
        assert options.list_marker_space_count == 2

    def test_discovered_config(self, clean_env, isolated_cwd):
        (isolated_cwd / ".markturn.toml").write_text('heading-style = "setext"\nhr = "***"\n', encoding="utf-8")
        builder, args = parse([])
        options = build_options(args, builder.option_actions)
        assert options.heading_style == "setext"
        assert options.hr == "***"

    def test_no_config_skips_discovery(self, clean_env, isolated_cwd):
        (isolated_cwd / ".markturn.toml").write_text('heading_style = "setext"\n', encoding="utf-8")
        builder, args = parse(["--no-config"])
        assert build_options(args, builder.option_actions).heading_style == "atx"

    def test_config_env_var(self, clean_env, isolated_cwd, monkeypatch):
        config = isolated_cwd / "custom.json"
        config.write_text('{"bullet_list_marker": "+"}', encoding="utf-8")
        monkeypatch.setenv("MARKTURN_CONFIG", str(config))
        builder, args = parse([])
        assert build_options(args, builder.option_actions).bullet_list_marker == "+"

    def test_environment_beats_config(self, clean_env, isolated_cwd, monkeypatch):
        (isolated_cwd / ".markturn.toml").write_text('heading_style = "atx"\nhr = "***"\n', encoding="utf-8")
        monkeypatch.setenv("MARKTURN_HEADING_STYLE", "setext")
        builder, args = parse([])
        options = build_options(args, builder.option_actions)
        assert options.heading_style == "setext"
        assert options.hr == "***"

    def test_flag_beats_environment_and_config(self, clean_env, isolated_cwd, monkeypatch):
        config = isolated_cwd / "options.yaml"
        config.write_text("em_delimiter: '*'\n", encoding="utf-8")
        monkeypatch.setenv("MARKTURN_EM_DELIMITER", "*")
        builder, args = parse(["--config", str(config), "--em-delimiter", "_"])
        assert build_options(args, builder.option_actions).em_delimiter == "_"

    def test_false_flag_from_environment(self, clean_env, isolated_cwd, monkeypatch):
        monkeypatch.setenv("MARKTURN_ESCAPE_SPECIAL", "false")
        builder, args = parse([])
        assert build_options(args, builder.option_actions).escape_special is False

    def test_invalid_config_value(self, clean_env, isolated_cwd):
        (isolated_cwd / ".markturn.toml").write_text('heading_style = "underline"\n', encoding="utf-8")
        builder, args = parse([])
        with pytest.raises(ValueError, match="heading_style"):
            build_options(args, builder.option_actions)

    def test_missing_explicit_config(self, clean_env, isolated_cwd):
        builder, args = parse(["--config", "missing.toml"])
        with pytest.raises(argparse.ArgumentTypeError):
            build_options(args, builder.option_actions)
