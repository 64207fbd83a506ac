"""Tests for the stylescope CLI."""

from click.testing import CliRunner

from stylescope import __version__
from stylescope.cli.main import cli


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


class TestCliGroup:
    def test_help(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "rewrite CSS selectors" in result.output
        assert "scope" in result.output
        assert "check" in result.output
        assert "selector" in result.output

    def test_version(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


# ---------------------------------------------------------------------------
# scope command
# ---------------------------------------------------------------------------


class TestScopeCommand:
    def test_prints_scoped_css(self, tmp_path) -> None:
        css = tmp_path / "button.css"
        css.write_text(".btn { color: red; }", encoding="utf-8")
        runner = CliRunner()
        result = runner.invoke(cli, ["scope", str(css), "--scope", "sc_1"])
        assert result.exit_code == 0
        assert result.output == ".sc_1_btn { color: red; }"

    def test_custom_attribute(self, tmp_path) -> None:
        css = tmp_path / "p.css"
        css.write_text("p { a: b; }", encoding="utf-8")
        runner = CliRunner()
        result = runner.invoke(
            cli, ["scope", str(css), "--scope", "x", "--attribute", "data-v"]
        )
        assert result.exit_code == 0
        assert 'p[data-v="x"] { a: b; }' in result.output

    def test_writes_output_file(self, tmp_path) -> None:
        css = tmp_path / "in.css"
        out = tmp_path / "out.css"
        css.write_text("#hdr { a: b; }", encoding="utf-8")
        runner = CliRunner()
        result = runner.invoke(
            cli, ["scope", str(css), "--scope", "s", "-o", str(out)]
        )
        assert result.exit_code == 0
        assert out.read_text(encoding="utf-8") == "#s_hdr { a: b; }"

    def test_parse_error_exits_1(self, tmp_path) -> None:
        css = tmp_path / "bad.css"
        css.write_text(".a > { b: c; }", encoding="utf-8")
        runner = CliRunner()
        result = runner.invoke(cli, ["scope", str(css), "--scope", "s"])
        assert result.exit_code == 1
        assert "Parse error" in result.output

    def test_empty_scope_is_usage_error(self, tmp_path) -> None:
        css = tmp_path / "a.css"
        css.write_text(".a {}", encoding="utf-8")
        runner = CliRunner()
        result = runner.invoke(cli, ["scope", str(css), "--scope", ""])
        assert result.exit_code == 2

    def test_missing_scope_option(self, tmp_path) -> None:
        css = tmp_path / "a.css"
        css.write_text(".a {}", encoding="utf-8")
        runner = CliRunner()
        result = runner.invoke(cli, ["scope", str(css)])
        assert result.exit_code == 2

    def test_verbose_flag(self, tmp_path) -> None:
        css = tmp_path / "a.css"
        css.write_text("@keyframes k { from {} } .a {}", encoding="utf-8")
        runner = CliRunner()
        result = runner.invoke(cli, ["-v", "scope", str(css), "--scope", "s"])
        assert result.exit_code == 0
        assert ".s_a {}" in result.output


# ---------------------------------------------------------------------------
# selector command
# ---------------------------------------------------------------------------


class TestSelectorCommand:
    def test_scopes_selector(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["selector", "div > .a", "--scope", "s"])
        assert result.exit_code == 0
        assert result.output.strip() == 'div[data-scope="s"] > .s_a'

    def test_invalid_selector(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["selector", "#a#b", "--scope", "s"])
        assert result.exit_code == 1
        assert "more than one id" in result.output


# ---------------------------------------------------------------------------
# check command
# ---------------------------------------------------------------------------


class TestCheckCommand:
    def test_summary(self, tmp_path) -> None:
        css = tmp_path / "site.css"
        css.write_text(
            ".a, .b { x: y; }\n@media print { p { x: y; } }\n@keyframes k { from {} }\n",
            encoding="utf-8",
        )
        runner = CliRunner()
        result = runner.invoke(cli, ["check", str(css)])
        assert result.exit_code == 0
        assert "OK: site.css: 2 rule(s), 2 at-rule(s), 3 selector(s)" in result.output

    def test_nested_group_rules_counted(self, tmp_path) -> None:
        css = tmp_path / "nested.css"
        css.write_text(
            "@media screen { @supports (display: grid) { .a, .b {} } .c {} }\n",
            encoding="utf-8",
        )
        runner = CliRunner()
        result = runner.invoke(cli, ["check", str(css)])
        assert result.exit_code == 0
        assert "OK: nested.css: 2 rule(s), 2 at-rule(s), 3 selector(s)" in result.output

    def test_reports_location(self, tmp_path) -> None:
        css = tmp_path / "bad.css"
        css.write_text(".a {}\n.b, {}", encoding="utf-8")
        runner = CliRunner()
        result = runner.invoke(cli, ["check", str(css)])
        assert result.exit_code == 1
        assert "line 2" in result.output
