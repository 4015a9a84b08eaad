"""CLI smoke tests using typer's CliRunner."""

import json

from typer.testing import CliRunner

from lookup_engine import __version__
from lookup_engine.cli.app import app
from lookup_engine.cli.commands.inspect import format_kind, resolve_target
from lookup_engine.core.models import MemberAttributes

runner = CliRunner()


class TestInspectCommand:
    """Tests for the inspect command."""

    def test_inspect_table(self, isolated_config):
        result = runner.invoke(app, ["inspect", "json.decoder:JSONDecoder"])
        assert result.exit_code == 0

    def test_inspect_json(self, isolated_config):
        result = runner.invoke(app, ["--json", "inspect", "json.decoder:JSONDecoder"])
        assert result.exit_code == 0

        payload = json.loads(result.output)
        names = [member["name"] for member in payload["members"]]
        assert payload["type_name"] == "type"
        assert "decode" in names
        assert "raw_decode" in names

    def test_inspect_static(self, isolated_config):
        result = runner.invoke(
            app, ["--json", "inspect", "json.decoder:JSONDecoder", "--static"]
        )
        assert result.exit_code == 0

        payload = json.loads(result.output)
        assert payload["type_name"] == "JSONDecoder"
        assert payload["members"] == []

    def test_static_requires_class(self, isolated_config):
        result = runner.invoke(app, ["inspect", "json:dumps", "--static"])
        assert result.exit_code == 1
        assert "expects a class" in result.output

    def test_unresolvable_module(self, isolated_config):
        result = runner.invoke(app, ["inspect", "no_such_module_for_lookup"])
        assert result.exit_code == 1
        assert "Cannot resolve target" in result.output

    def test_unresolvable_attribute(self, isolated_config):
        result = runner.invoke(app, ["inspect", "json:no_such_attribute"])
        assert result.exit_code == 1
        assert "Cannot resolve target" in result.output

    def test_flag_overrides_config(self, isolated_config, monkeypatch):
        monkeypatch.setenv("LOOKUP_INCLUDE_UNSUPPORTED", "true")

        result = runner.invoke(
            app, ["--json", "inspect", "collections:OrderedDict", "--static", "--no-unsupported"]
        )
        assert result.exit_code == 0
        assert json.loads(result.output)["members"] == []


class TestInspectHelpers:
    """Tests for target resolution and kind labels."""

    def test_resolve_module(self):
        assert resolve_target("json").__name__ == "json"

    def test_resolve_attribute_path(self):
        from json.decoder import JSONDecoder

        assert resolve_target("json.decoder:JSONDecoder.decode") is JSONDecoder.decode

    def test_format_kind(self):
        assert format_kind(MemberAttributes.METHOD) == "method"
        assert format_kind(MemberAttributes.FIELD | MemberAttributes.STATIC) == "static field"
        assert (
            format_kind(MemberAttributes.PROPERTY | MemberAttributes.READ_ONLY)
            == "read-only property"
        )


class TestConfigCommand:
    """Tests for the config command."""

    def test_config_show(self, isolated_config):
        result = runner.invoke(app, ["config", "show"])
        assert result.exit_code == 0
        assert "Decomposition" in result.output
        assert "include_private_members" in result.output

    def test_config_show_json(self, isolated_config):
        result = runner.invoke(app, ["--json", "config", "show"])
        assert result.exit_code == 0
        assert json.loads(result.output)["include_root"] is False

    def test_config_set(self, isolated_config):
        result = runner.invoke(app, ["config", "set", "include_private_members", "true"])
        assert result.exit_code == 0
        assert json.loads(isolated_config.read_text())["include_private_members"] is True

    def test_config_set_invalid_key(self, isolated_config):
        result = runner.invoke(app, ["config", "set", "invalid_key", "true"])
        assert result.exit_code == 1
        assert "Unknown key" in result.output

    def test_config_set_invalid_bool(self, isolated_config):
        result = runner.invoke(app, ["config", "set", "include_root", "maybe"])
        assert result.exit_code == 1
        assert "Invalid boolean value" in result.output

    def test_config_set_missing_args(self, isolated_config):
        result = runner.invoke(app, ["config", "set"])
        assert result.exit_code == 1

    def test_config_reset(self, isolated_config):
        runner.invoke(app, ["config", "set", "include_root", "true"])
        result = runner.invoke(app, ["config", "reset"])

        assert result.exit_code == 0
        assert not isolated_config.exists()

    def test_config_unknown_action(self, isolated_config):
        result = runner.invoke(app, ["config", "unknown_action"])
        assert result.exit_code == 1
        assert "Unknown action" in result.output


class TestVersionFlag:
    """Test the --version flag."""

    def test_version_output(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"lookup-engine {__version__}" in result.output
