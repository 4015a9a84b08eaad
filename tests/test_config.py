"""Tests for EngineConfig loading and option building."""

import json

import pytest

from lookup_engine.config import (
    DecomposeOptions,
    EngineConfig,
    configure,
    get_config,
    parse_bool,
    reset_config,
)
from lookup_engine.core.descriptors import Descriptor, default_type_resolver
from lookup_engine.core.formatter import ReflectionFormatter


class TestParseBool:
    """Tests for parse_bool()."""

    @pytest.mark.parametrize("value", ["1", "true", "TRUE", " yes ", "on"])
    def test_true_values(self, value):
        assert parse_bool(value) is True

    @pytest.mark.parametrize("value", ["0", "false", "No", "off", ""])
    def test_false_values(self, value):
        assert parse_bool(value) is False

    def test_invalid_value(self):
        with pytest.raises(ValueError):
            parse_bool("maybe")


class TestDecomposeOptions:
    """Tests for DecomposeOptions defaults."""

    def test_defaults(self):
        options = DecomposeOptions()

        assert not options.include_root
        assert not options.include_static_members
        assert not options.include_private_members
        assert not options.include_unsupported
        assert not options.enable_redirection
        assert options.type_resolver is default_type_resolver
        assert options.context is None
        assert isinstance(options.formatter, ReflectionFormatter)


class TestEngineConfigLoad:
    """Tests for EngineConfig.load()."""

    def test_defaults_without_file(self, isolated_config):
        config = EngineConfig.load()
        assert config == EngineConfig()

    def test_loads_file(self, isolated_config):
        isolated_config.parent.mkdir(parents=True)
        isolated_config.write_text(
            json.dumps({"include_private_members": True, "enable_redirection": "yes"})
        )

        config = EngineConfig.load()

        assert config.include_private_members is True
        assert config.enable_redirection is True
        assert config.include_root is False

    def test_env_overrides_file(self, isolated_config, monkeypatch):
        isolated_config.parent.mkdir(parents=True)
        isolated_config.write_text(json.dumps({"include_unsupported": True}))
        monkeypatch.setenv("LOOKUP_INCLUDE_UNSUPPORTED", "false")
        monkeypatch.setenv("LOOKUP_INCLUDE_ROOT", "1")

        config = EngineConfig.load()

        assert config.include_unsupported is False
        assert config.include_root is True

    def test_invalid_env_ignored(self, isolated_config, monkeypatch, caplog):
        monkeypatch.setenv("LOOKUP_INCLUDE_PRIVATE", "sometimes")

        config = EngineConfig.load()

        assert config.include_private_members is False
        assert "LOOKUP_INCLUDE_PRIVATE" in caplog.text

    def test_unknown_file_keys_ignored(self, isolated_config):
        isolated_config.parent.mkdir(parents=True)
        isolated_config.write_text(json.dumps({"depth_limit": 3, "include_root": True}))

        config = EngineConfig.load()

        assert config.include_root is True
        assert not hasattr(config, "depth_limit")

    def test_corrupt_file_ignored(self, isolated_config):
        isolated_config.parent.mkdir(parents=True)
        isolated_config.write_text("{not json")

        assert EngineConfig.load() == EngineConfig()

    def test_save_then_load(self, isolated_config):
        EngineConfig(include_static_members=True).save()

        assert isolated_config.exists()
        assert EngineConfig.load().include_static_members is True


class TestToOptions:
    """Tests for EngineConfig.to_options()."""

    def test_carries_flags(self):
        options = EngineConfig(include_private_members=True).to_options()

        assert options.include_private_members is True
        assert options.type_resolver is default_type_resolver

    def test_overrides(self):
        options = EngineConfig(include_private_members=True).to_options(
            include_private_members=False, include_root=True
        )

        assert options.include_private_members is False
        assert options.include_root is True

    def test_resolver_and_context(self):
        def resolver(value, type_):
            return Descriptor(name="fixed")

        options = EngineConfig().to_options(type_resolver=resolver, context={"k": 1})

        assert options.type_resolver is resolver
        assert options.context == {"k": 1}

    def test_unknown_flag_rejected(self):
        with pytest.raises(TypeError):
            EngineConfig().to_options(include_everything=True)


class TestGlobalConfig:
    """Tests for the cached global config."""

    def test_cached(self, isolated_config):
        assert get_config() is get_config()

    def test_configure_replaces(self, isolated_config):
        custom = EngineConfig(include_root=True)
        configure(custom)

        assert get_config() is custom

    def test_reset_reloads(self, isolated_config, monkeypatch):
        first = get_config()
        monkeypatch.setenv("LOOKUP_ENABLE_REDIRECTION", "true")
        reset_config()

        second = get_config()
        assert second is not first
        assert second.enable_redirection is True
