"""
Tests for EngineConfig.
"""

import pytest

from marc8bridge import ConfigError, EngineConfig, TranscodingEngine


class TestDefaults:
    def test_defaults(self):
        config = EngineConfig()
        assert config.g0 == "B"
        assert config.g1 == "E"
        assert config.diagnostics is False
        assert config.orphan_marks == "emit"
        assert config.escape_skip == 3

    def test_frozen(self):
        with pytest.raises(AttributeError):
            EngineConfig().g0 = "N"


class TestValidation:
    @pytest.mark.parametrize("options", [
        {"g0": ""},
        {"g1": 5},
        {"diagnostics": "yes"},
        {"orphan_marks": "keep"},
        {"escape_skip": 0},
        {"escape_skip": True},
        {"escape_skip": "3"},
    ])
    def test_invalid_values(self, options):
        with pytest.raises(ConfigError):
            EngineConfig(**options)

    def test_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            EngineConfig(orphan_marks="keep")

    def test_orphan_policy_message_lists_choices(self):
        with pytest.raises(ConfigError, match="emit, discard"):
            EngineConfig(orphan_marks="keep")


class TestFromMapping:
    def test_known_keys(self):
        config = EngineConfig.from_mapping({"g0": "N", "diagnostics": True})
        assert config.g0 == "N"
        assert config.diagnostics is True
        assert config.g1 == "E"

    def test_unknown_keys(self):
        with pytest.raises(ConfigError, match="Unknown configuration keys: colour"):
            EngineConfig.from_mapping({"colour": "blue"})

    def test_empty_mapping(self):
        assert EngineConfig.from_mapping({}) == EngineConfig()


class TestFromEnv:
    def test_unset_keeps_defaults(self):
        assert EngineConfig.from_env({}) == EngineConfig()

    def test_all_variables(self):
        config = EngineConfig.from_env({
            "MARC8_G0": "N",
            "MARC8_G1": "2",
            "MARC8_DIAGNOSTICS": "yes",
            "MARC8_ORPHAN_MARKS": "discard",
            "MARC8_ESCAPE_SKIP": " 4 ",
        })
        assert config == EngineConfig(g0="N", g1="2", diagnostics=True,
                                      orphan_marks="discard", escape_skip=4)

    @pytest.mark.parametrize("raw,expected", [
        ("1", True), ("TRUE", True), ("on", True),
        ("0", False), ("no", False), ("", False),
    ])
    def test_booleans(self, raw, expected):
        assert EngineConfig.from_env({"MARC8_DIAGNOSTICS": raw}).diagnostics is expected

    def test_bad_boolean(self):
        with pytest.raises(ConfigError, match="MARC8_DIAGNOSTICS"):
            EngineConfig.from_env({"MARC8_DIAGNOSTICS": "maybe"})

    def test_bad_integer(self):
        with pytest.raises(ConfigError, match="MARC8_ESCAPE_SKIP"):
            EngineConfig.from_env({"MARC8_ESCAPE_SKIP": "three"})

    def test_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv("MARC8_G0", "g")
        assert EngineConfig.from_env().g0 == "g"

    def test_engine_from_env(self, monkeypatch):
        monkeypatch.setenv("MARC8_G0", "GreekSymbols")
        engine = TranscodingEngine(config=EngineConfig.from_env())
        assert engine.decode(b"abc") == "αβγ"
