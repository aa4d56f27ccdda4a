"""Tests for the configuration system."""

import json

import pytest

from xmlx.shared.config import (
    ConfigError,
    ConfigValidationError,
    DecodingConfig,
    GlobalConfig,
    ParserConfig,
    TreeConfig,
)


class TestComponentConfigs:
    """Test component configuration defaults and validation."""

    def test_tree_defaults(self) -> None:
        config = TreeConfig()

        assert config.trim_text is True
        assert config.keep_comments is True
        assert config.keep_processing_instructions is True
        assert config.keep_directives is True

    def test_tree_rejects_non_bool(self) -> None:
        with pytest.raises(ValueError, match="trim_text must be a bool"):
            TreeConfig(trim_text="yes")

    def test_decoding_validation(self) -> None:
        with pytest.raises(ValueError, match="backend must be one of"):
            DecodingConfig(backend="sax")
        with pytest.raises(ValueError, match="default_decoder cannot be empty"):
            DecodingConfig(default_decoder="")

    def test_global_validation(self) -> None:
        with pytest.raises(ValueError, match="logging_level must be one of"):
            GlobalConfig(logging_level="LOUD")


class TestParserConfig:
    """Test the aggregate configuration."""

    def test_is_frozen(self) -> None:
        config = ParserConfig()
        with pytest.raises(AttributeError):
            config.name = "x"  # type: ignore[misc]

    def test_override_nested_fields(self) -> None:
        config = ParserConfig().override(
            tree__trim_text=False,
            decoding__backend="lxml",
            global___logging_level="DEBUG",
            name="custom",
        )

        assert config.tree.trim_text is False
        assert config.decoding.backend == "lxml"
        assert config.global_.logging_level == "DEBUG"
        assert config.name == "custom"

    def test_override_leaves_original_untouched(self) -> None:
        original = ParserConfig()
        original.override(tree__keep_comments=False)

        assert original.tree.keep_comments is True

    def test_override_invalid_value(self) -> None:
        with pytest.raises(ConfigValidationError, match="backend"):
            ParserConfig().override(decoding__backend="sax")

    def test_override_unknown_component(self) -> None:
        with pytest.raises(ConfigValidationError) as excinfo:
            ParserConfig().override(render__pretty=True)

        assert excinfo.value.field_name == "render__pretty"
        assert excinfo.value.suggestions
        assert isinstance(excinfo.value, ConfigError)

    def test_override_unknown_field(self) -> None:
        with pytest.raises(ConfigValidationError):
            ParserConfig().override(tree__no_such_field=True)

    def test_json_round_trip(self) -> None:
        config = ParserConfig.elements_only()
        data = json.loads(config.to_json())

        assert data["tree"]["keep_comments"] is False
        assert data["global_"]["logging_level"] == "INFO"
        assert ParserConfig.from_json(config.to_json()) == config

    def test_from_dict_ignores_unknown_keys(self) -> None:
        config = ParserConfig.from_dict({"tree": {"trim_text": False, "extra": 1}, "other": 2})

        assert config.tree.trim_text is False

    def test_from_dict_invalid(self) -> None:
        with pytest.raises(ConfigValidationError):
            ParserConfig.from_dict({"decoding": {"backend": "sax"}})

    def test_presets(self) -> None:
        assert ParserConfig.faithful().tree.trim_text is False
        elements_only = ParserConfig.elements_only().tree
        assert not elements_only.keep_comments
        assert not elements_only.keep_processing_instructions
        assert not elements_only.keep_directives
