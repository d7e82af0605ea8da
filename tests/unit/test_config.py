"""Unit tests for configuration management."""

import pytest
from pathlib import Path

from rsi_app.config.defaults import get_default_config
from rsi_app.config.loader import ConfigLoader
from rsi_app.config.validation import ConfigValidator


class TestDefaultConfig:
    """Test suite for default configuration."""

    def test_default_config_creation(self) -> None:
        """Test that default configuration can be created."""
        config = get_default_config()
        assert config is not None
        assert config.rsi.period == 14
        assert config.rsi.overbought == 70.0
        assert config.rsi.oversold == 30.0
        assert config.normalizer.length_policy == "strict"
        assert config.comparison.years_to_compare == 5


class TestConfigLoader:
    """Test suite for configuration loader."""

    @pytest.fixture
    def config_dir(self, tmp_path: Path) -> Path:
        (tmp_path / "symbols.yaml").write_text(
            "symbols:\n"
            "  SGBFEB32IV:\n"
            "    normalizer:\n"
            "      length_policy: permissive\n"
            "    rsi:\n"
            "      period: 9\n"
        )
        return tmp_path

    def test_config_loader_creation(self) -> None:
        """Test that ConfigLoader can be created."""
        loader = ConfigLoader.create()
        assert loader is not None
        assert isinstance(loader.config_dir, Path)

    def test_merge_config_defaults_only(self, tmp_path: Path) -> None:
        """Missing symbols file falls back to defaults."""
        loader = ConfigLoader.create(tmp_path)
        config = loader.merge_config("UNKNOWN")

        assert config["rsi"]["period"] == 14
        assert config["normalizer"]["length_policy"] == "strict"

    def test_merge_config_symbol_overrides(self, config_dir: Path) -> None:
        loader = ConfigLoader.create(config_dir)
        config = loader.merge_config("SGBFEB32IV")

        assert config["rsi"]["period"] == 9
        assert config["normalizer"]["length_policy"] == "permissive"
        # Other defaults should remain
        assert config["rsi"]["overbought"] == 70.0

    def test_merge_config_call_overrides_win(self, config_dir: Path) -> None:
        loader = ConfigLoader.create(config_dir)
        config = loader.merge_config("SGBFEB32IV", {"rsi": {"period": 21}})

        assert config["rsi"]["period"] == 21
        assert config["normalizer"]["length_policy"] == "permissive"

    def test_unknown_symbol_uses_defaults(self, config_dir: Path) -> None:
        loader = ConfigLoader.create(config_dir)
        assert loader.load_symbol_config("AAPL") == {}

    def test_empty_symbols_file(self, tmp_path: Path) -> None:
        (tmp_path / "symbols.yaml").write_text("")
        loader = ConfigLoader.create(tmp_path)
        assert loader.load_symbol_config("AAPL") == {}

    def test_symbol_lookup_ignores_case(self, config_dir: Path) -> None:
        loader = ConfigLoader.create(config_dir)
        assert loader.load_symbol_config(" sgbfeb32iv ")["rsi"]["period"] == 9

    def test_file_defaults_apply_to_every_symbol(self, tmp_path: Path) -> None:
        (tmp_path / "symbols.yaml").write_text(
            "defaults:\n"
            "  rsi:\n"
            "    period: 21\n"
            "    overbought: 80\n"
            "symbols:\n"
            "  BOND:\n"
            "    rsi:\n"
            "      period: 7\n"
        )
        loader = ConfigLoader.create(tmp_path)

        assert loader.merge_config("AAPL")["rsi"]["period"] == 21
        bond = loader.merge_config("BOND")
        assert bond["rsi"]["period"] == 7
        assert bond["rsi"]["overbought"] == 80
        assert loader.merge_config("BOND", {"rsi": {"period": 3}})["rsi"]["period"] == 3

    def test_symbol_entry_without_body(self, tmp_path: Path) -> None:
        (tmp_path / "symbols.yaml").write_text("symbols:\n  BOND:\n")
        loader = ConfigLoader.create(tmp_path)
        assert loader.load_symbol_config("BOND") == {}

    def test_non_mapping_document(self, tmp_path: Path) -> None:
        (tmp_path / "symbols.yaml").write_text("- BOND\n- AAPL\n")
        loader = ConfigLoader.create(tmp_path)

        with pytest.raises(ValueError, match="must contain a mapping"):
            loader.merge_config("BOND")

    def test_merge_does_not_modify_defaults(self, tmp_path: Path) -> None:
        loader = ConfigLoader.create(tmp_path)
        loader.merge_config("AAPL", {"rsi": {"period": 5}})
        assert loader.merge_config("AAPL")["rsi"]["period"] == 14

    def test_shipped_symbols_file(self) -> None:
        """The repository's symbols.yaml is valid once merged."""
        loader = ConfigLoader.create()
        config = loader.merge_config("SGBFEB32IV")

        assert config["normalizer"]["length_policy"] == "permissive"
        assert ConfigValidator.validate_config(config) == []


class TestConfigValidator:
    """Test suite for configuration validation."""

    def test_defaults_are_valid(self) -> None:
        config = ConfigLoader.create().merge_config("UNKNOWN")
        assert ConfigValidator.validate_config(config) == []

    @pytest.mark.parametrize("period", [0, -3, 2.5, "14", True])
    def test_invalid_period(self, period) -> None:
        errors = ConfigValidator.validate_rsi_params({"period": period})
        assert [e.field for e in errors] == ["period"]

    def test_band_out_of_range(self) -> None:
        errors = ConfigValidator.validate_rsi_params({"overbought": 120})
        assert errors[0].field == "overbought"

    def test_inverted_bands(self) -> None:
        errors = ConfigValidator.validate_rsi_params({"overbought": 30, "oversold": 70})
        assert [e.field for e in errors] == ["oversold"]

    def test_invalid_length_policy(self) -> None:
        errors = ConfigValidator.validate_config({"normalizer": {"length_policy": "lenient"}})
        assert len(errors) == 1
        assert errors[0].value == "lenient"

    @pytest.mark.parametrize("section", ["rsi", "normalizer", "comparison"])
    def test_section_not_a_mapping(self, section: str) -> None:
        errors = ConfigValidator.validate_config({section: None})
        assert [(e.field, e.value) for e in errors] == [(section, None)]

    def test_empty_yaml_section(self, tmp_path: Path) -> None:
        """A section key with no body merges in as None"""
        (tmp_path / "symbols.yaml").write_text("symbols:\n  BOND:\n    normalizer:\n")
        config = ConfigLoader.create(tmp_path).merge_config("BOND")

        errors = ConfigValidator.validate_config(config)
        assert [e.field for e in errors] == ["normalizer"]

    def test_invalid_comparison_params(self) -> None:
        errors = ConfigValidator.validate_comparison_params(
            {"years_to_compare": 0, "drop_missing_closes": "yes"}
        )
        assert {e.field for e in errors} == {"years_to_compare", "drop_missing_closes"}
