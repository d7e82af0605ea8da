"""Configuration loader with layered parameter precedence."""

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from .defaults import DefaultConfig, get_default_config

SYMBOLS_FILE = "symbols.yaml"


@dataclass(frozen=True)
class ConfigLoader:
    """
    Resolves the configuration for one symbol.

    ``symbols.yaml`` may carry a ``defaults`` section applied to every symbol
    and a ``symbols`` section keyed by ticker.
    """

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=config_dir,
            defaults=get_default_config(),
        )

    @property
    def symbols_file(self) -> Path:
        return self.config_dir / SYMBOLS_FILE

    def load_symbols_document(self) -> dict[str, Any]:
        """
        Read ``symbols.yaml``.

        Returns:
            The parsed document, or {} when the file is absent or empty

        Raises:
            ValueError: If the document is not a mapping
        """
        if not self.symbols_file.exists():
            return {}

        with open(self.symbols_file) as f:
            document = yaml.safe_load(f)

        if document is None:
            return {}
        if not isinstance(document, dict):
            raise ValueError(f"{self.symbols_file} must contain a mapping, got {type(document).__name__}")

        return document

    def load_file_defaults(self) -> dict[str, Any]:
        """Overrides shared by every symbol (the ``defaults`` section)."""
        return self.load_symbols_document().get("defaults") or {}

    def load_symbol_config(self, symbol: str) -> dict[str, Any]:
        """
        Overrides for one symbol.

        Tickers are matched case-insensitively; an entry with no body counts
        as no overrides.
        """
        symbols = self.load_symbols_document().get("symbols") or {}
        wanted = normalize_symbol(symbol)

        for name, overrides in symbols.items():
            if normalize_symbol(str(name)) == wanted:
                return overrides or {}

        return {}

    def merge_config(
        self,
        symbol: str,
        call_overrides: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Merge configuration layers for a symbol.

        Priority order:
        1. Per-call overrides (highest priority)
        2. Symbol entry in ``symbols.yaml``
        3. ``defaults`` section of ``symbols.yaml``
        4. Built-in defaults (lowest priority)
        """
        config = asdict(self.defaults)

        for layer in (self.load_file_defaults(), self.load_symbol_config(symbol), call_overrides):
            if layer:
                config = deep_merge(config, layer)

        return config


def normalize_symbol(symbol: str) -> str:
    """Canonical ticker form used for lookups (``hdfcbank.ns`` -> ``HDFCBANK.NS``)."""
    return symbol.strip().upper()


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge nested dicts; values from ``override`` win, neither input is modified."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result
