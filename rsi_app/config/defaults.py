"""Default configuration parameters for candle normalization and RSI."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RSIParams:
    """RSI calculation parameters."""
    period: int = 14                    # Wilder lookback window
    overbought: float = 70.0            # Upper reference band
    oversold: float = 30.0              # Lower reference band


@dataclass(frozen=True)
class NormalizerParams:
    """Payload normalization parameters."""
    length_policy: str = "strict"       # "strict" raises, "permissive" pads with NaN


@dataclass(frozen=True)
class ComparisonParams:
    """Yearly comparison parameters."""
    years_to_compare: int = 5
    drop_missing_closes: bool = True


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    rsi: RSIParams
    normalizer: NormalizerParams
    comparison: ComparisonParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        rsi=RSIParams(),
        normalizer=NormalizerParams(),
        comparison=ComparisonParams(),
    )
