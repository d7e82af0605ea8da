"""
Series engine coordinator.

Orchestrates the candle series pipeline: raw payload -> normalization ->
chronological merge -> RSI annotation, plus the year-over-year comparison
series used by the comparison charts.
"""

import math
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Optional, Union

from .config.loader import ConfigLoader
from .config.validation import ConfigValidator
from .data.models import Candle, ClosePoint, LengthPolicy, PercentPoint
from .data.normalizer import CandleNormalizer, PolicyLike, merge_sequences, normalize_payload
from .logging.config import get_pipeline_logger
from .metrics.comparison import drop_missing_closes, to_percentage_change
from .metrics.rsi import RSICalculator, annotate_rsi, classify_rsi_zone
from .utils.time import format_timestamp


def build_series(raw: Any, period: int = 14, length_policy: PolicyLike = None) -> list[Candle]:
    """
    Normalize a parsed payload of either shape and annotate it with RSI.

    Args:
        raw: Parsed generic or chart-envelope payload
        period: RSI lookback period
        length_policy: Quote array length policy (strict by default)

    Returns:
        Candles in source order, rsi set from index `period` onward
    """
    return annotate_rsi(normalize_payload(raw, length_policy), period)


class SeriesBuilder:
    """
    Configured candle series pipeline for one symbol.

    Configuration is merged from defaults, ``symbols.yaml`` and per-call
    overrides, then validated before any payload is processed.
    """

    def __init__(
        self,
        symbol: str = "",
        config_dir: Optional[Union[str, Path]] = None,
        overrides: Optional[dict[str, Any]] = None,
    ) -> None:
        self.symbol = symbol
        self.logger = get_pipeline_logger(__name__, symbol=symbol or None)

        self.config_loader = ConfigLoader.create(Path(config_dir) if config_dir else None)
        self.config = self.config_loader.merge_config(symbol, overrides)

        validation_errors = ConfigValidator.validate_config(self.config)
        if validation_errors:
            error_msgs = [f"{err.field}: {err.message} (got: {err.value})" for err in validation_errors]
            self.logger.error("Series configuration validation failed", errors=error_msgs)
            raise ValueError(f"Invalid series configuration: {'; '.join(error_msgs)}")

        rsi_config = self.config["rsi"]
        self.normalizer = CandleNormalizer(self.config)
        self.rsi_calculator = RSICalculator(period=rsi_config["period"])
        self.overbought = rsi_config["overbought"]
        self.oversold = rsi_config["oversold"]

        comparison_config = self.config["comparison"]
        self.years_to_compare = comparison_config["years_to_compare"]
        self.drop_missing = comparison_config["drop_missing_closes"]

    @property
    def period(self) -> int:
        return self.rsi_calculator.period

    def build(self, raw: Any) -> list[Candle]:
        """Normalize one parsed payload and annotate it with RSI."""
        return self._annotate(self.normalizer.normalize(raw))

    def build_from_json(self, raw_data: Union[str, bytes]) -> list[Candle]:
        """Parse JSON text, normalize it and annotate it with RSI."""
        return self._annotate(self.normalizer.normalize_json(raw_data))

    def merge_and_build(self, payloads: Iterable[Any]) -> list[Candle]:
        """
        Normalize several fetches (e.g. one per year), merge them in
        chronological order and annotate the merged series.
        """
        sequences = [self.normalizer.normalize(raw) for raw in payloads]
        merged = merge_sequences(*sequences)

        self.logger.debug(
            "Merged candle sequences",
            sequences=len(sequences),
            candles=len(merged)
        )

        return self._annotate(merged)

    def build_comparison(self, payloads_by_year: Mapping[int, Any]) -> dict[int, list[PercentPoint]]:
        """
        Build percentage-change series for the most recent years.

        Args:
            payloads_by_year: Parsed payload per calendar year

        Returns:
            Mapping of year to rebased points, newest year first; years
            without data are omitted
        """
        years = sorted(payloads_by_year, reverse=True)[:self.years_to_compare]

        series: dict[int, list[PercentPoint]] = {}
        for year in years:
            # Only timestamps and closes matter here
            candles = normalize_payload(payloads_by_year[year], LengthPolicy.PERMISSIVE)
            if self.drop_missing:
                points = drop_missing_closes(candles)
            else:
                points = [ClosePoint(timestamp=c.timestamp, close=c.close) for c in candles]

            if points:
                series[year] = to_percentage_change(points)

        self.logger.info(
            "Built comparison series",
            years=list(series),
            requested=len(payloads_by_year)
        )

        return series

    def _annotate(self, candles: list[Candle]) -> list[Candle]:
        annotated = self.rsi_calculator.annotate(candles)

        if not annotated:
            self.logger.info("No data for series")
            return annotated

        missing = sum(1 for c in annotated if c.has_missing_values)
        if missing:
            self.logger.warning("Series contains candles with missing values", missing=missing)

        latest = _last_rsi(annotated)
        zone = None
        if latest is not None and not math.isnan(latest):
            zone = classify_rsi_zone(latest, self.overbought, self.oversold).value

        self.logger.info(
            "Built candle series",
            candles=len(annotated),
            period=self.period,
            first_ts=format_timestamp(annotated[0].timestamp),
            last_ts=format_timestamp(annotated[-1].timestamp),
            latest_rsi=latest,
            rsi_zone=zone
        )

        return annotated


def _last_rsi(candles: list[Candle]) -> Optional[float]:
    for candle in reversed(candles):
        if candle.rsi is not None:
            return candle.rsi
    return None
