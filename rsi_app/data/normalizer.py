"""
Normalization of quote-array payloads into canonical candle sequences.

Both payload shapes share the same parallel-array extraction. The shape is
resolved once by `classify_payload` and dispatched here; source order is
preserved and timestamps are never sorted or deduplicated.
"""

from typing import Any, Optional, Union

from ..errors import ArrayLengthMismatchError, MalformedDataError, MissingDataError
from ..logging import get_logger
from .models import Candle, ChartEnvelope, GenericPayload, LengthPolicy, QuoteArrays
from .parsers import (
    QUOTE_FIELDS,
    ParseError,
    parse_chart_envelope,
    classify_payload,
    extract_quote_arrays,
    parse_json_payload,
    parse_quote_value,
    parse_timestamp,
)

logger = get_logger(__name__)

PolicyLike = Union[LengthPolicy, str, None]


def _require_payload(raw: Any) -> None:
    if raw is None:
        raise MissingDataError("Payload is required", data_type="payload")


def resolve_length_policy(policy: PolicyLike) -> LengthPolicy:
    """Accept a LengthPolicy, its string value, or None (strict)."""
    if policy is None:
        return LengthPolicy.STRICT
    if isinstance(policy, LengthPolicy):
        return policy
    try:
        return LengthPolicy(policy)
    except ValueError:
        raise ValueError(f"Unknown length policy: {policy!r}")


def candles_from_arrays(arrays: QuoteArrays, length_policy: PolicyLike = None) -> list[Candle]:
    """
    Build one candle per timestamp index from parallel quote arrays.

    Args:
        arrays: Extracted timestamp and OHLCV arrays
        length_policy: STRICT raises on any quote array whose length differs
            from the timestamp array; PERMISSIVE pads short arrays with NaN
            and ignores surplus entries

    Returns:
        Candles in source order

    Raises:
        ArrayLengthMismatchError: Under STRICT when lengths disagree
        ParseError: If a timestamp or quote value is not numeric
    """
    policy = resolve_length_policy(length_policy)
    expected = len(arrays.timestamp)

    if policy is LengthPolicy.STRICT:
        for field, actual in arrays.field_lengths().items():
            if actual != expected:
                raise ArrayLengthMismatchError(
                    f"Quote array '{field}' has {actual} values, expected {expected} to match timestamps",
                    field=field,
                    expected_length=expected,
                    actual_length=actual,
                )

    columns = {name: getattr(arrays, name) for name in QUOTE_FIELDS}

    candles = []
    for i, raw_ts in enumerate(arrays.timestamp):
        values = {
            name: parse_quote_value(column[i] if i < len(column) else None, name, i)
            for name, column in columns.items()
        }
        candles.append(Candle(timestamp=parse_timestamp(raw_ts, i), **values))

    return candles


def normalize_generic(raw: Any, length_policy: PolicyLike = None) -> list[Candle]:
    """
    Normalize a generic payload with top-level ``timestamp`` and
    ``indicators.quote[0]``.

    Raises:
        MalformedDataError: If the payload does not have the generic shape or
            holds non-numeric values
        ArrayLengthMismatchError: Under the strict length policy
    """
    _require_payload(raw)
    try:
        if not isinstance(raw, dict):
            raise ParseError("Payload must be a dictionary")
        return candles_from_arrays(extract_quote_arrays(raw), length_policy)
    except ParseError as e:
        raise MalformedDataError(f"Generic payload error: {e}", raw_data=str(raw)[:100],
                                 expected_format="generic")


def normalize_provider_chart(raw: Any, length_policy: PolicyLike = None) -> list[Candle]:
    """
    Normalize a provider chart envelope (``chart.result[0]``).

    An absent or empty ``chart.result`` yields an empty list; this is the
    expected outcome for an unknown ticker and is not an error.

    Raises:
        MalformedDataError: If the envelope is present but malformed
        ArrayLengthMismatchError: Under the strict length policy
    """
    _require_payload(raw)
    try:
        if not isinstance(raw, dict):
            raise ParseError("Payload must be a dictionary")
        envelope = parse_chart_envelope(raw.get("chart"))
        return _normalize_envelope(envelope, length_policy)
    except ParseError as e:
        raise MalformedDataError(f"Chart envelope error: {e}", raw_data=str(raw)[:100],
                                 expected_format="chart")


def normalize_payload(raw: Any, length_policy: PolicyLike = None) -> list[Candle]:
    """
    Classify a parsed payload and normalize it with the matching handler.

    Raises:
        MalformedDataError: If the payload matches neither shape
        ArrayLengthMismatchError: Under the strict length policy
    """
    _require_payload(raw)
    try:
        payload = classify_payload(raw)
        match payload:
            case ChartEnvelope():
                return _normalize_envelope(payload, length_policy)
            case GenericPayload(arrays=arrays):
                return candles_from_arrays(arrays, length_policy)
    except ParseError as e:
        raise MalformedDataError(f"Parse error: {e}", raw_data=str(raw)[:100])

    raise MalformedDataError(f"Unrecognized payload type: {type(payload).__name__}")


def _normalize_envelope(envelope: ChartEnvelope, length_policy: PolicyLike) -> list[Candle]:
    if envelope.arrays is None:
        logger.debug("Empty chart result", symbol=envelope.symbol)
        return []
    return candles_from_arrays(envelope.arrays, length_policy)


def merge_sequences(*sequences: list[Candle]) -> list[Candle]:
    """
    Merge candle sequences from separate fetches into chronological order.

    When two sequences contain the same timestamp, the candle from the later
    argument wins. RSI must only be computed on merged output, since it
    depends on chronological adjacency.
    """
    by_timestamp: dict[int, Candle] = {}
    for sequence in sequences:
        for candle in sequence:
            by_timestamp[candle.timestamp] = candle

    return [by_timestamp[ts] for ts in sorted(by_timestamp)]


class CandleNormalizer:
    """
    Configured entry point for payload normalization.

    Reads the length policy from the ``normalizer`` section of a merged
    configuration dict.
    """

    def __init__(self, config: Optional[dict[str, Any]] = None):
        self.config = config or {}
        normalizer_config = self.config.get("normalizer") or {}
        self.length_policy = resolve_length_policy(normalizer_config.get("length_policy"))

    def normalize(self, raw: Any) -> list[Candle]:
        """Normalize an already-parsed payload of either shape."""
        candles = normalize_payload(raw, self.length_policy)
        logger.debug("Normalized payload", candles=len(candles),
                     length_policy=self.length_policy.value)
        return candles

    def normalize_json(self, raw_data: Union[str, bytes]) -> list[Candle]:
        """
        Parse JSON text and normalize it.

        Raises:
            MalformedDataError: If the text is not valid JSON or matches
                neither payload shape
        """
        try:
            payload = parse_json_payload(raw_data)
        except ParseError as e:
            raise MalformedDataError(f"JSON parse error: {e}", raw_data=str(raw_data)[:100])
        return self.normalize(payload)
