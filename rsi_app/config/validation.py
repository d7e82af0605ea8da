"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any

LENGTH_POLICIES = ("strict", "permissive")


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_rsi_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate RSI parameters."""
        errors = []

        if "period" in params:
            value = params["period"]
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                errors.append(ValidationError(
                    field="period",
                    message="Must be a positive integer",
                    value=value
                ))

        for band in ("overbought", "oversold"):
            if band in params:
                value = params[band]
                if not isinstance(value, (int, float)) or value < 0 or value > 100:
                    errors.append(ValidationError(
                        field=band,
                        message="Must be a number between 0 and 100",
                        value=value
                    ))

        overbought = params.get("overbought")
        oversold = params.get("oversold")
        if (isinstance(overbought, (int, float)) and isinstance(oversold, (int, float))
                and oversold >= overbought):
            errors.append(ValidationError(
                field="oversold",
                message="Must be below overbought",
                value=oversold
            ))

        return errors

    @staticmethod
    def validate_normalizer_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate normalizer parameters."""
        errors = []

        if "length_policy" in params:
            value = params["length_policy"]
            if value not in LENGTH_POLICIES:
                errors.append(ValidationError(
                    field="length_policy",
                    message=f"Must be one of {', '.join(LENGTH_POLICIES)}",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_comparison_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate comparison parameters."""
        errors = []

        if "years_to_compare" in params:
            value = params["years_to_compare"]
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                errors.append(ValidationError(
                    field="years_to_compare",
                    message="Must be a positive integer",
                    value=value
                ))

        if "drop_missing_closes" in params:
            value = params["drop_missing_closes"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="drop_missing_closes",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        section_validators = {
            "rsi": ConfigValidator.validate_rsi_params,
            "normalizer": ConfigValidator.validate_normalizer_params,
            "comparison": ConfigValidator.validate_comparison_params,
        }

        for section, validate in section_validators.items():
            if section not in config:
                continue

            params = config[section]
            # An empty YAML section loads as None
            if not isinstance(params, dict):
                errors.append(ValidationError(
                    field=section,
                    message="Must be a mapping of parameters",
                    value=params
                ))
                continue

            errors.extend(validate(params))

        return errors
