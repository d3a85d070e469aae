"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any

from ..utils.time import PRESET_WINDOWS


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_relay_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate relay chain parameters."""
        errors = []

        if "timeout_seconds" in params:
            value = params["timeout_seconds"]
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                errors.append(ValidationError(
                    field="timeout_seconds",
                    message="Must be a positive number",
                    value=value
                ))

        if "relays" in params:
            relays = params["relays"]
            if not isinstance(relays, (list, tuple)) or not relays:
                errors.append(ValidationError(
                    field="relays",
                    message="Must be a non-empty list",
                    value=relays
                ))
            else:
                seen_ids = set()
                for position, relay in enumerate(relays):
                    errors.extend(ConfigValidator._validate_relay_entry(position, relay, seen_ids))

        return errors

    @staticmethod
    def _validate_relay_entry(position: int, relay: Any, seen_ids: set) -> list[ValidationError]:
        errors = []
        field_prefix = f"relays[{position}]"

        if not isinstance(relay, dict):
            return [ValidationError(
                field=field_prefix,
                message="Must be a mapping with id and template",
                value=relay
            )]

        relay_id = relay.get("id")
        if not isinstance(relay_id, str) or not relay_id:
            errors.append(ValidationError(
                field=f"{field_prefix}.id",
                message="Must be a non-empty string",
                value=relay_id
            ))
        elif relay_id in seen_ids:
            errors.append(ValidationError(
                field=f"{field_prefix}.id",
                message="Must be unique",
                value=relay_id
            ))
        else:
            seen_ids.add(relay_id)

        template = relay.get("template")
        if not isinstance(template, str) or "{target}" not in template:
            errors.append(ValidationError(
                field=f"{field_prefix}.template",
                message="Must be a string containing {target}",
                value=template
            ))

        if "encode_target" in relay and not isinstance(relay["encode_target"], bool):
            errors.append(ValidationError(
                field=f"{field_prefix}.encode_target",
                message="Must be a boolean",
                value=relay["encode_target"]
            ))

        return errors

    @staticmethod
    def validate_signal_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate signal detection parameters."""
        errors = []

        if "fear_threshold" in params:
            value = params["fear_threshold"]
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                errors.append(ValidationError(
                    field="fear_threshold",
                    message="Must be a positive number",
                    value=value
                ))

        for horizon in ("short_horizon_months", "long_horizon_months"):
            if horizon in params:
                value = params[horizon]
                if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                    errors.append(ValidationError(
                        field=horizon,
                        message="Must be a positive integer",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_query_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate query window parameters."""
        errors = []

        if "default_preset" in params:
            value = params["default_preset"]
            if value not in PRESET_WINDOWS:
                errors.append(ValidationError(
                    field="default_preset",
                    message=f"Must be one of {', '.join(PRESET_WINDOWS)}",
                    value=value
                ))

        if "overfetch_years" in params:
            value = params["overfetch_years"]
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                errors.append(ValidationError(
                    field="overfetch_years",
                    message="Must be a non-negative integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "relay" in config:
            errors.extend(ConfigValidator.validate_relay_params(config["relay"]))

        if "signal" in config:
            errors.extend(ConfigValidator.validate_signal_params(config["signal"]))

        if "query" in config:
            errors.extend(ConfigValidator.validate_query_params(config["query"]))

        return errors
