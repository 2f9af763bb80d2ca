"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any

SUPPORTED_FORMATS = ("json", "yaml")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_persistence_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate persistence parameters."""
        errors = []

        if "default_format" in params:
            value = params["default_format"]
            if not isinstance(value, str) or value.lower() not in SUPPORTED_FORMATS:
                errors.append(ValidationError(
                    field="default_format",
                    message=f"Must be one of {', '.join(SUPPORTED_FORMATS)}",
                    value=value
                ))

        if "json_indent" in params:
            value = params["json_indent"]
            if value is not None and (
                isinstance(value, bool) or not isinstance(value, int) or value < 0
            ):
                errors.append(ValidationError(
                    field="json_indent",
                    message="Must be a non-negative integer or null",
                    value=value
                ))

        if "encoding" in params:
            value = params["encoding"]
            if not isinstance(value, str) or not value:
                errors.append(ValidationError(
                    field="encoding",
                    message="Must be a non-empty string",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_execution_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate execution parameters."""
        errors = []

        if "max_steps" in params:
            value = params["max_steps"]
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                errors.append(ValidationError(
                    field="max_steps",
                    message="Must be a positive integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate logging parameters."""
        errors = []

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or value.upper() not in LOG_LEVELS:
                errors.append(ValidationError(
                    field="level",
                    message=f"Must be one of {', '.join(LOG_LEVELS)}",
                    value=value
                ))

        if "format_json" in params and not isinstance(params["format_json"], bool):
            errors.append(ValidationError(
                field="format_json",
                message="Must be a boolean",
                value=params["format_json"]
            ))

        return errors

    @classmethod
    def validate_config(cls, config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        known_keys = {
            "persistence": {"default_format", "json_indent", "encoding"},
            "execution": {"max_steps"},
            "logging": {"level", "format_json"},
        }
        for section, value in config.items():
            if section not in known_keys:
                errors.append(ValidationError(
                    field=section,
                    message="Unknown configuration section",
                    value=value
                ))
            elif not isinstance(value, dict):
                errors.append(ValidationError(
                    field=section,
                    message="Must be a mapping",
                    value=value
                ))
            else:
                for key in value:
                    if key not in known_keys[section]:
                        errors.append(ValidationError(
                            field=f"{section}.{key}",
                            message="Unknown configuration key",
                            value=value[key]
                        ))

        if errors:
            return errors

        errors.extend(cls.validate_persistence_params(config.get("persistence", {})))
        errors.extend(cls.validate_execution_params(config.get("execution", {})))
        errors.extend(cls.validate_logging_params(config.get("logging", {})))

        return errors
