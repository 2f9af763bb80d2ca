"""Default configuration parameters for the automaton engine."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class PersistenceParams:
    """Document save/load parameters."""
    default_format: str = "json"                     # Used when neither argument nor suffix decide
    json_indent: Optional[int] = 2                   # None writes compact JSON
    encoding: str = "utf-8"                          # Text encoding for file targets


@dataclass(frozen=True)
class ExecutionParams:
    """Execution loop parameters."""
    max_steps: int = 1000                            # Upper bound for run_until


@dataclass(frozen=True)
class LoggingParams:
    """Logging parameters passed to configure_logging."""
    level: str = "INFO"
    format_json: bool = False


@dataclass(frozen=True)
class EngineConfig:
    """Complete engine configuration."""
    persistence: PersistenceParams = field(default_factory=PersistenceParams)
    execution: ExecutionParams = field(default_factory=ExecutionParams)
    logging: LoggingParams = field(default_factory=LoggingParams)


def get_default_config() -> EngineConfig:
    """Get the default configuration instance."""
    return EngineConfig(
        persistence=PersistenceParams(),
        execution=ExecutionParams(),
        logging=LoggingParams(),
    )
