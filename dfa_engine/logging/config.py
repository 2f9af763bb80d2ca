"""
Centralized logging configuration for the automaton engine.

This module provides standardized logging configuration using structlog
for all components. Execution and persistence modules obtain their loggers
here so that transitions, guard decisions and save/load events share one
structured format.
"""
import logging
import sys
from typing import IO, Any, Optional

import structlog
from structlog.types import FilteringBoundLogger, Processor

from ..config.defaults import EngineConfig
from ..config.loader import get_engine_config


def build_processors(
    format_json: bool,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list[Processor]] = None,
    colors: bool = False,
) -> list[Processor]:
    """
    Assemble the structlog processor chain, renderer last.

    Caller information, when requested, is the edge or operation site inside
    the engine (module and line), which is where guard and transition events
    are emitted from.
    """
    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso", utc=True))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.MODULE,
                        structlog.processors.CallsiteParameter.LINENO]
        ))

    processors.extend(extra_processors or [])

    if format_json:
        processors.append(structlog.processors.JSONRenderer(sort_keys=True))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=colors))

    return processors


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list[Processor]] = None,
    stream: Optional[IO[str]] = None,
) -> None:
    """
    Configure structlog for the whole engine.

    Engine events go to ``stream`` (stderr by default) so that a program
    driving an automaton keeps stdout for its own output. Calling this again
    replaces the previous configuration.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON lines; otherwise human-readable
        include_timestamp: Include a UTC timestamp in log output
        include_caller: Include the emitting module and line number
        extra_processors: Additional structlog processors, run before rendering
        stream: Destination text stream
    """
    stream = stream or sys.stderr
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=stream,
        format="%(message)s",
        force=True,
    )

    structlog.configure(
        processors=build_processors(
            format_json,
            include_timestamp=include_timestamp,
            include_caller=include_caller,
            extra_processors=extra_processors,
            colors=not format_json and stream.isatty(),
        ),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def configure_logging_from(config: Optional[EngineConfig] = None, **kwargs: Any) -> None:
    """
    Configure logging from the ``logging`` section of an engine configuration.

    Uses the process-wide configuration when ``config`` is omitted. Extra
    keyword arguments are passed through to ``configure_logging``.
    """
    config = config or get_engine_config()
    configure_logging(
        level=config.logging.level,
        format_json=config.logging.format_json,
        **kwargs,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_state_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for state machine execution.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structlog logger carrying the state machine subsystem tag
    """
    return get_logger(name).bind(
        subsystem="state_machine",
        audit_trail=True
    )


def get_persistence_logger(name: str) -> FilteringBoundLogger:
    """Get a logger bound for document save/load."""
    return get_logger(name).bind(subsystem="persistence")


def log_guard_decision(
    logger: FilteringBoundLogger,
    automaton: str,
    from_state: int,
    to_state: int,
    passed: bool,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a guard evaluation with standardized format.

    Guard decisions are frequent, so they are emitted at DEBUG.

    Args:
        logger: Structlog logger instance
        automaton: Name of the automaton type evaluating the guard
        from_state: Source state id of the edge
        to_state: Target state id of the edge
        passed: Whether the guard allowed the move
        context: Additional context data
    """
    bound_logger = logger.bind(
        automaton=automaton,
        from_state=from_state,
        to_state=to_state,
        guard_result="PASS" if passed else "FAIL",
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.debug("guard_decision")


def log_state_transition(
    logger: FilteringBoundLogger,
    automaton: str,
    from_state: Optional[int],
    to_state: int,
    trigger: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a state transition with standardized format.

    Args:
        logger: Structlog logger instance
        automaton: Name of the automaton type that moved
        from_state: State id before the move
        to_state: State id after the move
        trigger: Operation that caused the move (move_to, step, start_from)
        context: Additional context data
    """
    bound_logger = logger.bind(
        automaton=automaton,
        from_state=from_state,
        to_state=to_state,
        trigger=trigger,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("state_transition")
