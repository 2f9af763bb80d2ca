"""
Automaton persistence: save and load with behavior rebinding.

A document carries only data: the ordered state list with each state's id
and payload fields, the current state id, and optionally the automaton's
declared context fields. Guards and behaviors are executable and are never
written. On load the concrete automaton type is constructed afresh, running
its own definitions, and the persisted data is merged onto it by state id,
so the loaded automaton's transition table and behaviors are exactly those
of a natively constructed instance.
"""

import os
from codecs import lookup as lookup_codec
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any, Optional, TypeVar, Union

from ..config.defaults import EngineConfig
from ..config.loader import get_engine_config
from ..errors import GraphMismatchError, SerializationError
from ..logging.config import get_persistence_logger
from .codecs import get_codec
from .formats import SerializationFormat, infer_format

if TYPE_CHECKING:
    from ..state.machine import DFA
    from ..state.models import DFAState

    TDFA = TypeVar("TDFA", bound=DFA)

logger = get_persistence_logger(__name__)

Target = Union[str, "os.PathLike[str]", IO[str]]
FormatArg = Union[SerializationFormat, str, None]


def _is_path(target: Any) -> bool:
    return isinstance(target, (str, os.PathLike))


def _describe(target: Any) -> str:
    if _is_path(target):
        return str(Path(target))
    return getattr(target, "name", type(target).__name__)


def resolve_format(fmt: FormatArg, target: Any, config: EngineConfig) -> SerializationFormat:
    """
    Pick the encoding for a save or load.

    Priority order:
    1. Explicit format argument
    2. File suffix of a path target
    3. Configured default format
    """
    if fmt is not None:
        return SerializationFormat.coerce(fmt)
    if _is_path(target):
        inferred = infer_format(target)
        if inferred is not None:
            return inferred
    return SerializationFormat.coerce(config.persistence.default_format)


_SCALARS = (str, int, float, bool, type(None))


def check_plain(value: Any, where: str) -> None:
    """
    Reject values that would not read back unchanged.

    Documents carry only str, int, float, bool, None, lists and
    str-keyed dicts. Anything else (tuples, sets, int keys, objects) would
    come back as a different value, so it is refused before writing.

    Raises:
        SerializationError: With ``where`` naming the offending field
    """
    if isinstance(value, _SCALARS):
        return
    if isinstance(value, list):
        for index, item in enumerate(value):
            check_plain(item, f"{where}[{index}]")
        return
    if isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str):
                raise SerializationError(
                    f"{where} has non-string key {key!r}; document keys must be strings",
                    operation="save",
                )
            check_plain(item, f"{where}.{key}")
        return
    raise SerializationError(
        f"{where} holds {type(value).__name__}, which a document cannot carry unchanged",
        operation="save",
    )


def build_document(dfa: "DFA") -> dict[str, Any]:
    """
    Build the persisted form of ``dfa``; requires a current state.

    Raises:
        SerializationError: If a payload or context value is not plain data
    """
    states = []
    for state in dfa.states:
        entry = state.to_document()
        for name, value in entry.items():
            check_plain(value, f"state {state.id} field '{name}'")
        states.append(entry)

    document: dict[str, Any] = {
        "states": states,
        "current_id": dfa.current_id,
    }
    context = dfa.context()
    for name, value in context.items():
        check_plain(value, f"context field '{name}'")
    if context:
        document["context"] = context
    return document


def validate_document(data: Any) -> tuple[list[Any], int, dict[str, Any]]:
    """
    Check the document structure.

    Returns:
        Tuple of (state entries, current id, context mapping)

    Raises:
        SerializationError: If the document is not shaped as expected
    """
    if not isinstance(data, dict):
        raise SerializationError(
            f"Document must be a mapping, got {type(data).__name__}",
            operation="load",
        )

    states = data.get("states")
    if not isinstance(states, list):
        raise SerializationError("Document is missing the 'states' list", operation="load")

    current_id = data.get("current_id")
    if isinstance(current_id, bool) or not isinstance(current_id, int):
        raise SerializationError(
            f"Document has invalid current_id {current_id!r}",
            operation="load",
        )

    context = data.get("context", {})
    if not isinstance(context, dict):
        raise SerializationError("Document 'context' must be a mapping", operation="load")

    return states, current_id, context


def dumps(dfa: "DFA", fmt: FormatArg = None, config: Optional[EngineConfig] = None) -> str:
    """Encode ``dfa`` to a string."""
    config = config or get_engine_config()
    resolved = resolve_format(fmt, None, config)
    return get_codec(resolved, config).encode(build_document(dfa))


def save(
    dfa: "DFA",
    target: Target,
    fmt: FormatArg = None,
    config: Optional[EngineConfig] = None,
) -> None:
    """
    Write the states and current position of ``dfa`` to ``target``.

    The document is fully encoded before the destination is opened, so an
    encoding failure never truncates an existing file.

    Args:
        dfa: Started automaton to persist
        target: File path or writable text stream
        fmt: Encoding; inferred from the path suffix or config when omitted
        config: Engine configuration, process-wide default when omitted

    Raises:
        UnsupportedFormatError: If the format is not provided
        SerializationError: On I/O or encoding failure
        StateTransitionError: If ``dfa`` has no current state
    """
    config = config or get_engine_config()
    resolved = resolve_format(fmt, target, config)
    description = _describe(target)

    try:
        document = build_document(dfa)
        text = get_codec(resolved, config).encode(document)
    except SerializationError as e:
        e.target = description
        logger.error("save_failed", target=description, format=resolved.value, error=str(e))
        raise

    try:
        if _is_path(target):
            lookup_codec(config.persistence.encoding)
            with open(target, "w", encoding=config.persistence.encoding) as f:
                f.write(text)
        else:
            target.write(text)
    except (OSError, TypeError, ValueError, LookupError) as e:
        # Binary streams raise TypeError, unknown codecs LookupError
        logger.error("save_failed", target=description, format=resolved.value, error=str(e))
        raise SerializationError(
            f"Cannot write document: {e}",
            operation="save",
            target=description,
        ) from e

    logger.info(
        "automaton_saved",
        automaton=type(dfa).__name__,
        target=description,
        format=resolved.value,
        states=len(document["states"]),
        current_id=document["current_id"],
    )


def _read(source: Target, config: EngineConfig) -> str:
    description = _describe(source)
    try:
        if _is_path(source):
            with open(source, encoding=config.persistence.encoding) as f:
                return f.read()
        return source.read()
    except (OSError, ValueError, LookupError) as e:
        logger.error("load_failed", source=description, error=str(e))
        raise SerializationError(
            f"Cannot read document: {e}",
            operation="load",
            target=description,
        ) from e


def _rebuild(dfa_cls: type["TDFA"], data: Any, description: str) -> "TDFA":
    entries, current_id, context = validate_document(data)

    states: list["DFAState"] = []
    seen: set[int] = set()
    for entry in entries:
        state = dfa_cls.state_type.from_document(entry)
        if state.id in seen:
            raise SerializationError(
                f"Document lists state {state.id} more than once",
                operation="load",
                target=description,
            )
        seen.add(state.id)
        states.append(state)

    unknown_context = sorted(set(context) - set(dfa_cls.context_fields))
    if unknown_context:
        raise SerializationError(
            f"Document context has fields unknown to {dfa_cls.__name__}: "
            f"{', '.join(unknown_context)}",
            operation="load",
            target=description,
        )

    # Fresh instance runs its own definitions; its guards and behaviors
    # close over itself, so the persisted data is merged onto it.
    automaton = dfa_cls()
    registry = automaton.registry

    if current_id not in registry:
        logger.error(
            "graph_mismatch",
            automaton=dfa_cls.__name__,
            source=description,
            current_id=current_id,
            defined_ids=registry.ids(),
        )
        raise GraphMismatchError(
            f"Persisted current state {current_id} is not defined by {dfa_cls.__name__}",
            state_id=current_id,
            defined_ids=registry.ids(),
        )

    for state in states:
        if state.id in registry:
            state.behavior = registry.get(state.id).behavior
        else:
            logger.warning(
                "state_not_in_definition",
                automaton=dfa_cls.__name__,
                source=description,
                state_id=state.id,
            )

    automaton._restore(states, current_id, context)
    return automaton


def loads(
    dfa_cls: type["TDFA"],
    text: str,
    fmt: FormatArg = None,
    config: Optional[EngineConfig] = None,
) -> "TDFA":
    """Decode an automaton of type ``dfa_cls`` from a string."""
    config = config or get_engine_config()
    resolved = resolve_format(fmt, None, config)
    data = get_codec(resolved, config).decode(text)
    return _rebuild(dfa_cls, data, "<string>")


def load(
    dfa_cls: type["TDFA"],
    source: Target,
    fmt: FormatArg = None,
    config: Optional[EngineConfig] = None,
) -> "TDFA":
    """
    Rebuild an automaton of type ``dfa_cls`` from ``source``.

    Args:
        dfa_cls: Concrete automaton type; must be constructible without arguments
        source: File path or readable text stream
        fmt: Encoding; inferred from the path suffix or config when omitted
        config: Engine configuration, process-wide default when omitted

    Returns:
        Automaton positioned at the persisted state, with payloads from the
        document and transitions and behaviors from a fresh definition

    Raises:
        GraphMismatchError: If the persisted current state is no longer defined
        UnsupportedFormatError: If the format is not provided
        SerializationError: On I/O, decoding or document structure failure
    """
    config = config or get_engine_config()
    resolved = resolve_format(fmt, source, config)
    description = _describe(source)

    text = _read(source, config)
    try:
        data = get_codec(resolved, config).decode(text)
    except SerializationError as e:
        e.target = description
        logger.error("load_failed", source=description, format=resolved.value, error=str(e))
        raise

    automaton = _rebuild(dfa_cls, data, description)

    logger.info(
        "automaton_loaded",
        automaton=dfa_cls.__name__,
        source=description,
        format=resolved.value,
        states=len(automaton.registry),
        current_id=automaton.current_id,
    )
    return automaton
