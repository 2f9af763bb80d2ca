"""Supported document encodings."""

from enum import Enum
from pathlib import Path
from typing import Optional, Union

from ..errors import UnsupportedFormatError


class SerializationFormat(str, Enum):
    """Document encodings the engine can read and write."""
    JSON = "json"
    YAML = "yaml"

    @classmethod
    def coerce(cls, value: Union["SerializationFormat", str]) -> "SerializationFormat":
        """Accept a member or a case-insensitive name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise UnsupportedFormatError(
            f"Unsupported serialization format: {value!r}",
            requested=value,
            supported=[fmt.value for fmt in cls],
        )


_SUFFIXES = {
    ".json": SerializationFormat.JSON,
    ".yaml": SerializationFormat.YAML,
    ".yml": SerializationFormat.YAML,
}


def infer_format(path: Union[str, Path]) -> Optional[SerializationFormat]:
    """Guess the format from a file suffix."""
    return _SUFFIXES.get(Path(path).suffix.lower())
