"""Text codecs turning automaton documents into strings and back."""

import json
from abc import ABC, abstractmethod
from typing import Any, Optional

import yaml

from ..config.defaults import EngineConfig
from ..config.loader import get_engine_config
from ..errors import SerializationError
from .formats import SerializationFormat


class DocumentCodec(ABC):
    """Base class for document encodings."""

    format: SerializationFormat

    @abstractmethod
    def encode(self, document: dict[str, Any]) -> str:
        """Render a document as text."""

    @abstractmethod
    def decode(self, text: str) -> Any:
        """Parse text into a document (structure is checked by the caller)."""


class JsonCodec(DocumentCodec):
    """JSON encoding."""

    format = SerializationFormat.JSON

    def __init__(self, indent: Optional[int] = 2):
        self.indent = indent

    def encode(self, document: dict[str, Any]) -> str:
        try:
            return json.dumps(document, indent=self.indent)
        except (TypeError, ValueError) as e:
            raise SerializationError(
                f"JSON encoding error: {e}", operation="encode"
            ) from e

    def decode(self, text: str) -> Any:
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise SerializationError(
                f"JSON decoding error: {e}", operation="decode"
            ) from e


class YamlCodec(DocumentCodec):
    """YAML encoding, restricted to plain data types."""

    format = SerializationFormat.YAML

    def encode(self, document: dict[str, Any]) -> str:
        try:
            return yaml.safe_dump(document, sort_keys=False, default_flow_style=False)
        except yaml.YAMLError as e:
            raise SerializationError(
                f"YAML encoding error: {e}", operation="encode"
            ) from e

    def decode(self, text: str) -> Any:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise SerializationError(
                f"YAML decoding error: {e}", operation="decode"
            ) from e


def get_codec(fmt: SerializationFormat, config: Optional[EngineConfig] = None) -> DocumentCodec:
    """Return the codec for ``fmt`` configured from ``config``."""
    config = config or get_engine_config()
    if fmt == SerializationFormat.JSON:
        return JsonCodec(indent=config.persistence.json_indent)
    return YamlCodec()
