"""
Automaton persistence.

Saves an automaton's states and position as a JSON or YAML document and
rebuilds a working automaton from one.
"""
from .codecs import DocumentCodec, JsonCodec, YamlCodec, get_codec
from .formats import SerializationFormat, infer_format
from .store import build_document, dumps, load, loads, save, validate_document

__all__ = [
    "DocumentCodec",
    "JsonCodec",
    "SerializationFormat",
    "YamlCodec",
    "build_document",
    "dumps",
    "get_codec",
    "infer_format",
    "load",
    "loads",
    "save",
    "validate_document",
]
