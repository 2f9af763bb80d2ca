"""Tests for document codecs and formats."""

import pytest

from dfa_engine.config.defaults import EngineConfig, PersistenceParams
from dfa_engine.errors import SerializationError, UnsupportedFormatError
from dfa_engine.persistence import (
    JsonCodec,
    SerializationFormat,
    YamlCodec,
    get_codec,
    infer_format,
)

DOCUMENT = {"states": [{"id": 0, "weight": 1.5}, {"id": 2, "weight": 2.5}], "current_id": 2}


class TestSerializationFormat:
    """Test format coercion."""

    @pytest.mark.parametrize("value,expected", [
        ("json", SerializationFormat.JSON),
        ("JSON", SerializationFormat.JSON),
        (" yaml ", SerializationFormat.YAML),
        (SerializationFormat.YAML, SerializationFormat.YAML),
    ])
    def test_coerce(self, value, expected):
        assert SerializationFormat.coerce(value) is expected

    @pytest.mark.parametrize("value", ["xml", "", 3, None])
    def test_coerce_unsupported(self, value):
        with pytest.raises(UnsupportedFormatError):
            SerializationFormat.coerce(value)

    def test_infer_format(self):
        assert infer_format("a/b/state.json") is SerializationFormat.JSON
        assert infer_format("state.yaml") is SerializationFormat.YAML
        assert infer_format("state.txt") is None


class TestCodecs:
    """Test JSON and YAML codecs."""

    def test_json_preserves_state_order(self):
        text = JsonCodec().encode(DOCUMENT)

        assert text.index('"id": 0') < text.index('"id": 2')
        assert JsonCodec().decode(text) == DOCUMENT

    def test_json_compact(self):
        assert "\n" not in JsonCodec(indent=None).encode(DOCUMENT)

    def test_yaml_preserves_key_order(self):
        text = YamlCodec().encode(DOCUMENT)

        assert text.index("states") < text.index("current_id")
        assert YamlCodec().decode(text) == DOCUMENT

    def test_json_encode_failure(self):
        with pytest.raises(SerializationError) as exc_info:
            JsonCodec().encode({"states": [], "current_id": object()})

        assert exc_info.value.operation == "encode"

    def test_yaml_encode_failure(self):
        with pytest.raises(SerializationError):
            YamlCodec().encode({"current_id": object()})

    def test_json_decode_failure(self):
        with pytest.raises(SerializationError) as exc_info:
            JsonCodec().decode("{")

        assert exc_info.value.operation == "decode"

    def test_yaml_decode_failure(self):
        with pytest.raises(SerializationError):
            YamlCodec().decode("states: [unclosed")

    def test_yaml_refuses_python_tags(self):
        with pytest.raises(SerializationError):
            YamlCodec().decode("!!python/object/apply:os.system ['true']")

    def test_get_codec_uses_config(self):
        config = EngineConfig(persistence=PersistenceParams(json_indent=4))

        codec = get_codec(SerializationFormat.JSON, config)

        assert isinstance(codec, JsonCodec)
        assert codec.indent == 4
        assert isinstance(get_codec(SerializationFormat.YAML, config), YamlCodec)
