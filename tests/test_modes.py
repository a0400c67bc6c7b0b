import pytest

from model_processor.errors import SettingsError
from model_processor.modes import ORIGINAL_INPUT_KEY, OutputMode


def test_parse_is_case_insensitive() -> None:
    assert OutputMode.parse("payload") is OutputMode.PAYLOAD
    assert OutputMode.parse(" Header ") is OutputMode.HEADER
    assert OutputMode.parse("TUPLE") is OutputMode.TUPLE


def test_parse_rejects_unknown_mode() -> None:
    with pytest.raises(SettingsError) as excinfo:
        OutputMode.parse("stream")
    assert "payload, header, tuple" in str(excinfo.value)


def test_only_payload_discards_input() -> None:
    assert not OutputMode.PAYLOAD.passes_input_through
    assert OutputMode.HEADER.passes_input_through
    assert OutputMode.TUPLE.passes_input_through


def test_reserved_tuple_key() -> None:
    assert ORIGINAL_INPUT_KEY == "original.input.data"
    assert len(OutputMode) == 3
