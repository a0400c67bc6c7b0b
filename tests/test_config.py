from __future__ import annotations

import pytest

from model_processor.config import ModelProcessorConfig, validate
from model_processor.errors import MissingRequiredFieldError
from model_processor.expression import NO_EXPRESSION
from model_processor.locator import ModelLocator
from model_processor.modes import OutputMode


def _locator() -> ModelLocator:
    return ModelLocator.parse("file:///models/frozen_graph.pb")


def test_defaults_with_model_set() -> None:
    config = ModelProcessorConfig(model=_locator())
    assert config.mode is OutputMode.PAYLOAD
    assert config.output_name == "result"
    assert config.expression is NO_EXPRESSION
    assert config.model_fetch is None
    assert validate(config).ok


def test_missing_model_fails_regardless_of_other_fields() -> None:
    config = ModelProcessorConfig(
        model_fetch=["output"],
        mode=OutputMode.HEADER,
        output_name="scores",
    )
    result = validate(config)
    assert not result.ok
    assert result.missing == ("model",)
    with pytest.raises(MissingRequiredFieldError) as excinfo:
        config.require_valid()
    assert excinfo.value.fields == ("model",)
    assert "model" in str(excinfo.value)


def test_null_mode_fails_validation() -> None:
    config = ModelProcessorConfig(model=_locator())
    config.mode = None
    with pytest.raises(MissingRequiredFieldError) as excinfo:
        config.require_valid()
    assert excinfo.value.fields == ("mode",)


def test_all_missing_fields_reported_in_order() -> None:
    config = ModelProcessorConfig(mode=None)
    assert validate(config).missing == ("model", "mode")


@pytest.mark.parametrize("mode", list(OutputMode))
def test_mode_round_trip(mode: OutputMode) -> None:
    config = ModelProcessorConfig(model=_locator())
    config.mode = mode
    assert config.mode is mode
    assert config.require_valid() is config


def test_model_fetch_keeps_order_and_accepts_empty() -> None:
    config = ModelProcessorConfig(model=_locator(), model_fetch=[])
    assert config.model_fetch == []
    config.model_fetch = ["detection_scores", "detection_boxes", "num_detections"]
    assert config.model_fetch == ["detection_scores", "detection_boxes", "num_detections"]


def test_output_name_override_is_preserved() -> None:
    config = ModelProcessorConfig(model=_locator(), output_name=" Labels.v2 ")
    assert config.output_name == " Labels.v2 "


def test_to_dict_uses_option_names() -> None:
    config = ModelProcessorConfig(model=_locator(), model_fetch=["out"], mode=OutputMode.TUPLE)
    assert config.to_dict() == {
        "model": "file:///models/frozen_graph.pb",
        "model-fetch": ["out"],
        "expression": None,
        "mode": "tuple",
        "output-name": "result",
    }
