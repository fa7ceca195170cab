"""Saving and restoring the tremolo parameters as JSON."""

from __future__ import annotations

import json
from typing import Any, Union

from tremolokit.parameters import Parameters

PLUGIN_NAME = "Tremolo_Plugin"
MARSHALLING_VERSION = 1

_VERSION_KEY = "__version__"
_PARSE_FAILURE = "failed to parse parameters from JSON representation"


class DeserializationError(ValueError):
    """Raised when saved parameters cannot be restored."""


def serialize(parameters: Parameters, plugin_name: str = PLUGIN_NAME) -> str:
    """Return the parameters as an indented JSON document."""
    document = {
        _VERSION_KEY: MARSHALLING_VERSION,
        "pluginName": plugin_name,
        "modulationRateHz": round(parameters.rate.get(), 2),
        "bypassed": parameters.bypassed.get(),
        "modulationWaveform": parameters.waveform.current_choice_name(),
    }
    return json.dumps(document, indent=2, ensure_ascii=False)


def deserialize(
    text: Union[str, bytes], parameters: Parameters, plugin_name: str = PLUGIN_NAME
) -> None:
    """Update ``parameters`` from a JSON document.

    Raises DeserializationError and leaves every parameter untouched if the
    document cannot be used.
    """
    if isinstance(text, (bytes, bytearray)):
        try:
            text = bytes(text).decode("utf-8")
        except UnicodeDecodeError as error:
            raise DeserializationError(f"input is not valid UTF-8: {error}") from error
    try:
        document = json.loads(text)
    except json.JSONDecodeError as error:
        raise DeserializationError(f"invalid JSON: {error}") from error

    if not isinstance(document, dict):
        raise DeserializationError(_PARSE_FAILURE)
    version = document.get(_VERSION_KEY)
    if isinstance(version, bool) or version != MARSHALLING_VERSION:
        raise DeserializationError(f"unsupported format version: {version!r}")
    if document.get("pluginName") != plugin_name:
        raise DeserializationError(
            f"state belongs to {document.get('pluginName')!r}, not {plugin_name!r}"
        )

    rate = _field(document, "modulationRateHz")
    bypassed = _field(document, "bypassed")
    waveform = _field(document, "modulationWaveform")
    if isinstance(rate, bool) or not isinstance(rate, (int, float)):
        raise DeserializationError(_PARSE_FAILURE)
    if not isinstance(bypassed, bool) or not isinstance(waveform, str):
        raise DeserializationError(_PARSE_FAILURE)

    choices = parameters.waveform.choices
    if waveform not in choices:
        raise DeserializationError(
            "invalid modulation waveform name; supported values are: "
            + ", ".join(choices)
        )

    parameters.waveform.set_index(choices.index(waveform))
    parameters.rate.set(float(rate))
    parameters.bypassed.set(bypassed)


def _field(document: dict, key: str) -> Any:
    try:
        return document[key]
    except KeyError:
        raise DeserializationError(_PARSE_FAILURE) from None