"""
Logo Designer Backend — Legacy Format Translator
==================================================

What:  Rewrites canonical canvas backgrounds and gradients into the wire
       format that older mobile clients still parse.
Why:   Old app versions read gradient stops as `{color, position}` and expect
       inapplicable background fields to be missing, not null. Those clients
       are still installed, so the shape must stay exactly as they know it.
How:   Pure functions that build new dicts. Inputs are never mutated, and no
       input makes them raise: malformed values map to safe defaults.

Canonical vs legacy:
    canonical gradient: {"angle": 45, "stops": [{"hex": "#FF0000", "offset": 0}]}
    legacy gradient:    {"angle": 45, "stops": [{"color": "#FF0000", "position": 0}]}

    canonical background: {"type", "solidColor", "gradient", "image"} (nulls allowed)
    legacy background:    {"type"} plus only the fields that are present
"""

import copy
from typing import Any, Dict, Optional

DEFAULT_STOP_COLOR = "#000000"
DEFAULT_STOP_POSITION = 0
DEFAULT_ANGLE = 0
DEFAULT_BACKGROUND_TYPE = "solid"
DEFAULT_IMAGE_TYPE = "imported"


def _is_legacy_stops(stops: Any) -> bool:
    return (
        isinstance(stops, list)
        and len(stops) > 0
        and isinstance(stops[0], dict)
        and "color" in stops[0]
    )


def _legacy_stop(stop: Any) -> Dict[str, Any]:
    if not isinstance(stop, dict):
        return {"color": DEFAULT_STOP_COLOR, "position": DEFAULT_STOP_POSITION}

    color = stop.get("hex") or stop.get("color") or DEFAULT_STOP_COLOR
    position = stop.get("offset")
    if position is None:
        position = stop.get("position")
    if position is None:
        position = DEFAULT_STOP_POSITION
    return {"color": color, "position": position}


def to_legacy_gradient(gradient: Any) -> Optional[Dict[str, Any]]:
    """
    Translate one gradient to legacy stop keys.

    Already-legacy gradients (first stop has `color`) come back as an equal
    copy, so translating twice gives the same result as translating once.
    A gradient without a `stops` list translates to None.

    Example:
        >>> to_legacy_gradient({"angle": 90, "stops": [{"offset": 0.5}]})
        {'angle': 90, 'stops': [{'color': '#000000', 'position': 0.5}]}
    """
    if not isinstance(gradient, dict):
        return None

    stops = gradient.get("stops")
    if _is_legacy_stops(stops):
        return copy.deepcopy(gradient)
    if not isinstance(stops, list):
        return None

    angle = gradient.get("angle")
    return {
        "angle": DEFAULT_ANGLE if angle is None else angle,
        "stops": [_legacy_stop(stop) for stop in stops],
    }


def to_legacy_background(background: Any) -> Dict[str, Any]:
    """
    Translate a canvas background to the legacy shape.

    `type` is always emitted. `gradient`, `image` and `solidColor` are emitted
    only when the source has a usable value; they are omitted otherwise.
    """
    if not isinstance(background, dict):
        return {"type": DEFAULT_BACKGROUND_TYPE, "gradient": None}

    result: Dict[str, Any] = {"type": background.get("type") or DEFAULT_BACKGROUND_TYPE}

    if background.get("gradient") is not None:
        legacy_gradient = to_legacy_gradient(background["gradient"])
        if legacy_gradient is not None:
            result["gradient"] = legacy_gradient

    image = background.get("image")
    if isinstance(image, dict):
        result["image"] = {
            "type": image.get("type") or DEFAULT_IMAGE_TYPE,
            "path": image.get("path") or image.get("url"),
        }

    if background.get("solidColor"):
        result["solidColor"] = background["solidColor"]

    return result


def apply_legacy_if_requested(canvas: Any, want_legacy: bool) -> Any:
    """
    Return `canvas` untouched unless legacy output was asked for and the
    canvas has a background; otherwise a shallow copy with the background
    translated.
    """
    if not want_legacy or not isinstance(canvas, dict) or not canvas.get("background"):
        return canvas
    return {**canvas, "background": to_legacy_background(canvas["background"])}
