"""Parameter ranges, identities and shared mapping utilities."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Dict, Mapping, Union

PARAM_ORDER = [
    "brightness",
    "contrast",
    "saturation",
    "hue",
    "exposure",
    "gamma",
    "shadows",
    "highlights",
    "vibrance",
]

PARAM_RANGES: Dict[str, tuple[float, float]] = {
    "brightness": (-100.0, 100.0),
    "contrast": (-100.0, 100.0),
    "saturation": (0.0, 2.0),
    "hue": (-180.0, 180.0),
    "exposure": (-2.0, 2.0),
    "gamma": (0.1, 3.0),
    "shadows": (-100.0, 100.0),
    "highlights": (-100.0, 100.0),
    "vibrance": (-100.0, 100.0),
}

IDENTITY_PARAMS: Dict[str, float] = {
    "brightness": 0,
    "contrast": 0.0,
    "saturation": 1.0,
    "hue": 0,
    "exposure": 0.0,
    "gamma": 1.0,
    "shadows": 0.0,
    "highlights": 0.0,
    "vibrance": 0.0,
}

INTEGER_PARAMS = frozenset({"brightness", "hue"})

# Slider values on the editor's integer scale; these are percentages.
PERCENT_SLIDERS = frozenset({"saturation", "gamma"})

SKIP_EPSILON = 0.001

# Public brightness [-100, 100] to the additive offset range of ``brighten``.
BRIGHTNESS_SCALE = 1.28


def _round_half_away(value: float) -> int:
    value = float(value)
    magnitude = int(abs(value) + 0.5)
    return -magnitude if value < 0 else magnitude


@dataclass(frozen=True)
class AdjustmentParameters:
    """Nine tone and color settings applied by the pipeline.

    Values outside ``PARAM_RANGES`` are accepted as-is; the operators
    extrapolate and clamp their pixel output instead of rejecting input.
    """

    brightness: int = 0
    contrast: float = 0.0
    saturation: float = 1.0
    hue: int = 0
    exposure: float = 0.0
    gamma: float = 1.0
    shadows: float = 0.0
    highlights: float = 0.0
    vibrance: float = 0.0

    @classmethod
    def from_mapping(cls, values: Mapping[str, float]) -> "AdjustmentParameters":
        unknown = sorted(set(values) - set(PARAM_ORDER))
        if unknown:
            raise ValueError(f"Unknown adjustment parameters: {', '.join(unknown)}")

        kwargs: Dict[str, Union[int, float]] = {}
        for key in PARAM_ORDER:
            raw = values.get(key, IDENTITY_PARAMS[key])
            if key in INTEGER_PARAMS:
                kwargs[key] = _round_half_away(raw)
            else:
                kwargs[key] = float(raw)
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    def is_identity(self) -> bool:
        return all(getattr(self, f.name) == IDENTITY_PARAMS[f.name] for f in fields(self))


def params_from_slider_values(sliders: Mapping[str, float]) -> AdjustmentParameters:
    """Map the editor's integer slider positions to real parameters.

    Saturation and gamma sliders run on a percent scale (100 = unchanged);
    the remaining sliders already use the public parameter scale.
    """

    values: Dict[str, float] = {}
    for key, value in sliders.items():
        if key in PERCENT_SLIDERS:
            values[key] = float(value) / 100.0
        else:
            values[key] = value
    return AdjustmentParameters.from_mapping(values)


def brightness_offset(brightness: int) -> int:
    return _round_half_away(brightness * BRIGHTNESS_SCALE)


def load_params_json(path: Union[str, Path]) -> AdjustmentParameters:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object of parameters")
    return AdjustmentParameters.from_mapping(data)
