from __future__ import annotations

import os
from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field

DegreeRounding = Literal["ROUND_HALF_UP", "ROUND_HALF_EVEN", "ROUND_DOWN"]


class DegreeSettings(BaseModel):
    """
    Fixed-precision context for every stored degree value.

    `places=6` keeps microdegrees (~11cm of latitude), which is what coordinates,
    window bounds and formatted output are quantized to.
    """

    places: int = Field(default=6, ge=0, le=15)
    rounding: DegreeRounding = "ROUND_HALF_UP"


def settings_path() -> Path | None:
    raw = (os.getenv("LATLNG_SETTINGS_PATH") or "").strip()
    return Path(raw) if raw else None


def _load_yaml(path: Path) -> dict[str, Any]:
    raw = path.read_text(encoding="utf-8")
    data = yaml.safe_load(raw) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid settings yaml root: {path}")
    return data


def _env_overrides() -> dict[str, Any]:
    out: dict[str, Any] = {}
    raw_places = (os.getenv("LATLNG_DEGREE_PLACES") or "").strip()
    if raw_places:
        try:
            out["places"] = int(raw_places)
        except ValueError:
            # Ignore junk; file/default value wins.
            pass
    raw_rounding = (os.getenv("LATLNG_DEGREE_ROUNDING") or "").strip().upper()
    if raw_rounding:
        out["rounding"] = raw_rounding
    return out


@lru_cache(maxsize=1)
def load_degree_settings() -> DegreeSettings:
    """
    Resolve settings with precedence env > yaml file > defaults.
    """
    data: dict[str, Any] = {}
    path = settings_path()
    if path is not None and path.exists():
        data.update(_load_yaml(path))
    data.update(_env_overrides())
    return DegreeSettings.model_validate(data)


def clear_settings_cache() -> None:
    """
    Forget the cached settings so env/file changes are picked up.
    """
    load_degree_settings.cache_clear()


def degree_quantum() -> Decimal:
    return Decimal(1).scaleb(-load_degree_settings().places)


def to_degrees(value: float | int | str | Decimal) -> Decimal:
    """
    Convert an incoming degree value into the quantized Decimal representation.

    Floats are converted exactly (no repr round-trip) and then rounded once.
    """
    settings = load_degree_settings()
    d = value if isinstance(value, Decimal) else Decimal(value)
    return d.quantize(degree_quantum(), rounding=settings.rounding)
