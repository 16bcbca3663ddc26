from __future__ import annotations

import logging
import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass

logger = logging.getLogger(__name__)

Listener = Callable[[str, float], None]


@dataclass(frozen=True)
class ParameterSpec:
    name: str
    label: str
    min_value: float
    max_value: float
    default: float
    step: float

    def clamp(self, value: float) -> float:
        return max(self.min_value, min(self.max_value, float(value)))


SCALE = ParameterSpec("scale", "Scale", 0.0, 0.01, 0.01, 0.0001)
OFFSET_X = ParameterSpec("offset_x", "Offset X", 0.0, 1000.0, 0.0, 1.0)
OFFSET_Y = ParameterSpec("offset_y", "Offset Y", 0.0, 1000.0, 0.0, 1.0)
SEA_LEVEL = ParameterSpec("sea_level", "Sea Level", -1.0, 1.0, 0.5, 0.01)


def parameter_specs(*, threshold: bool = True) -> tuple[ParameterSpec, ...]:
    """Specs in control layout order."""
    base = (SCALE, OFFSET_X, OFFSET_Y)
    return base + (SEA_LEVEL,) if threshold else base


def parameter_bounds(*, threshold: bool = True) -> dict[str, tuple[float, float]]:
    return {s.name: (s.min_value, s.max_value) for s in parameter_specs(threshold=threshold)}


@dataclass(frozen=True)
class SamplingParameters:
    scale: float
    offset_x: float
    offset_y: float
    sea_level: float | None = None

    @property
    def offset(self) -> tuple[float, float]:
        return (self.offset_x, self.offset_y)


def default_parameters(*, threshold: bool = True) -> SamplingParameters:
    return SamplingParameters(
        scale=SCALE.default,
        offset_x=OFFSET_X.default,
        offset_y=OFFSET_Y.default,
        sea_level=SEA_LEVEL.default if threshold else None,
    )


class ParameterStore:
    """Current sampling parameters plus a dirty flag.

    Edits are clamped to each parameter's declared range. A NaN edit is
    dropped. Only an edit that changes the stored value marks the store dirty
    and notifies listeners; listeners run synchronously inside `set_parameter`.
    """

    def __init__(self, *, threshold: bool = True):
        self.threshold = bool(threshold)
        self._specs = {s.name: s for s in parameter_specs(threshold=self.threshold)}
        self._values = {name: s.default for name, s in self._specs.items()}
        self._listeners: list[Listener] = []
        self._dirty = True

    def specs(self) -> tuple[ParameterSpec, ...]:
        return tuple(self._specs.values())

    def spec(self, name: str) -> ParameterSpec:
        try:
            return self._specs[name]
        except KeyError:
            raise KeyError(f"unknown parameter: {name}") from None

    def bounds(self, name: str) -> tuple[float, float]:
        s = self.spec(name)
        return (s.min_value, s.max_value)

    def get(self, name: str) -> float:
        self.spec(name)
        return self._values[name]

    @property
    def dirty(self) -> bool:
        return self._dirty

    def mark_clean(self) -> None:
        self._dirty = False

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_parameter(self, name: str, value: float) -> bool:
        """Apply one edit. Returns True if the stored value changed."""

        s = self.spec(name)
        if isinstance(value, (bool, str, bytes)):
            raise TypeError(f"{name} must be a number, got {type(value).__name__}")
        try:
            v = float(value)
        except OverflowError:
            # Integers past float range; the clamp below takes them to a bound.
            v = math.inf if value > 0 else -math.inf
        except (TypeError, ValueError):
            raise TypeError(f"{name} must be a number, got {type(value).__name__}") from None

        if math.isnan(v):
            logger.warning("ignoring NaN for %s", name)
            return False

        clamped = s.clamp(v)
        if clamped != v:
            logger.warning("%s=%r outside [%s, %s], clamped to %s", name, v, s.min_value, s.max_value, clamped)

        if clamped == self._values[name]:
            return False

        self._values[name] = clamped
        self._dirty = True
        logger.debug("%s -> %s", name, clamped)
        for listener in list(self._listeners):
            listener(name, clamped)
        return True

    def update(self, edits: Mapping[str, float]) -> bool:
        changed = False
        for name, value in edits.items():
            changed = self.set_parameter(name, value) or changed
        return changed

    def reset(self) -> bool:
        return self.update({name: s.default for name, s in self._specs.items()})

    def parameters(self) -> SamplingParameters:
        return SamplingParameters(
            scale=self._values["scale"],
            offset_x=self._values["offset_x"],
            offset_y=self._values["offset_y"],
            sea_level=self._values.get("sea_level"),
        )
