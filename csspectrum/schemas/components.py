import math
from typing import Callable, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .. import config as c
from ..matrices import Matrix3, as_matrix, invert


class ComponentDefinition(BaseModel):
    """
    Metadata for one channel of a color model.

    Loop channels (hues) wrap modulo (max - min); every other channel is
    clamped to [min, max]. step is the grain values are rounded to before
    formatting. reference scales percentages for channels whose bounds are
    unbounded (lab a/b, lch C, ...).
    """

    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=0)
    min: float
    max: float
    step: float = Field(gt=0)
    loop: bool = False
    reference: Optional[float] = None

    @model_validator(mode="after")
    def _check_bounds(self):
        if self.min > self.max:
            raise ValueError(f"min {self.min} is above max {self.max}")
        if self.loop and not (math.isfinite(self.min) and math.isfinite(self.max)):
            raise ValueError("loop channels need finite bounds")
        return self

    @property
    def decimals(self) -> int:
        """Number of fractional digits implied by step."""
        return max(0, -math.floor(math.log10(self.step) + 1e-9))

    def fit(self, value: float) -> float:
        """Wrap (loop) or clamp a raw value into the channel range."""
        if math.isnan(value):
            return value
        if self.loop:
            if not math.isfinite(value):
                return math.nan
            span = self.max - self.min
            return self.min + (value - self.min) % span
        return max(self.min, min(self.max, value))

    def quantize(self, value: float) -> float:
        """
        Round to the nearest multiple of step, exact halves going down.

        Float noise below 1e-9 of a step is snapped off first so a half step
        reached through a conversion round trip resolves the same way as a
        literal one.
        """
        if not math.isfinite(value):
            return value
        steps = round(value / self.step, c.QUANTIZE_SNAP_DIGITS)
        if not math.isfinite(steps):
            return value
        return math.ceil(steps - 0.5) * self.step

    def normalize(self, value: float) -> float:
        """The value a formatter sees: fitted into range and quantized."""
        if self.loop:
            return self.fit(self.quantize(self.fit(value)))
        return self.quantize(self.fit(value))

    def from_percent(self, percent: float) -> float:
        if self.reference is not None:
            return percent / c.PERCENT * self.reference
        return self.min + percent / c.PERCENT * (self.max - self.min)

    def contains(self, value: float, tolerance: float = c.GAMUT_EPS) -> bool:
        if math.isnan(value):
            return False
        return self.min - tolerance <= value <= self.max + tolerance


ALPHA = ComponentDefinition(index=3, min=0.0, max=1.0, step=c.ALPHA_STEP)


def _identity(v: float) -> float:
    return v


class SpaceDescriptor(BaseModel):
    """
    Declarative description of an RGB-like color() space.

    to_xyz_matrix maps linear components to XYZ under the space's own white;
    from_xyz_matrix is derived by inversion when omitted.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    components: List[str] = Field(default_factory=lambda: ["r", "g", "b"])
    to_linear: Callable[[float], float] = _identity
    from_linear: Callable[[float], float] = _identity
    to_xyz_matrix: Matrix3
    from_xyz_matrix: Optional[Matrix3] = None
    white: Literal["d65", "d50"] = "d65"
    min: float = 0.0
    max: float = 1.0
    step: float = Field(default=c.SPACE_STEP, gt=0)

    @field_validator("components")
    @classmethod
    def _three_components(cls, v: List[str]) -> List[str]:
        if len(v) != 3 or len(set(v)) != 3:
            raise ValueError("a space needs exactly three distinct component names")
        if "alpha" in v:
            raise ValueError("'alpha' is reserved")
        return [name.lower() for name in v]

    @field_validator("to_xyz_matrix", "from_xyz_matrix", mode="before")
    @classmethod
    def _square(cls, v):
        if v is None:
            return v
        return as_matrix(v)

    @model_validator(mode="after")
    def _derive_inverse(self):
        if self.from_xyz_matrix is None:
            self.from_xyz_matrix = invert(self.to_xyz_matrix)
        return self
