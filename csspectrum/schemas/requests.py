from typing import Annotated, List, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field


class RGBA(BaseModel):
    r: int = Field(ge=0, le=255)
    g: int = Field(ge=0, le=255)
    b: int = Field(ge=0, le=255)
    a: float = Field(default=1.0, ge=0.0, le=1.0)


def _validate_css_color(v: str) -> str:
    # deferred: the color module imports this package
    from ..api import is_parsable

    if not is_parsable(v):
        raise ValueError("Invalid CSS color")
    return v


CssColorString = Annotated[str, AfterValidator(_validate_css_color)]


class FormattingOptions(BaseModel):
    model_config = ConfigDict(extra="forbid")

    modern: bool = Field(False, description="Space/slash syntax instead of legacy commas for rgb() and hsl()")
    precision: Optional[int] = Field(None, ge=0, le=12, description="Fractional digits, overriding each channel's step")


class ToNextColorOptions(FormattingOptions):
    exclude: List[str] = Field(default_factory=list, description="Formats skipped while cycling")


class ColorConvertRequest(BaseModel):
    code: CssColorString = Field(..., description="The CSS color code to convert")
    target: str = Field(..., description="The target format or color() space to convert to")
    modern: bool = False
    precision: Optional[int] = Field(None, ge=0, le=12)
