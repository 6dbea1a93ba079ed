"""
HuePick API Schemas
Pydantic models for color descriptions and sampling/palette request validation.
"""
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field


class RGBValues(BaseModel):
    r: int = Field(..., ge=0, le=255)
    g: int = Field(..., ge=0, le=255)
    b: int = Field(..., ge=0, le=255)


class HSLValues(BaseModel):
    h: int = Field(..., ge=0, lt=360, description="Hue in degrees")
    s: int = Field(..., ge=0, le=100, description="Saturation percent")
    l: int = Field(..., ge=0, le=100, description="Lightness percent")


class HSVValues(BaseModel):
    h: int = Field(..., ge=0, lt=360, description="Hue in degrees")
    s: int = Field(..., ge=0, le=100, description="Saturation percent")
    v: int = Field(..., ge=0, le=100, description="Value percent")


class CMYKValues(BaseModel):
    c: float = Field(..., ge=0.0, le=1.0)
    m: float = Field(..., ge=0.0, le=1.0)
    y: float = Field(..., ge=0.0, le=1.0)
    k: float = Field(..., ge=0.0, le=1.0)


class YUVValues(BaseModel):
    y: float
    u: float
    v: float


class LabValues(BaseModel):
    l: int
    a: int
    b: int


class RYBValues(BaseModel):
    r: int = Field(..., ge=0, le=255)
    y: int = Field(..., ge=0, le=255)
    b: int = Field(..., ge=0, le=255)


class ColorDescription(BaseModel):
    """A color expanded into every supported model plus its nearest name."""
    hex: str = Field(..., pattern=r"^#[0-9a-f]{6}$", description="Hex color code #rrggbb")
    alpha: int = Field(255, ge=0, le=255, description="Alpha of the sampled pixel")
    rgb: RGBValues
    hsl: HSLValues
    hsv: HSVValues
    cmyk: CMYKValues
    yuv: YUVValues
    lab: LabValues
    ryb: RYBValues
    name: str = Field(..., description="Nearest named color")
    brightness: float = Field(..., description="Perceived brightness (0-255)")
    contrast_color: str = Field(..., description="Suggested text color on this background")


class HealthResponse(BaseModel):
    """Health check response."""
    ok: bool = Field(True, description="Service health status")
    version: str = Field(..., description="Service version")
    service: str = Field("huepick", description="Service name")


class ConvertRequest(BaseModel):
    """Generic color model conversion request."""
    value: Union[str, Dict[str, float], List[float]] = Field(..., description="Color in the source model")
    from_format: str = Field(..., description="Source model tag")
    to_format: str = Field(..., description="Target model tag")


class ConvertResponse(BaseModel):
    result: Union[str, Dict[str, Any]]


class NameResponse(BaseModel):
    hex: str
    name: str
    language: str


class SampleRequest(BaseModel):
    """Sampling request against an image URI."""
    uri: str = Field(..., min_length=1, description="Image path, file:// or data: URI")
    mode: Literal["point", "region", "center", "grid"] = "point"
    x: Optional[int] = Field(None, description="Column for point/region modes")
    y: Optional[int] = Field(None, description="Row for point/region modes")
    radius: int = Field(2, ge=0, le=50)
    grid_size: int = Field(3, ge=1, le=16)
    language: str = Field("en", pattern="^(en|vi)$")


class PaletteRequest(BaseModel):
    """Palette extraction request."""
    uri: str = Field(..., min_length=1)
    strategy: Literal["dominant", "adaptive", "perceptual"] = "dominant"
    max_colors: int = Field(5, ge=1, le=32)
    sample_rate: int = Field(1, ge=1, le=1000, description="Pixel stride for the dominant strategy")
    quality_level: int = Field(3, ge=1, le=5, description="Sampling density for the adaptive strategy")
    language: str = Field("en", pattern="^(en|vi)$")


class SampleResponse(BaseModel):
    extractor: str
    colors: List[ColorDescription]


class HarmonyResponse(BaseModel):
    base: str
    scheme: str
    colors: List[str]
