"""
HuePick v1 API Routes
Thin HTTP adapter over the color analyzer: describe, convert, name, sample, palette, harmony.
"""
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Query

from huepick.config import config
from huepick.errors import UnsupportedFormatError
from huepick.schemas import (
    ColorDescription, ConvertRequest, ConvertResponse, HarmonyResponse,
    NameResponse, PaletteRequest, SampleRequest, SampleResponse
)
from huepick.services.colors.convert import convert_color
from huepick.services.colors.harmony import generate_palette
from huepick.services.colors.naming import find_nearest_color_name
from huepick.services.orchestrator import ColorAnalyzer, describe_color
from huepick.utils.logging import get_logger

router = APIRouter(prefix="/v1", tags=["Colors"])

_analyzer: ColorAnalyzer = None


def get_analyzer() -> ColorAnalyzer:
    """Shared analyzer; its buffer cache lives for the process."""
    global _analyzer
    if _analyzer is None:
        _analyzer = ColorAnalyzer()
    return _analyzer


def _serialize(value: Any) -> Any:
    if hasattr(value, "_asdict"):
        return dict(value._asdict())
    return value


@router.get("/colors/describe", response_model=ColorDescription,
            summary="Describe a color in every supported model")
async def describe(
    hex: str = Query(..., description="Hex color, e.g. #3b82f6"),
    lang: str = Query(config.DEFAULT_LANGUAGE, pattern="^(en|vi)$"),
) -> ColorDescription:
    return describe_color(hex, lang)


@router.post("/colors/convert", response_model=ConvertResponse,
             summary="Convert a color between models")
async def convert(request: ConvertRequest) -> Dict[str, Any]:
    try:
        result = convert_color(request.value, request.from_format, request.to_format)
    except UnsupportedFormatError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (KeyError, TypeError) as e:
        raise HTTPException(status_code=422, detail=f"Invalid {request.from_format} value: {e}")
    return {"result": _serialize(result)}


@router.get("/colors/name", response_model=NameResponse,
            summary="Nearest named color")
async def name(
    hex: str = Query(..., description="Hex color #RRGGBB"),
    lang: str = Query(config.DEFAULT_LANGUAGE, pattern="^(en|vi)$"),
) -> Dict[str, str]:
    return {"hex": hex, "name": find_nearest_color_name(hex, lang), "language": lang}


@router.post("/colors/sample", response_model=SampleResponse,
             summary="Sample colors from an image")
async def sample(request: SampleRequest, analyzer: ColorAnalyzer = Depends(get_analyzer)) -> Dict[str, Any]:
    if request.mode in ("point", "region") and (request.x is None or request.y is None):
        raise HTTPException(status_code=422, detail=f"x and y are required for {request.mode} mode")

    if request.mode == "grid":
        colors = await analyzer.sample_grid(request.uri, request.grid_size, request.language)
    else:
        if request.mode == "point":
            color = await analyzer.sample_point(request.uri, request.x, request.y, request.language)
        elif request.mode == "region":
            color = await analyzer.sample_region(request.uri, request.x, request.y, request.radius, request.language)
        else:
            color = await analyzer.sample_center(request.uri, request.language)
        colors = [color] if color is not None else []

    get_logger().log_sample(request.uri, request.mode, analyzer.extractor.name, len(colors))
    if not colors:
        raise HTTPException(status_code=404, detail="No color extracted")

    return {"extractor": analyzer.extractor.name, "colors": colors}


@router.post("/colors/palette", response_model=SampleResponse,
             summary="Extract a ranked palette from an image")
async def palette(request: PaletteRequest, analyzer: ColorAnalyzer = Depends(get_analyzer)) -> Dict[str, Any]:
    colors = await analyzer.extract_palette(
        request.uri,
        strategy=request.strategy,
        max_colors=request.max_colors,
        sample_rate=request.sample_rate,
        quality_level=request.quality_level,
        language=request.language,
    )
    if not colors:
        raise HTTPException(status_code=404, detail="No color extracted")
    return {"extractor": request.strategy, "colors": colors}


@router.get("/colors/harmony", response_model=HarmonyResponse,
            summary="Generate a harmony palette from a base color")
async def harmony(
    hex: str = Query(..., description="Base color #RRGGBB"),
    scheme: str = Query("complementary", pattern="^(complementary|analogous|monochromatic|triadic|tetradic)$"),
    count: int = Query(4, ge=1, le=12),
) -> Dict[str, Any]:
    colors = generate_palette(hex, scheme, count)
    return {"base": colors[0], "scheme": scheme, "colors": colors}
