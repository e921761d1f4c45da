"""
Decoded EasyEDA entities.

Everything here is still in EasyEDA source units (10 mil) and in the source
coordinate frame. Records keep the raw short codes found in the payload; the
typed view is exposed through properties so that codes we do not know survive
for diagnostics instead of being silently mapped to a default.
"""

from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field


class _CodeEnum(str, Enum):
    @classmethod
    def parse(cls, code: str) -> "_CodeEnum":
        try:
            return cls(code)
        except ValueError:
            return cls.UNKNOWN


class ShapeTag(_CodeEnum):
    PIN = "P"
    RECTANGLE = "R"
    PAD = "PAD"
    TRACK = "TRACK"
    TEXT = "TEXT"
    CIRCLE = "CIRCLE"
    ARC = "ARC"
    MODEL_3D = "SVGNODE"
    UNKNOWN = "?"


class PadShapeCode(_CodeEnum):
    ELLIPSE = "ELLIPSE"
    RECT = "RECT"
    OVAL = "OVAL"
    POLYGON = "POLYGON"
    UNKNOWN = "?"


class PinTypeCode(_CodeEnum):
    UNDEFINED = "0"
    INPUT = "1"
    OUTPUT = "2"
    BIDIRECTIONAL = "3"
    POWER = "4"
    UNKNOWN = "?"


class TextTypeCode(_CodeEnum):
    PREFIX = "P"  # the part value
    NAME = "N"  # the reference designator
    LABEL = "L"
    UNKNOWN = "?"


# --- Symbol ---


class SymbolInfo(BaseModel):
    name: str = "Unknown"
    prefix: str = "U"
    package: Optional[str] = None
    datasheet: Optional[str] = None
    lcsc_id: Optional[str] = None
    is_extended: bool = False

    class Config:
        frozen = True


class SymbolPin(BaseModel):
    number: str
    name: str
    x: float = 0.0
    y: float = 0.0
    rotation: int = 0
    type_code: str = ""
    length: float = 0.0

    class Config:
        frozen = True

    @property
    def pin_type(self) -> PinTypeCode:
        return PinTypeCode.parse(self.type_code)


class SymbolRectangle(BaseModel):
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    class Config:
        frozen = True


class DecodedSymbol(BaseModel):
    info: SymbolInfo
    bbox_x: float = 0.0
    bbox_y: float = 0.0
    pins: List[SymbolPin] = Field(default_factory=list)
    rectangles: List[SymbolRectangle] = Field(default_factory=list)

    class Config:
        frozen = True


# --- Footprint ---


class FootprintInfo(BaseModel):
    name: str = "UnknownFootprint"

    class Config:
        frozen = True


class FootprintPad(BaseModel):
    shape_code: str = ""
    center_x: float = 0.0
    center_y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    layer_id: int = 0
    number: str = ""
    hole_radius: float = 0.0
    hole_length: float = 0.0
    rotation: float = 0.0

    class Config:
        frozen = True

    @property
    def shape(self) -> PadShapeCode:
        return PadShapeCode.parse(self.shape_code)


class FootprintTrack(BaseModel):
    stroke_width: float = 0.0
    layer_id: int = 0
    points: List[Tuple[float, float]] = Field(default_factory=list)

    class Config:
        frozen = True


class FootprintText(BaseModel):
    type_code: str = ""
    center_x: float = 0.0
    center_y: float = 0.0
    rotation: float = 0.0
    layer_id: int = 0
    text: str = ""

    class Config:
        frozen = True

    @property
    def role(self) -> TextTypeCode:
        return TextTypeCode.parse(self.type_code)


class FootprintCircle(BaseModel):
    layer_id: int = 0
    stroke_width: float = 0.0
    center_x: float = 0.0
    center_y: float = 0.0
    radius: float = 0.0

    class Config:
        frozen = True


class FootprintArc(BaseModel):
    layer_id: int = 0
    stroke_width: float = 0.0
    path: str = ""

    class Config:
        frozen = True


class Model3DRef(BaseModel):
    """3D model reference found in the footprint.

    Not frozen: the fetched OBJ text and STEP bytes are attached after the
    download completes.
    """

    name: str
    uuid: str
    raw_obj: Optional[str] = None
    step: Optional[bytes] = None


class DecodedFootprint(BaseModel):
    info: FootprintInfo
    bbox_x: float = 0.0
    bbox_y: float = 0.0
    pads: List[FootprintPad] = Field(default_factory=list)
    tracks: List[FootprintTrack] = Field(default_factory=list)
    texts: List[FootprintText] = Field(default_factory=list)
    circles: List[FootprintCircle] = Field(default_factory=list)
    arcs: List[FootprintArc] = Field(default_factory=list)
    model_3d: Optional[Model3DRef] = None

    class Config:
        frozen = True


class IgnoredShape(BaseModel):
    """A shape line whose tag the grammar does not handle."""

    tag: str

    class Config:
        frozen = True
