from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from .graphics import GraphicElement, Point, Point3D
from .layer import KicadLayer


class PadShape(str, Enum):
    CIRCLE = "circle"
    RECTANGLE = "rect"
    OVAL = "oval"


class PadType(str, Enum):
    SMD = "smd"
    THROUGH_HOLE = "thru_hole"


class DrillShape(str, Enum):
    ROUND = "round"
    OVAL = "oval"


class TextKind(str, Enum):
    REFERENCE = "reference"
    VALUE = "value"
    USER = "user"


# --- Pads and Drills ---


class Drill(BaseModel):
    shape: DrillShape = DrillShape.ROUND
    width: float = Field(..., description="Diameter for round drills")
    height: Optional[float] = None

    class Config:
        frozen = True

    @model_validator(mode="after")
    def _validate(self):
        if self.shape == DrillShape.OVAL and self.height is None:
            raise ValueError("height required for OVAL")
        if self.shape == DrillShape.ROUND and self.height is not None:
            raise ValueError("height not allowed for ROUND")
        return self


class Pad(BaseModel):
    number: str
    pad_type: PadType = PadType.SMD
    shape: PadShape = PadShape.RECTANGLE
    position: Point
    width: float
    height: float
    layers: List[KicadLayer]
    rotation: float = 0.0
    drill: Optional[Drill] = None

    class Config:
        frozen = True

    @model_validator(mode="after")
    def _validate_drill(self):
        if self.pad_type == PadType.THROUGH_HOLE and self.drill is None:
            raise ValueError("drill required for through-hole pads")
        if self.pad_type == PadType.SMD and self.drill is not None:
            raise ValueError("Drill properties only allowed on through-hole pads")
        return self


class Text(BaseModel):
    kind: TextKind
    text: str
    position: Point
    rotation: float = 0.0
    layer: KicadLayer

    class Config:
        frozen = True


class Model3D(BaseModel):
    name: str
    wrl_data: Optional[str] = None
    step_data: Optional[bytes] = None
    offset: Point3D = Field(default_factory=Point3D.zero)
    scale: Point3D = Field(default_factory=Point3D.one)
    rotate: Point3D = Field(default_factory=Point3D.zero)


class Footprint(BaseModel):
    name: str
    pads: List[Pad] = Field(default_factory=list)
    texts: List[Text] = Field(default_factory=list)
    graphics: List[GraphicElement] = Field(default_factory=list)
    model_3d: Optional[Model3D] = None

    class Config:
        frozen = True

    def find_pad(self, *numbers: str) -> Optional[Pad]:
        """Return the first pad matching the numbers, tried in order."""
        for number in numbers:
            for pad in self.pads:
                if pad.number == number:
                    return pad
        return None
