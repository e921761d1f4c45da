# Global imports
import math
from typing import Union

from pydantic import BaseModel, Field

# Local imports
from .layer import KicadLayer


# --- Geometric Primitives ---


class Point(BaseModel):
    x: float = Field(..., description="X in mm")
    y: float = Field(..., description="Y in mm")

    class Config:
        frozen = True

    def __repr__(self) -> str:
        return f"Pt({self.x:.3f}, {self.y:.3f})"

    def shifted(self, dx: float, dy: float) -> "Point":
        return Point(x=self.x + dx, y=self.y + dy)

    def distance_to_origin(self) -> float:
        return math.hypot(self.x, self.y)


class Point3D(BaseModel):
    x: float = Field(..., description="X in mm")
    y: float = Field(..., description="Y in mm")
    z: float = Field(..., description="Z in mm")

    @classmethod
    def zero(cls) -> "Point3D":
        return cls(x=0, y=0, z=0)

    @classmethod
    def one(cls) -> "Point3D":
        return cls(x=1, y=1, z=1)


# --- Graphic Primitives ---


class GraphicItem(BaseModel):
    layer: KicadLayer
    width: float

    class Config:
        frozen = True


class Line(GraphicItem):
    start: Point
    end: Point


class Circle(GraphicItem):
    center: Point
    radius: float


GraphicElement = Union[Line, Circle]
