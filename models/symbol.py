from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from .graphics import Point


class ElectricalType(str, Enum):
    INPUT = "input"
    OUTPUT = "output"
    BIDIRECTIONAL = "bidirectional"
    POWER_IN = "power_in"
    PASSIVE = "passive"
    UNSPECIFIED = "unspecified"


# --- Pin Model ---


class Pin(BaseModel):
    name: str = Field(..., description="Pin name (e.g., 'VCC', 'GND', '~RST')")
    number: str = Field(..., description="Pin number (e.g., '1', '2', 'A1')")
    electrical_type: ElectricalType = ElectricalType.PASSIVE
    length: float
    position: Point
    rotation: int = Field(0, description="Degrees, one of 0/90/180/270")

    class Config:
        frozen = True


class Rectangle(BaseModel):
    start: Point
    end: Point

    class Config:
        frozen = True


class Symbol(BaseModel):
    name: str
    reference: str = "U"
    footprint: str = ""
    datasheet: str = ""
    lcsc_part: Optional[str] = None
    is_extended: bool = False
    pins: List[Pin] = Field(default_factory=list)
    rectangles: List[Rectangle] = Field(default_factory=list)

    class Config:
        frozen = True
