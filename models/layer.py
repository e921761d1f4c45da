# Global imports
from enum import Enum
from typing import FrozenSet


class KicadLayer(str, Enum):
    """KiCad board layer names used by generated footprints."""

    FRONT_COPPER = "F.Cu"
    BACK_COPPER = "B.Cu"
    FRONT_PASTE = "F.Paste"
    BACK_PASTE = "B.Paste"
    FRONT_MASK = "F.Mask"
    BACK_MASK = "B.Mask"
    FRONT_SILKSCREEN = "F.SilkS"
    BACK_SILKSCREEN = "B.SilkS"
    FRONT_FABRICATION = "F.Fab"
    USER_DRAWING = "Dwgs.User"
    # Wildcards for through-hole pads
    ALL_COPPER = "*.Cu"
    ALL_MASK = "*.Mask"

    def __str__(self):
        return self.value


# Layers that carry documentation-style graphics (lines, circles, texts).
GRAPHIC_LAYERS: FrozenSet[KicadLayer] = frozenset(
    {
        KicadLayer.FRONT_SILKSCREEN,
        KicadLayer.BACK_SILKSCREEN,
        KicadLayer.FRONT_FABRICATION,
        KicadLayer.USER_DRAWING,
    }
)
