"""Lookup tables from EasyEDA codes to KiCad names.

All functions are total: an unknown code maps to a safe default and is
logged with its raw value.
"""

import logging
from typing import Dict, List, Union

from models.easyeda import PadShapeCode, PinTypeCode
from models.footprint import PadShape
from models.layer import GRAPHIC_LAYERS, KicadLayer
from models.symbol import ElectricalType

logger = logging.getLogger(__name__)

THROUGH_HOLE_LAYERS = [KicadLayer.ALL_COPPER, KicadLayer.ALL_MASK]

# EasyEDA layer id -> KiCad layers, for SMD pads and graphics
SMD_LAYER_MAP: Dict[int, List[KicadLayer]] = {
    1: [KicadLayer.FRONT_COPPER, KicadLayer.FRONT_PASTE, KicadLayer.FRONT_MASK],
    2: [KicadLayer.BACK_COPPER, KicadLayer.BACK_PASTE, KicadLayer.BACK_MASK],
    3: [KicadLayer.FRONT_SILKSCREEN],
    4: [KicadLayer.BACK_SILKSCREEN],
    13: [KicadLayer.FRONT_FABRICATION],
    15: [KicadLayer.USER_DRAWING],
}
DEFAULT_LAYERS = [KicadLayer.FRONT_FABRICATION]

PAD_SHAPE_MAP = {
    PadShapeCode.ELLIPSE: PadShape.CIRCLE,
    PadShapeCode.RECT: PadShape.RECTANGLE,
    PadShapeCode.OVAL: PadShape.OVAL,
}

PIN_TYPE_MAP = {
    PinTypeCode.INPUT: ElectricalType.INPUT,
    PinTypeCode.OUTPUT: ElectricalType.OUTPUT,
    PinTypeCode.BIDIRECTIONAL: ElectricalType.BIDIRECTIONAL,
    PinTypeCode.POWER: ElectricalType.POWER_IN,
}


def map_layer(layer_id: int, is_smd: bool) -> List[KicadLayer]:
    """Through-hole pads always span every copper and mask layer."""
    if not is_smd:
        return list(THROUGH_HOLE_LAYERS)
    if layer_id not in SMD_LAYER_MAP:
        logger.debug(f"Unknown layer id {layer_id}, using {DEFAULT_LAYERS[0]}")
        return list(DEFAULT_LAYERS)
    return list(SMD_LAYER_MAP[layer_id])


def map_pad_shape(code: Union[PadShapeCode, str]) -> PadShape:
    shape = PadShapeCode.parse(code)
    if shape not in PAD_SHAPE_MAP:
        logger.debug(f"Unsupported pad shape '{code}', using rect")
        return PadShape.RECTANGLE
    return PAD_SHAPE_MAP[shape]


def map_pin_type(code: Union[PinTypeCode, str]) -> ElectricalType:
    pin_type = PinTypeCode.parse(code)
    if pin_type not in PIN_TYPE_MAP:
        if pin_type == PinTypeCode.UNKNOWN:
            logger.debug(f"Unknown pin type code '{code}', using passive")
        return ElectricalType.PASSIVE
    return PIN_TYPE_MAP[pin_type]


def is_graphic_layer(layer: KicadLayer) -> bool:
    return layer in GRAPHIC_LAYERS
