import logging
from typing import Any, Dict, List, Optional

from adapters.easyeda.shape_grammar import iter_shape_lines, parse_float, parse_shape
from errors import MissingData
from models.easyeda import (
    DecodedSymbol,
    IgnoredShape,
    SymbolInfo,
    SymbolPin,
    SymbolRectangle,
)

logger = logging.getLogger(__name__)

EXTENDED_PART_CLASS = "Extended Part"


def _section(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = data.get(key)
    return value if isinstance(value, dict) else {}


def _optional_text(value: Any) -> Optional[str]:
    return str(value) if value not in (None, "") else None


class EasyEDASymbolParser:
    """Decode the schematic half of an EasyEDA component payload.

    The result stays in source units; see ``converters.symbol_converter`` for
    the conversion to KiCad millimetres.
    """

    def _parse_info(self, easyeda_data: Dict[str, Any], head: Dict[str, Any]) -> SymbolInfo:
        c_para = _section(head, "c_para")
        lcsc = _section(easyeda_data, "lcsc")

        # EasyEDA stores the prefix with a placeholder, e.g. "U?"
        prefix = str(c_para.get("pre") or "U").rstrip("?") or "U"

        return SymbolInfo(
            name=str(c_para.get("name") or "Unknown"),
            prefix=prefix,
            package=_optional_text(c_para.get("package")),
            datasheet=_optional_text(lcsc.get("url")),
            lcsc_id=_optional_text(lcsc.get("number")),
            is_extended=c_para.get("JLCPCB Part Class") == EXTENDED_PART_CLASS,
        )

    def parse_easyeda_symbol(self, easyeda_data: Dict[str, Any]) -> DecodedSymbol:
        """Parse an EasyEDA component payload into a ``DecodedSymbol``.

        Raises:
            MissingData: The payload is not an object, or ``dataStr.shape``
                is absent or not a list.
        """
        if not isinstance(easyeda_data, dict):
            raise MissingData(
                "Component payload is not an object",
                {"type": type(easyeda_data).__name__},
            )
        data_str = _section(easyeda_data, "dataStr")
        shapes = data_str.get("shape")
        if not isinstance(shapes, list):
            raise MissingData(
                "Symbol shape data is missing",
                {"lcsc_id": _section(easyeda_data, "lcsc").get("number")},
            )

        head = _section(data_str, "head")
        info = self._parse_info(easyeda_data, head)

        pins: List[SymbolPin] = []
        rectangles: List[SymbolRectangle] = []
        for shape_str in iter_shape_lines(shapes):
            record = parse_shape(shape_str)
            if record is None:
                continue
            if isinstance(record, SymbolPin):
                pins.append(record)
            elif isinstance(record, SymbolRectangle):
                rectangles.append(record)
            elif isinstance(record, IgnoredShape):
                logger.debug(f"Unhandled symbol shape type: {record.tag}")
            else:
                logger.debug(f"Ignoring {type(record).__name__} in symbol data")

        logger.info(
            f"Decoded symbol '{info.name}': {len(pins)} pins, {len(rectangles)} rectangles"
        )
        return DecodedSymbol(
            info=info,
            bbox_x=parse_float(head.get("x")),
            bbox_y=parse_float(head.get("y")),
            pins=pins,
            rectangles=rectangles,
        )
