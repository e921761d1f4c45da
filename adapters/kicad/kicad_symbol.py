from typing import Iterable, List, Optional

from adapters.kicad.s_expression import YES, Node, SExpSymbol, open_node, serialize_node
from constants import GENERATOR_NAME
from models.symbol import Pin, Rectangle, Symbol

SYMBOL_LIB_VERSION = 20211014
SYMBOL_LIB_HEADER = (
    open_node(
        (
            "kicad_symbol_lib",
            [("version", [SYMBOL_LIB_VERSION]), ("generator", [SExpSymbol(GENERATOR_NAME)])],
        )
    )
    + "\n"
)
SYMBOL_LIB_FOOTER = ")\n"

FONT: Node = ("font", [("size", [1.27, 1.27])])
HIDE = SExpSymbol("hide")
RECTANGLE_STROKE: Node = (
    "stroke",
    [("width", [0.254]), ("type", [SExpSymbol("default")]), ("color", [0, 0, 0, 0])],
)
RECTANGLE_FILL: Node = ("fill", [("type", [SExpSymbol("background")])])


def kicad_pin_name(name: str) -> str:
    """EasyEDA marks active-low names with a leading ``~``; KiCad wants ``~{NAME}``."""
    if name.startswith("~"):
        return "~{" + name[1:] + "}"
    return name


class KicadSymbolSerializer:
    """Render a ``Symbol`` as one entry of a ``.kicad_sym`` library."""

    def _property(self, key: str, value: str, prop_id: int, y: float = 0, hidden: bool = True) -> str:
        effects: List = [FONT, HIDE if hidden else None]
        node = ("property", [key, value, ("id", [prop_id]), ("at", [0, y, 0]), ("effects", effects)])
        return "  " + serialize_node(node)

    def _properties(self, symbol: Symbol) -> List[str]:
        lines = [
            self._property("Reference", symbol.reference, 0, y=2.54, hidden=False),
            self._property("Value", symbol.name, 1, y=-2.54, hidden=False),
            self._property("Footprint", symbol.footprint, 2),
            self._property("Datasheet", symbol.datasheet, 3),
        ]
        if symbol.lcsc_part:
            lines.append(self._property("LCSC Part", symbol.lcsc_part, 4))
        lines.append(self._property("Extended", "true" if symbol.is_extended else "false", 5))
        return lines

    def _rectangle(self, rect: Rectangle) -> str:
        node = (
            "rectangle",
            [
                ("start", [rect.start.x, rect.start.y]),
                ("end", [rect.end.x, rect.end.y]),
                RECTANGLE_STROKE,
                RECTANGLE_FILL,
            ],
        )
        return "    " + serialize_node(node)

    def _pin(self, pin: Pin) -> List[str]:
        header = (
            "pin",
            [
                pin.electrical_type,
                SExpSymbol("line"),
                ("at", [pin.position.x, pin.position.y, pin.rotation]),
                ("length", [pin.length]),
            ],
        )
        return [
            "    " + open_node(header),
            "      " + serialize_node(("name", [kicad_pin_name(pin.name), ("effects", [FONT])])),
            "      " + serialize_node(("number", [pin.number, ("effects", [FONT])])),
            "    )",
        ]

    def serialize(self, symbol: Symbol) -> str:
        lines = [open_node(("symbol", [symbol.name, ("in_bom", [YES]), ("on_board", [YES])]))]
        lines.extend(self._properties(symbol))
        lines.append("  " + open_node(("symbol", [f"{symbol.name}_1_1"])))
        lines.extend(self._rectangle(rect) for rect in symbol.rectangles)
        for pin in symbol.pins:
            lines.extend(self._pin(pin))
        lines.append("  )")
        lines.append(")")
        return "\n".join(lines) + "\n"


def serialize_library(symbols: Iterable[Symbol], serializer: Optional[KicadSymbolSerializer] = None) -> str:
    """Build a complete ``.kicad_sym`` file holding the given symbols."""
    serializer = serializer or KicadSymbolSerializer()
    return SYMBOL_LIB_HEADER + "".join(serializer.serialize(s) for s in symbols) + SYMBOL_LIB_FOOTER
