from typing import List

from adapters.kicad.s_expression import Node, SExpSymbol, open_node, serialize_node
from constants import MODEL_PATH_TEMPLATE
from models.footprint import DrillShape, Footprint, Model3D, Pad, Text
from models.graphics import Circle, GraphicElement, Line, Point3D
from models.layer import KicadLayer

TEXT_EFFECTS: Node = ("effects", [("font", [("size", [1, 1]), ("thickness", [0.15])])])


def _xyz(tag: str, value: Point3D) -> str:
    return serialize_node((tag, [("xyz", [value.x, value.y, value.z])]))


class KicadFootprintSerializer:
    """Render a ``Footprint`` as a standalone ``.kicad_mod`` file."""

    def _text(self, text: Text) -> str:
        at = [text.position.x, text.position.y, text.rotation or None]
        node = (
            "fp_text",
            [text.kind, text.text, ("at", at), ("layer", [text.layer]), TEXT_EFFECTS],
        )
        return "  " + serialize_node(node)

    def _model(self, model: Model3D) -> List[str]:
        # Reference the file that was actually produced, VRML first
        if model.wrl_data is not None:
            extension = "wrl"
        elif model.step_data is not None:
            extension = "step"
        else:
            return []
        path = MODEL_PATH_TEMPLATE.format(name=model.name, extension=extension)
        return [
            "  " + open_node(("model", [path])),
            "    " + _xyz("offset", model.offset),
            "    " + _xyz("scale", model.scale),
            "    " + _xyz("rotate", model.rotate),
            "  )",
        ]

    def _pad(self, pad: Pad) -> str:
        contents = [
            pad.number,
            pad.pad_type,
            pad.shape,
            ("at", [pad.position.x, pad.position.y, pad.rotation]),
            ("size", [pad.width, pad.height]),
            ("layers", list(pad.layers)),
        ]
        if pad.drill is not None:
            if pad.drill.shape == DrillShape.OVAL:
                contents.append(("drill", [SExpSymbol("oval"), pad.drill.width, pad.drill.height]))
            else:
                contents.append(("drill", [pad.drill.width]))
        return "  " + serialize_node(("pad", contents))

    def _graphic(self, graphic: GraphicElement) -> str:
        if isinstance(graphic, Line):
            node = (
                "fp_line",
                [
                    ("start", [graphic.start.x, graphic.start.y]),
                    ("end", [graphic.end.x, graphic.end.y]),
                    ("layer", [graphic.layer]),
                    ("width", [graphic.width]),
                ],
            )
        elif isinstance(graphic, Circle):
            # KiCad circles are given by their center and one point on the rim
            node = (
                "fp_circle",
                [
                    ("center", [graphic.center.x, graphic.center.y]),
                    ("end", [graphic.center.x + graphic.radius, graphic.center.y]),
                    ("layer", [graphic.layer]),
                    ("width", [graphic.width]),
                ],
            )
        else:
            raise TypeError(f"Unsupported graphic element: {type(graphic).__name__}")
        return "  " + serialize_node(node)

    def serialize(self, footprint: Footprint) -> str:
        lines = [open_node(("module", [footprint.name, ("layer", [KicadLayer.FRONT_COPPER])]))]
        lines.extend(self._text(text) for text in footprint.texts)
        if footprint.model_3d is not None:
            lines.extend(self._model(footprint.model_3d))
        lines.extend(self._pad(pad) for pad in footprint.pads)
        lines.extend(self._graphic(graphic) for graphic in footprint.graphics)
        lines.append(")")
        return "\n".join(lines) + "\n"
