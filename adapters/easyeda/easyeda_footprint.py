# Global imports
import logging
from typing import Any, Dict, Optional

from adapters.easyeda.shape_grammar import iter_shape_lines, parse_float, parse_shape
from errors import MissingData
from models.easyeda import (
    DecodedFootprint,
    FootprintArc,
    FootprintCircle,
    FootprintInfo,
    FootprintPad,
    FootprintText,
    FootprintTrack,
    IgnoredShape,
    Model3DRef,
)

logger = logging.getLogger(__name__)


def _section(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = data.get(key)
    return value if isinstance(value, dict) else {}


class EasyEDAFootprintParser:
    """Decode the ``packageDetail`` half of an EasyEDA component payload."""

    # record type -> DecodedFootprint collection
    COLLECTIONS = {
        FootprintPad: "pads",
        FootprintTrack: "tracks",
        FootprintText: "texts",
        FootprintCircle: "circles",
        FootprintArc: "arcs",
    }

    def parse_easyeda_json(self, easyeda_data: Dict[str, Any]) -> DecodedFootprint:
        """Parse an EasyEDA component payload into a ``DecodedFootprint``.

        Raises:
            MissingData: The payload is not an object, or
                ``packageDetail.dataStr.shape`` is absent or not a list.
        """
        if not isinstance(easyeda_data, dict):
            raise MissingData(
                "Component payload is not an object",
                {"type": type(easyeda_data).__name__},
            )
        package_detail = _section(easyeda_data, "packageDetail")
        data_str = _section(package_detail, "dataStr")
        shapes = data_str.get("shape")
        if not isinstance(shapes, list):
            raise MissingData(
                "Footprint shape data is missing",
                {"lcsc_id": _section(easyeda_data, "lcsc").get("number")},
            )

        head = _section(data_str, "head")
        name = str(package_detail.get("title") or "UnknownFootprint")

        collections: Dict[str, list] = {key: [] for key in self.COLLECTIONS.values()}
        model_3d: Optional[Model3DRef] = None

        for shape_str in iter_shape_lines(shapes):
            record = parse_shape(shape_str)
            if record is None:
                continue
            if isinstance(record, Model3DRef):
                if model_3d is None:
                    model_3d = record
                else:
                    logger.debug(f"Extra 3D model reference ignored: {record.uuid}")
            elif isinstance(record, IgnoredShape):
                logger.debug(f"Unhandled footprint shape type: {record.tag}")
            elif type(record) in self.COLLECTIONS:
                collections[self.COLLECTIONS[type(record)]].append(record)
            else:
                logger.debug(f"Ignoring {type(record).__name__} in footprint data")

        if model_3d is None:
            logger.info(f"Footprint '{name}' has no 3D model")

        logger.info(
            f"Decoded footprint '{name}': {len(collections['pads'])} pads, "
            f"{len(collections['tracks'])} tracks, {len(collections['texts'])} texts"
        )
        return DecodedFootprint(
            info=FootprintInfo(name=name),
            bbox_x=parse_float(head.get("x")),
            bbox_y=parse_float(head.get("y")),
            model_3d=model_3d,
            **collections,
        )
