"""
OBJ to VRML reformatter for EasyEDA 3D models.

Only geometry survives: ``v`` and ``f`` statements are read, every other
statement (normals, texture coordinates, materials, groups) is ignored and the
output uses a single grey material.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from constants import MESH_VERTEX_SCALE
from models.easyeda import Model3DRef
from models.footprint import Model3D

logger = logging.getLogger(__name__)

Vertex = Tuple[float, float, float]
Face = List[int]

VRML_HEADER = """#VRML V2.0 utf8
Shape {
  appearance Appearance {
    material Material { diffuseColor 0.5 0.5 0.5 }
  }
  geometry IndexedFaceSet {
    coord Coordinate {
      point [
"""
VRML_POINTS_END = """      ]
    }
    coordIndex [
"""
VRML_FOOTER = """    ]
  }
}
"""


def _parse_vertex(tokens: Sequence[str]) -> Optional[Vertex]:
    if len(tokens) < 4:
        return None
    try:
        x, y, z = (float(token) for token in tokens[1:4])
    except ValueError:
        return None
    return x * MESH_VERTEX_SCALE, y * MESH_VERTEX_SCALE, z * MESH_VERTEX_SCALE


def _vertex_index(reference: str) -> int:
    # "7", "7/2" and "7//3" all refer to vertex 7 (1-based)
    try:
        index = int(reference.split("/", 1)[0])
    except ValueError:
        return 0
    return index - 1 if index >= 1 else 0


def _parse_face(tokens: Sequence[str]) -> Optional[Face]:
    if len(tokens) < 4:
        return None
    return [_vertex_index(reference) for reference in tokens[1:]]


def parse_obj(obj_text: str) -> Tuple[List[Vertex], List[Face]]:
    vertices: List[Vertex] = []
    faces: List[Face] = []
    skipped = 0
    for line in obj_text.splitlines():
        tokens = line.split()
        if not tokens:
            continue
        if tokens[0] == "v":
            vertex = _parse_vertex(tokens)
            if vertex is None:
                skipped += 1
            else:
                vertices.append(vertex)
        elif tokens[0] == "f":
            face = _parse_face(tokens)
            if face is None:
                skipped += 1
            else:
                faces.append(face)
    if skipped:
        logger.debug(f"Skipped {skipped} malformed OBJ statements")
    return vertices, faces


def obj_to_wrl(obj_text: Optional[str]) -> Optional[str]:
    """
    Convert OBJ mesh text to a VRML 2.0 document.

    Returns:
        The VRML text, or None when no OBJ text is given. An OBJ without any
        geometry still yields a valid document with empty lists.
    """
    if obj_text is None:
        return None

    vertices, faces = parse_obj(obj_text)
    logger.debug(f"Mesh has {len(vertices)} vertices and {len(faces)} faces")

    parts = [VRML_HEADER]
    parts.extend(f"        {x:.4f} {y:.4f} {z:.4f},\n" for x, y, z in vertices)
    parts.append(VRML_POINTS_END)
    parts.extend(
        "      " + ", ".join(str(index) for index in face) + ", -1,\n" for face in faces
    )
    parts.append(VRML_FOOTER)
    return "".join(parts)


def convert_3d_model(ref: Model3DRef) -> Model3D:
    """Build the KiCad model from a reference whose OBJ/STEP data was fetched."""
    if ref.raw_obj is None:
        logger.warning(f"No OBJ data for 3D model '{ref.name}', VRML will be missing")
    return Model3D(name=ref.name, wrl_data=obj_to_wrl(ref.raw_obj), step_data=ref.step)
