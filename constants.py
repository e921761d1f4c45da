from enum import Enum
from pathlib import Path

# --- Core Library Structure ---
LIBRARY_DIR = Path("./easyeda_lib")
CACHE_DIR = Path("cad_cache")
LIB_NAME = "webparts"


# --- KiCad Library Filenames ---
class KicadFilename(Enum):
    """Directory and file names inside a generated KiCad library."""

    FOOTPRINT_DIR = "footprints.pretty"
    SYMBOL_DIR = "symbols"
    MODEL_DIR = "3dmodels.3dshapes"
    SYMBOL_LIB = "lib.kicad_sym"
    LOG_DIR = "logs"


# --- API & Network ---
USER_AGENT = "WebParts-KiCad v0.1"
REQUEST_TIMEOUT = 30

# --- Units ---
# EasyEDA geometry is stored in 10 mil units: 1 unit = 0.254 mm.
UNIT_SCALE = 0.254

# --- Calibration ---
# Empirical values with no derivation in the source data. They may need
# retuning for other KiCad or EasyEDA versions.

# Graphic segments and circles further than this from the footprint center
# are frame/border artifacts.
GRAPHIC_MAX_DISTANCE_MM = 150.0
# Larger circles are courtyard/collision outlines, not silkscreen.
CIRCLE_MAX_RADIUS_MM = 50.0
# Pin-1 marker dot.
PIN1_MARKER_RADIUS_MM = 0.25
PIN1_MARKER_CLEARANCE_MM = 0.5
PIN1_MARKER_STROKE_MM = 0.12
# EasyEDA OBJ meshes come out of the API at roughly 2.54x the footprint
# scale; 0.254 * 1.55 ~= 1 / 2.54.
MESH_VERTEX_SCALE = 0.254 * 1.55

# Used when a pin path carries no readable length (source units).
DEFAULT_PIN_LENGTH = 10.0

# --- Output ---
NUMBER_PRECISION = 6
MODEL_PATH_TEMPLATE = "../" + KicadFilename.MODEL_DIR.value + "/{name}.{extension}"
GENERATOR_NAME = "webparts_kicad"
