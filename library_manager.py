import logging
import re
from pathlib import Path
from typing import List, Optional

from adapters.easyeda.easyeda_api import EasyEDAApi
from adapters.easyeda.easyeda_footprint import EasyEDAFootprintParser
from adapters.easyeda.easyeda_symbol import EasyEDASymbolParser
from adapters.kicad.kicad_footprint import KicadFootprintSerializer
from adapters.kicad.kicad_symbol import (
    SYMBOL_LIB_FOOTER,
    SYMBOL_LIB_HEADER,
    KicadSymbolSerializer,
)
from adapters.kicad.s_expression import quote_string
from constants import LIB_NAME, LIBRARY_DIR, KicadFilename
from converters.footprint_converter import convert_footprint
from converters.model_converter import convert_3d_model
from converters.symbol_converter import convert_symbol
from errors import ConversionError, ParseError
from models.footprint import Footprint, Model3D
from models.import_result import ImportResult, ImportStatus
from models.symbol import Symbol

logger = logging.getLogger(__name__)


def _safe_filename(name: str) -> str:
    return re.sub(r'[\\/:*?"<>|]', "_", name)


class LibraryManager:
    """A class to manage all library operations.

    The library is a plain KiCad layout below ``root``::

        footprints.pretty/<name>.kicad_mod
        symbols/lib.kicad_sym
        3dmodels.3dshapes/<name>.wrl, <name>.step
        logs/<lcsc_id>.log
    """

    def __init__(
        self,
        root: Path = LIBRARY_DIR,
        api: Optional[EasyEDAApi] = None,
        lib_name: str = LIB_NAME,
    ):
        self.root = Path(root)
        self.api = api or EasyEDAApi()
        self.lib_name = lib_name
        self.symbol_parser = EasyEDASymbolParser()
        self.footprint_parser = EasyEDAFootprintParser()
        self.symbol_serializer = KicadSymbolSerializer()
        self.footprint_serializer = KicadFootprintSerializer()

    @property
    def footprint_dir(self) -> Path:
        return self.root / KicadFilename.FOOTPRINT_DIR.value

    @property
    def symbol_dir(self) -> Path:
        return self.root / KicadFilename.SYMBOL_DIR.value

    @property
    def model_dir(self) -> Path:
        return self.root / KicadFilename.MODEL_DIR.value

    @property
    def symbol_lib_path(self) -> Path:
        return self.symbol_dir / KicadFilename.SYMBOL_LIB.value

    def setup_directories(self):
        for directory in (self.footprint_dir, self.symbol_dir, self.model_dir):
            directory.mkdir(parents=True, exist_ok=True)

    # --- Logging ---

    def setup_conversion_logging(self, lcsc_id: str) -> Optional[logging.FileHandler]:
        """
        Creates a dedicated log file for a conversion process.
        """
        if not lcsc_id:
            return None
        log_dir = self.root / KicadFilename.LOG_DIR.value
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file_path = log_dir / f"{_safe_filename(lcsc_id)}.log"
        file_handler = logging.FileHandler(log_file_path, mode="w", encoding="utf-8")
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        file_handler.setFormatter(formatter)
        logging.getLogger().addHandler(file_handler)
        logger.info(f"Conversion log started at: {log_file_path}")
        return file_handler

    def cleanup_conversion_logging(self, handler: Optional[logging.FileHandler]):
        """Removes and closes a specific log handler."""
        if handler:
            logger.info("Ending conversion log.")
            handler.close()
            logging.getLogger().removeHandler(handler)

    # --- Writers ---

    def symbol_exists(self, name: str, library_text: str) -> bool:
        try:
            pattern = re.compile(r"\(\s*symbol\s*" + re.escape(quote_string(name)) + r"\s*.*\)")
        except re.error as e:
            raise ParseError(f"Cannot build duplicate check for symbol: {e}", {"symbol": name}) from e
        return pattern.search(library_text) is not None

    def add_symbol(self, symbol: Symbol) -> bool:
        """
        Add a symbol to ``symbols/lib.kicad_sym``.

        Returns:
            False when a symbol with the same name is already in the library.
        """
        lib_path = self.symbol_lib_path
        content = lib_path.read_text(encoding="utf-8") if lib_path.exists() else ""

        if content and self.symbol_exists(symbol.name, content):
            logger.warning(f"Symbol '{symbol.name}' already exists in the library. Skipping.")
            return False

        entry = self.symbol_serializer.serialize(symbol)
        if not content.strip():
            lib_path.write_text(SYMBOL_LIB_HEADER + entry + SYMBOL_LIB_FOOTER, encoding="utf-8")
            logger.info(f"Created new symbol library and added '{symbol.name}'.")
            return True

        body = content.rstrip()
        if not body.endswith(")"):
            raise ParseError("Symbol library is not terminated", {"path": lib_path})
        # Drop the library's closing parenthesis, append, close again
        lib_path.write_text(body[:-1] + entry + SYMBOL_LIB_FOOTER, encoding="utf-8")
        logger.info(f"Appended symbol '{symbol.name}' to the existing library.")
        return True

    def add_footprint(self, footprint: Footprint) -> Path:
        fp_path = self.footprint_dir / f"{_safe_filename(footprint.name)}.kicad_mod"
        fp_path.write_text(self.footprint_serializer.serialize(footprint), encoding="utf-8")
        logger.info(f"Wrote footprint {fp_path}")
        return fp_path

    def add_3d_model(self, model: Model3D) -> List[Path]:
        base_path = self.model_dir / _safe_filename(model.name)
        written = []
        if model.wrl_data is not None:
            wrl_path = base_path.with_name(base_path.name + ".wrl")
            wrl_path.write_text(model.wrl_data, encoding="utf-8")
            written.append(wrl_path)
        if model.step_data is not None:
            step_path = base_path.with_name(base_path.name + ".step")
            step_path.write_bytes(model.step_data)
            written.append(step_path)
        for path in written:
            logger.info(f"Wrote 3D model {path}")
        return written

    # --- Import ---

    def _fetch_3d_model(self, decoded_footprint, warnings: List[str]) -> Optional[Model3D]:
        ref = decoded_footprint.model_3d
        if ref is None:
            return None
        ref.raw_obj = self.api.get_raw_3d_model_obj(ref.uuid)
        ref.step = self.api.get_step_3d_model(ref.uuid)
        if ref.raw_obj is None:
            warnings.append(f"OBJ mesh for 3D model '{ref.name}' not available")
        if ref.step is None:
            warnings.append(f"STEP file for 3D model '{ref.name}' not available")
        model = convert_3d_model(ref)
        # The file name is also the reference written into the footprint
        return model.model_copy(update={"name": _safe_filename(model.name)})

    def _import_component(self, lcsc_id: str) -> ImportResult:
        self.setup_directories()
        cad_data = self.api.get_component_cad_data(lcsc_id)
        warnings: List[str] = []

        logger.info("--- Starting Footprint Generation ---")
        decoded_footprint = self.footprint_parser.parse_easyeda_json(cad_data)
        model = self._fetch_3d_model(decoded_footprint, warnings)
        footprint = convert_footprint(decoded_footprint, model)
        footprint = footprint.model_copy(update={"name": _safe_filename(footprint.name)})
        footprint_path = self.add_footprint(footprint)
        model_paths = self.add_3d_model(model) if model is not None else []

        logger.info("--- Starting Symbol Generation ---")
        decoded_symbol = self.symbol_parser.parse_easyeda_symbol(cad_data)
        symbol = convert_symbol(decoded_symbol, footprint_ref=f"{self.lib_name}:{footprint.name}")
        added = self.add_symbol(symbol)
        if not added:
            warnings.append(f"Symbol '{symbol.name}' already in library")

        for warning in warnings:
            logger.warning(warning)
        return ImportResult(
            lcsc_id=lcsc_id,
            status=ImportStatus.SUCCESS if added else ImportStatus.SKIPPED,
            symbol_name=symbol.name,
            footprint_name=footprint.name,
            footprint_path=footprint_path,
            model_paths=model_paths,
            warnings=warnings,
        )

    def import_component(self, lcsc_id: str) -> ImportResult:
        """
        Fetch one LCSC part and add its symbol, footprint and 3D model to the library.

        Failures are reported in the returned result, never raised, so that a
        batch can continue with the next part.
        """
        handler = self.setup_conversion_logging(lcsc_id)
        try:
            logger.info(f"Starting import of '{lcsc_id}'...")
            result = self._import_component(lcsc_id)
            logger.info(f"Finished '{lcsc_id}': {result.status.value}")
            return result
        except (ConversionError, OSError, ValueError) as e:
            logger.error(f"Failed to import {lcsc_id}: {e}", exc_info=True)
            return ImportResult(lcsc_id=lcsc_id, status=ImportStatus.ERROR, error=str(e))
        finally:
            self.cleanup_conversion_logging(handler)
