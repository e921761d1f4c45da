from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field


class ImportStatus(str, Enum):
    """Outcome of importing one component into the library."""

    def __new__(cls, value, icon):
        obj = str.__new__(cls, value)
        obj._value_ = value
        obj.icon = icon
        return obj

    SUCCESS = ("success", "✔")
    SKIPPED = ("skipped", "⏭")
    ERROR = ("error", "✘")


class ImportResult(BaseModel):
    """Result of pushing one LCSC part through the full pipeline."""

    lcsc_id: str
    status: ImportStatus = ImportStatus.SUCCESS
    symbol_name: Optional[str] = None
    footprint_name: Optional[str] = None
    footprint_path: Optional[Path] = None
    model_paths: List[Path] = Field(default_factory=list)
    error: Optional[str] = None
    warnings: List[str] = Field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.status != ImportStatus.ERROR

    def __str__(self) -> str:
        message = self.error or self.symbol_name or ""
        return f"{self.status.icon} {self.lcsc_id}: {message}"
