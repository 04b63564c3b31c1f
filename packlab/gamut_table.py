"""The Oklab gamut boundary table.

A fixed 65536-byte asset indexed by ``L_byte << 8 | hue_index``. Each entry is
the largest in-gamut distance from neutral gray at that lightness and hue,
in units of 1/256 of the recentered (A, B) plane. The table is generated
offline and only ever read here.

The process-wide instance is loaded once, on first use, and is read-only for
the rest of the process. Loading it before starting worker threads is also
fine; get_gamut_table() is safe to call from any thread either way.
"""

from __future__ import annotations

import hashlib
import logging
import os
import threading
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path

import numpy as np

from packlab.defaults import (
    GAMUT_TABLE_ENV_VAR,
    GAMUT_TABLE_RESOURCE,
    GAMUT_TABLE_SIZE,
    GAMUT_TABLE_VERSION,
)

logger = logging.getLogger(__name__)


class GamutTableError(ValueError):
    """Raised when a gamut table asset is malformed."""


@dataclass(frozen=True)
class GamutTable:
    """Immutable gamut boundary table.

    Attributes:
        data: Read-only uint8 array of GAMUT_TABLE_SIZE entries
        version: Label of the asset this table was built from
        checksum: sha256 hex digest of the raw bytes
    """
    data: np.ndarray = field(repr=False)
    version: str = GAMUT_TABLE_VERSION
    checksum: str = ""

    @classmethod
    def from_bytes(cls, raw: bytes, version: str = GAMUT_TABLE_VERSION) -> GamutTable:
        """Build a table from raw asset bytes.

        Raises:
            GamutTableError: If raw does not hold exactly GAMUT_TABLE_SIZE bytes
        """
        if len(raw) != GAMUT_TABLE_SIZE:
            raise GamutTableError(
                f"Gamut table must be {GAMUT_TABLE_SIZE} bytes, got {len(raw)}"
            )
        data = np.frombuffer(bytes(raw), dtype=np.uint8).copy()
        data.setflags(write=False)
        return cls(data=data, version=version, checksum=hashlib.sha256(raw).hexdigest())

    @classmethod
    def load(cls, path: str | os.PathLike | None = None) -> GamutTable:
        """Load a table from ``path``, $PACKLAB_GAMUT_TABLE, or the packaged asset."""
        if path is None:
            path = os.environ.get(GAMUT_TABLE_ENV_VAR) or None
        if path is not None:
            raw = Path(path).read_bytes()
            source = str(path)
        else:
            raw = resources.files("packlab.data").joinpath(GAMUT_TABLE_RESOURCE).read_bytes()
            source = f"packlab.data/{GAMUT_TABLE_RESOURCE}"
        table = cls.from_bytes(raw)
        logger.debug("Loaded gamut table from %s (sha256 %s)", source, table.checksum[:12])
        return table

    def __len__(self) -> int:
        return int(self.data.shape[0])

    def __getitem__(self, index):
        return self.data[index]

    def distance(self, l_index, h_index) -> np.ndarray:
        """Boundary distance for byte lightness and hue indices (vectorized)."""
        l_index = np.asarray(l_index, dtype=np.intp) & 0xFF
        h_index = np.asarray(h_index, dtype=np.intp) & 0xFF
        return self.data[(l_index << 8) | h_index]

    def as_grid(self) -> np.ndarray:
        """Read-only (256, 256) view, rows are lightness, columns are hue."""
        return self.data.reshape(256, 256)


_GAMUT_TABLE: GamutTable | None = None
_GAMUT_TABLE_LOCK = threading.Lock()


def get_gamut_table() -> GamutTable:
    """Get or load the process-wide gamut table."""
    global _GAMUT_TABLE
    table = _GAMUT_TABLE
    if table is None:
        with _GAMUT_TABLE_LOCK:
            if _GAMUT_TABLE is None:
                _GAMUT_TABLE = GamutTable.load()
            table = _GAMUT_TABLE
    return table
