"""General-purpose byte compressors, used only as size baselines in reports.

Only the compressed length matters here, so there is no decompress side.
"""

from __future__ import annotations

import zlib
from dataclasses import dataclass

try:
    import zstandard as zstd  # type: ignore
except Exception:  # pragma: no cover
    zstd = None


def have_zstd() -> bool:
    return zstd is not None


class CodecZlib:
    """DEFLATE baseline (stdlib)."""

    def __init__(self, level: int = 9):
        if not (0 <= level <= 9):
            raise ValueError(f"zlib level must be 0..9, got {level}")
        self.level = level

    def compress(self, data: bytes) -> bytes:
        return zlib.compress(bytes(data), self.level)


@dataclass
class CodecZstd:
    """
    zstd baseline.

    Con tight=True il frame non porta ne' la dimensione del contenuto ne' il
    checksum: il confronto con il container symhuff resta sui soli dati.
    """

    level: int = 19
    tight: bool = True

    def _require(self) -> None:
        if zstd is None:
            raise RuntimeError(
                "Modulo 'zstandard' non disponibile. Installa con: python3 -m pip install zstandard"
            )

    def compress(self, data: bytes) -> bytes:
        self._require()
        c = zstd.ZstdCompressor(
            level=int(self.level),
            write_content_size=not self.tight,
            write_checksum=not self.tight,
        )
        return c.compress(bytes(data))
