from __future__ import annotations

import threading
import zlib
from typing import Dict, Optional


def crc32_file(path: str) -> str:
    """Stream a file through CRC32 in 1 MB chunks; returns 8 lowercase hex digits."""
    crc = 0
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(1 << 20), b""):
            crc = zlib.crc32(chunk, crc)
    return f"{crc & 0xFFFFFFFF:08x}"


class HashStore:
    """MP3 filename -> CRC32, written by encoder threads under a lock."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._hashes: Dict[str, str] = {}

    def record(self, filename: str, checksum: str) -> None:
        with self._lock:
            if filename in self._hashes:
                raise ValueError(f"CRC32 already recorded for {filename}")
            self._hashes[filename] = checksum

    def get(self, filename: str) -> Optional[str]:
        with self._lock:
            return self._hashes.get(filename)

    def snapshot(self) -> Dict[str, str]:
        with self._lock:
            return dict(self._hashes)

    def __len__(self) -> int:
        with self._lock:
            return len(self._hashes)
