"""Verification helpers for container files.

Policy: light by default (header, meta, code table, bit count), --full
decodes and recomputes the sha256 of the reconstruction.
"""

from __future__ import annotations

from pathlib import Path

from symhuff.engine.container import ContainerV1, sha256_text, unpack_container
from symhuff.errors import HashMismatch
from symhuff.pipeline import decode_pipeline


def verify_container_blob(blob: bytes, *, full: bool = False, strategy: str = "table") -> ContainerV1:
    c = unpack_container(blob)
    if not full:
        return c

    text = decode_pipeline(c.payload, c.codes, c.profile, strategy=strategy)
    got = sha256_text(text)
    if got != c.sha256:
        raise HashMismatch(f"sha256 mismatch: atteso {c.sha256}, ottenuto {got}")
    return c


def verify_container_file(path: Path, *, full: bool = False, strategy: str = "table") -> ContainerV1:
    return verify_container_blob(Path(path).read_bytes(), full=full, strategy=strategy)
