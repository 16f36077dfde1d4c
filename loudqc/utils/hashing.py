from __future__ import annotations
import hashlib
from loudqc.utils.canonical_json import canonical_dumps


def sha256_hex_canonical_json(obj) -> str:
    """Compute SHA256 hash of canonical JSON representation."""
    return hashlib.sha256(canonical_dumps(obj).encode("utf-8")).hexdigest()


def sha256_hex_file(path: str) -> str:
    """Compute SHA256 hash of an audio file, read in 64 KiB chunks."""
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(65536), b""):
            h.update(chunk)
    return h.hexdigest()
