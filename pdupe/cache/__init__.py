"""
Sidecar fingerprint cache for the perceptual duplicate finder.

Fingerprints are stored next to their images as gzip-compressed JSON
records so repeated runs can skip decoding.

Public API:
- encode_fingerprint / decode_fingerprint: bytes codec
- cache_path_for / source_path_for / is_cache_file: sidecar naming
- write_cache / read_cache: file I/O
"""

from __future__ import annotations

from .codec import (
    encode_fingerprint,
    decode_fingerprint,
    fingerprint_to_record,
    record_to_fingerprint,
)
from .sidecar import (
    cache_path_for,
    is_cache_file,
    source_path_for,
    write_cache,
    read_cache,
)


__all__ = [
    'encode_fingerprint',
    'decode_fingerprint',
    'fingerprint_to_record',
    'record_to_fingerprint',
    'cache_path_for',
    'is_cache_file',
    'source_path_for',
    'write_cache',
    'read_cache',
]
