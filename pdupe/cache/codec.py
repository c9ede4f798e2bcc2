"""
Serialization of fingerprints to the sidecar record format.

A record is a JSON object compressed with gzip:

    {"Size": 184223, "Name": "/photos/a.jpg", "Path": "", "Cdata": "<base64>"}

Cdata holds the cell bytes as base64 text. Decoding also accepts Cdata as a
JSON list of integers, and a missing Size (older records) as 0.
"""

from __future__ import annotations

import base64
import binascii
import gzip
import json
import zlib

from ..exceptions import CacheIOError
from ..models import Fingerprint


def fingerprint_to_record(fp: Fingerprint) -> dict:
    """Convert a Fingerprint to its JSON record."""
    return {
        'Size': fp.size,
        'Name': fp.name,
        # Recomputed from the sidecar location on load
        'Path': "",
        'Cdata': base64.b64encode(fp.cells).decode('ascii'),
    }


def _decode_cdata(cdata) -> bytes:
    """Decode the Cdata field from base64 text or a list of byte values."""
    if isinstance(cdata, str):
        return base64.b64decode(cdata, validate=True)
    if isinstance(cdata, list):
        return bytes(cdata)
    raise TypeError(f"Cdata must be a base64 string or list, got {type(cdata).__name__}")


def record_to_fingerprint(record: dict) -> Fingerprint:
    """
    Convert a JSON record to a Fingerprint.

    Raises:
        CacheIOError: If fields are missing or have the wrong types
    """
    try:
        name = record['Name']
        size = record.get('Size', 0)
        cells = _decode_cdata(record['Cdata'])
    except (KeyError, TypeError, ValueError, AttributeError, binascii.Error) as e:
        raise CacheIOError(f"Malformed fingerprint record: {e}") from e

    if not isinstance(name, str) or not isinstance(size, int) or isinstance(size, bool):
        raise CacheIOError("Malformed fingerprint record: bad Name or Size field")

    return Fingerprint(name=name, size=size, cells=cells)


def encode_fingerprint(fp: Fingerprint) -> bytes:
    """Serialize and gzip-compress a Fingerprint."""
    payload = json.dumps(fingerprint_to_record(fp), separators=(',', ':'))
    return gzip.compress(payload.encode('utf-8'))


def decode_fingerprint(data: bytes) -> Fingerprint:
    """
    Decompress and deserialize a Fingerprint.

    The returned fingerprint has an empty path; callers that know where the
    record came from should resolve it.

    Raises:
        CacheIOError: On decompression, JSON or record errors
    """
    try:
        payload = gzip.decompress(data)
    except (OSError, EOFError, zlib.error) as e:
        raise CacheIOError(f"Cannot decompress fingerprint data: {e}") from e

    try:
        record = json.loads(payload)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise CacheIOError(f"Cannot parse fingerprint data: {e}") from e

    if not isinstance(record, dict):
        raise CacheIOError("Malformed fingerprint record: expected a JSON object")
    return record_to_fingerprint(record)


__all__ = [
    'fingerprint_to_record',
    'record_to_fingerprint',
    'encode_fingerprint',
    'decode_fingerprint',
]
