"""Derive the on-disk name of a new upload from its `Upload-Metadata` header."""

import base64
import binascii
import logging
import time
from typing import Callable, Dict, Mapping, Optional

logger = logging.getLogger(__name__)

UPLOAD_METADATA_HEADER = "upload-metadata"
FILENAME_KEY = "filename"


def _epoch_millis() -> int:
    return int(time.time() * 1000)


_URL_SAFE_ALPHABET = str.maketrans("-_", "+/")


def _decode_base64_text(encoded: str) -> str:
    """Decode standard or URL-safe base64, padded or not, into UTF-8 text."""
    encoded = encoded.strip().translate(_URL_SAFE_ALPHABET)
    encoded += "=" * (-len(encoded) % 4)
    return base64.b64decode(encoded, validate=True).decode("utf-8")


def parse_upload_metadata(header: Optional[str]) -> Dict[str, str]:
    """
    Decode an `Upload-Metadata` header value.

    The header is a comma-separated list of `key base64(value)` pairs. A key
    without a value maps to the empty string, a repeated key keeps its last
    value, and a pair whose value is not valid base64 UTF-8 text is skipped.
    """
    metadata: Dict[str, str] = {}
    if not header:
        return metadata

    for pair in header.split(","):
        pair = pair.strip()
        if not pair:
            continue
        key, _, encoded = pair.partition(" ")
        try:
            value = _decode_base64_text(encoded)
        except (binascii.Error, UnicodeDecodeError) as e:
            logger.debug("Skipping undecodable upload metadata pair %r: %s", key, e)
            continue
        metadata[key] = value
    return metadata


def resolve_upload_name(header: Optional[str], clock: Callable[[], int] = _epoch_millis) -> str:
    """Return the client supplied filename, or `file-<epoch millis>` when there is none."""
    filename = parse_upload_metadata(header).get(FILENAME_KEY)
    if filename:
        return filename
    return f"file-{clock()}"


def upload_name_from_headers(headers: Mapping[str, str]) -> str:
    """Naming function handed to the upload engine."""
    return resolve_upload_name(headers.get(UPLOAD_METADATA_HEADER))
