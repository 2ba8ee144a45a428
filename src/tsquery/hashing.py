"""
Deterministic fingerprints for query components.

================================================================================
FINGERPRINT MODEL
================================================================================

Every value object in tsquery exposes ``fingerprint() -> bytes``. A fingerprint
is built in two steps:

1. FIELD DIGEST (hash_fields)
   The object's scalar fields are fed, in a fixed order, into one hasher.
   Each part is written behind a one-byte type tag, and strings carry a
   length prefix, so ("6", "0ssum") and ("60s", "sum") never collide:

       "60s"  ->  b"s" + len(4 bytes, big-endian) + b"60s"
       True   ->  b"b" + b"\\x01"
       1.5    ->  b"f" + IEEE-754 double (8 bytes, big-endian)
       None   ->  b"n"

2. ORDERED COMBINATION (combine_ordered)
   The field digest and the fingerprints of nested values are combined by
   feeding each digest, in sequence, into a fresh hasher. The combination is
   ORDER-SENSITIVE:

       combine_ordered([a, b]) != combine_ordered([b, a])

   Order independence over a caller's input comes from sorting nested
   collections into canonical order at build time, not from the combiner.

Usage:
    field_digest = hash_fields("f1", True, encoding=UTF8)
    fp = combine_ordered([field_digest, tag.fingerprint()])
    hash(obj) == fingerprint_to_int(fp)
================================================================================
"""

import hashlib
import struct
from dataclasses import dataclass
from typing import Iterable, Optional, Union

UTF8 = "utf-8"
ASCII = "ascii"

FieldPart = Optional[Union[str, bool, int, float]]


@dataclass(frozen=True)
class HashConfig:
    """
    Hash settings for fingerprint construction.

    Fingerprints built with different configs are not comparable, so a
    config effectively names a cache namespace.
    """

    # Any name accepted by hashlib.new()
    algorithm: str

    # Description for logging
    description: str


MD5_CONFIG = HashConfig(
    algorithm="md5",
    description="MD5 (non-cryptographic use, 128 bit)",
)

BLAKE2B_CONFIG = HashConfig(
    algorithm="blake2b",
    description="BLAKE2b (512 bit)",
)

DEFAULT_HASH_CONFIG = MD5_CONFIG


def new_hasher(config: HashConfig = DEFAULT_HASH_CONFIG):
    """Return a fresh hashlib object for the configured algorithm."""
    return hashlib.new(config.algorithm)


def hash_fields(
    *parts: FieldPart,
    encoding: str = UTF8,
    config: HashConfig = DEFAULT_HASH_CONFIG,
) -> bytes:
    """
    Digest a fixed sequence of scalar fields.

    Args:
        *parts: Field values in the owning object's declared order
        encoding: Text encoding for string parts. Characters the encoding
            cannot represent are replaced with "?".
        config: Hash settings

    Returns:
        Raw digest bytes

    Raises:
        TypeError: If a part is not a str, bool, number or None
    """
    hasher = new_hasher(config)
    for part in parts:
        if part is None:
            hasher.update(b"n")
        elif isinstance(part, bool):
            # bool before int: bool is an int subclass
            hasher.update(b"b\x01" if part else b"b\x00")
        elif isinstance(part, str):
            data = part.encode(encoding, errors="replace")
            hasher.update(b"s" + struct.pack(">I", len(data)) + data)
        elif isinstance(part, (int, float)):
            hasher.update(b"f" + struct.pack(">d", float(part)))
        else:
            raise TypeError(f"Cannot hash field of type {type(part).__name__}")
    return hasher.digest()


def combine_ordered(
    digests: Iterable[bytes],
    config: HashConfig = DEFAULT_HASH_CONFIG,
) -> bytes:
    """
    Combine digests into one, respecting their order.

    Args:
        digests: One or more digests of equal length

    Returns:
        Raw digest bytes

    Raises:
        ValueError: If no digests are given or their lengths differ

    Example:
        >>> a, b = hash_fields("a"), hash_fields("b")
        >>> combine_ordered([a, b]) == combine_ordered([b, a])
        False
    """
    hasher = new_hasher(config)
    width = None
    for digest in digests:
        if width is None:
            width = len(digest)
        elif len(digest) != width:
            raise ValueError(
                f"All digests must have the same length ({width} bytes), "
                f"got {len(digest)} bytes"
            )
        hasher.update(digest)

    if width is None:
        raise ValueError("Must be at least 1 digest to combine")

    return hasher.digest()


def fingerprint_to_int(fingerprint: bytes) -> int:
    """Fold a fingerprint into a signed 64-bit int for ``__hash__``."""
    return int.from_bytes(fingerprint[:8], "big", signed=True)
