from __future__ import annotations

from itertools import cycle
from typing import Union

from .errors import ConfigError

Key = Union[bytes, str]


def _key_bytes(key: Key) -> bytes:
    raw = key.encode("utf-8") if isinstance(key, str) else bytes(key)
    if not raw:
        raise ConfigError("Obfuscation key must not be empty")
    return raw


def xor_bytes(data: bytes, key: Key) -> bytes:
    """XOR every byte of ``data`` with ``key[i % len(key)]``.

    This is reversible obfuscation, not encryption. Applying it twice with the
    same key returns the original bytes; a corrupted input decodes to garbage
    without any error at this layer.
    """
    raw_key = _key_bytes(key)
    return bytes(b ^ k for b, k in zip(data, cycle(raw_key)))


def encode(data: bytes, key: Key) -> bytes:
    return xor_bytes(data, key)


def decode(data: bytes, key: Key) -> bytes:
    return xor_bytes(data, key)


__all__ = ["Key", "xor_bytes", "encode", "decode"]
