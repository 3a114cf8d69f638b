"""Stable 32-bit identifiers for files and functions (FNV-1a)."""

FNV32_OFFSET_BASIS = 0x811C9DC5
FNV32_PRIME = 0x01000193
_MASK32 = 0xFFFFFFFF


def fnv1a_32(data: bytes) -> int:
    h = FNV32_OFFSET_BASIS
    for byte in data:
        h ^= byte
        h = (h * FNV32_PRIME) & _MASK32
    return h


def identity_hash(text: str) -> int:
    """Hash a string's UTF-8 bytes. Same input, same id, in every process."""
    return fnv1a_32(text.encode("utf-8"))
