from __future__ import annotations


def pack_u8(value: int) -> bytes:
    if value < 0 or value > 0xFF:
        raise ValueError("value must be between 0 and 255")
    return value.to_bytes(1, byteorder="big")


def pack_u16(value: int) -> bytes:
    if value < 0 or value > 0xFFFF:
        raise ValueError("value must be between 0 and 65535")
    return value.to_bytes(2, byteorder="big")


def unpack_u16(data: bytes) -> int:
    if len(data) != 2:
        raise ValueError("u16 field must be exactly 2 bytes")
    return (data[0] << 8) | data[1]
