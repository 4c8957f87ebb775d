from __future__ import annotations

from typing import Tuple


def pack_bits(bits: str) -> Tuple[bytes, int]:
    """
    '0'/'1' string -> (bitstream MSB-first, lastbits)
    lastbits = numero di bit validi nell'ultimo byte (1..8) oppure 0 se bits vuoto.
    """
    if not bits:
        return b"", 0

    out_bytes = bytearray()
    current_byte = 0
    bit_count = 0

    for ch in bits:
        current_byte = (current_byte << 1) | (1 if ch == "1" else 0)
        bit_count += 1
        if bit_count == 8:
            out_bytes.append(current_byte)
            current_byte = 0
            bit_count = 0

    if bit_count > 0:
        current_byte = current_byte << (8 - bit_count)
        out_bytes.append(current_byte)
        lastbits = bit_count
    else:
        lastbits = 8  # tutti i byte pieni

    return bytes(out_bytes), lastbits


def unpack_bits(bitstream: bytes, nbits: int) -> str:
    """Inverse of pack_bits, given the total number of valid bits."""
    if nbits < 0 or nbits > len(bitstream) * 8:
        raise ValueError(f"nbits fuori range: {nbits} (bitstream di {len(bitstream)} byte)")
    out = []
    for i in range(nbits):
        byte = bitstream[i // 8]
        out.append("1" if (byte >> (7 - (i % 8))) & 1 else "0")
    return "".join(out)


def enc_varint(x: int) -> bytes:
    if x < 0:
        raise ValueError("varint negativo non supportato")
    out = bytearray()
    while True:
        b = x & 0x7F
        x >>= 7
        if x:
            out.append(0x80 | b)
        else:
            out.append(b)
            break
    return bytes(out)


def dec_varint(buf: bytes, idx: int) -> Tuple[int, int]:
    shift = 0
    x = 0
    while True:
        if idx >= len(buf):
            raise ValueError("varint troncato")
        b = buf[idx]
        idx += 1
        x |= (b & 0x7F) << shift
        if (b & 0x80) == 0:
            break
        shift += 7
        if shift > 63:
            raise ValueError("varint troppo grande")
    return x, idx
