"""Frame header validation and conversion of raw DTS frames to 16-bit big-endian."""

from __future__ import annotations

import enum

from .errors import BUFFER_PADDING, DcaError, ErrorCode

# Minimum size alignment, in bytes, of buffers handled by the converter.
FRAME_BUFFER_ALIGN = 16

# Number of bytes read by parse_header().
FRAME_HEADER_SIZE = 16

SYNC_WORD_CORE = 0x7FFE8001
SYNC_WORD_CORE_LE = 0xFE7F0180
SYNC_WORD_CORE_BE14 = 0x1FFFE800
SYNC_WORD_CORE_LE14 = 0xFF1F00E8
SYNC_WORD_EXSS = 0x64582025
SYNC_WORD_EXSS_LE = 0x58642520


class BitstreamFormat(enum.IntEnum):
    """Packing of a raw DTS frame."""

    BE16 = 0
    LE16 = 1
    BE14 = 2
    LE14 = 3


class FrameType(enum.IntEnum):
    """Kind of frame found at the start of a buffer."""

    CORE = 0
    EXSS = 1


class _BitReader:
    """Reads big-endian bit fields; bits past the end read as zero."""

    def __init__(self, data: bytes) -> None:
        self._value = int.from_bytes(data, "big")
        self._nbits = len(data) * 8
        self._pos = 0

    def get(self, n: int) -> int:
        if n == 0:
            return 0
        end = self._pos + n
        shift = self._nbits - end
        value = self._value >> shift if shift >= 0 else self._value << -shift
        self._pos = end
        return value & ((1 << n) - 1)

    def skip(self, n: int) -> None:
        self._pos += n


def _swap16(src: bytes) -> bytes:
    padded = src + b"\0" * (len(src) % 2)
    swapped = bytearray(len(padded))
    swapped[0::2] = padded[1::2]
    swapped[1::2] = padded[0::2]
    return bytes(swapped[: len(src)])


def _pack14(src: bytes, byteorder: str) -> bytes:
    """Join the low 14 bits of every 16-bit word into a continuous bitstream."""
    size = len(src)
    padded = src + b"\0" * (-size % FRAME_BUFFER_ALIGN)
    out = bytearray()
    for block in range(0, len(padded), 16):
        value = 0
        for off in range(block, block + 16, 2):
            word = int.from_bytes(padded[off:off + 2], byteorder) & 0x3FFF
            value = (value << 14) | word
        out += value.to_bytes(14, "big")
    return bytes(out[: size - size // 8])


def convert_bitstream(src: bytes) -> tuple[bytes, BitstreamFormat]:
    """Convert a raw frame to 16-bit big-endian form.

    Returns the converted data and the detected input format.
    """
    src = bytes(src)
    if len(src) < 4:
        raise DcaError(ErrorCode.EINVAL, "Frame too short to hold a sync word")

    sync = int.from_bytes(src[:4], "big")
    if sync in (SYNC_WORD_CORE, SYNC_WORD_EXSS):
        return src, BitstreamFormat.BE16
    if sync in (SYNC_WORD_CORE_LE, SYNC_WORD_EXSS_LE):
        return _swap16(src), BitstreamFormat.LE16
    if sync == SYNC_WORD_CORE_BE14:
        return _pack14(src, "big"), BitstreamFormat.BE14
    if sync == SYNC_WORD_CORE_LE14:
        return _pack14(src, "little"), BitstreamFormat.LE14
    raise DcaError(ErrorCode.ENOSYNC)


def parse_header(data: bytes) -> tuple[FrameType, int]:
    """Validate a frame header and return its type and raw frame size in bytes."""
    data = bytes(data)
    if len(data) < FRAME_HEADER_SIZE:
        raise DcaError(ErrorCode.EINVAL, "Not enough data for a frame header")

    header, fmt = convert_bitstream(data[:FRAME_HEADER_SIZE])
    bits = _BitReader(header)
    sync = bits.get(32)

    if sync == SYNC_WORD_CORE:
        normal_frame = bool(bits.get(1))
        deficit_samples = bits.get(5) + 1
        if normal_frame and deficit_samples != 32:
            raise DcaError(ErrorCode.ENOSYNC)
        bits.skip(1)
        npcmblocks = bits.get(7) + 1
        if (npcmblocks & 7) and (npcmblocks < 6 or normal_frame):
            raise DcaError(ErrorCode.ENOSYNC)
        frame_size = bits.get(14) + 1
        if frame_size < 96:
            raise DcaError(ErrorCode.ENOSYNC)
        if fmt in (BitstreamFormat.BE14, BitstreamFormat.LE14):
            return FrameType.CORE, frame_size * 8 // 14 * 2
        return FrameType.CORE, frame_size

    if sync == SYNC_WORD_EXSS:
        bits.skip(10)
        wide_hdr = bits.get(1)
        header_size = bits.get(8 + 4 * wide_hdr) + 1
        if (header_size & 3) or header_size < FRAME_HEADER_SIZE:
            raise DcaError(ErrorCode.ENOSYNC)
        frame_size = bits.get(16 + 4 * wide_hdr) + 1
        if (frame_size & 3) or frame_size < header_size:
            raise DcaError(ErrorCode.ENOSYNC)
        return FrameType.EXSS, frame_size

    raise DcaError(ErrorCode.ENOSYNC)


def buffer_size(size: int) -> int:
    """Return the padded buffer size needed to convert and parse a frame."""
    size = int(size)
    if size < 0:
        raise ValueError("frame size must not be negative")
    padding = -size & (FRAME_BUFFER_ALIGN - 1)
    return size + max(padding, BUFFER_PADDING)