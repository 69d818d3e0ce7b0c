"""Writing decoded PCM audio to WAV files."""

from __future__ import annotations

import enum
import os
import sys
from collections.abc import Sequence
from typing import BinaryIO, Union

from .errors import DcaError, ErrorCode

# Number of native DTS speaker positions.
_SPEAKER_COUNT = 28

SPEAKER_NAMES: tuple[str, ...] = (
    "C", "L", "R", "Ls",
    "Rs", "LFE", "Cs", "Lsr",
    "Rsr", "Lss", "Rss", "Lc",
    "Rc", "Lh", "Ch", "Rh",
    "LFE2", "Lw", "Rw", "Oh",
    "Lhs", "Rhs", "Chr", "Lhr",
    "Rhr", "Cl", "Ll", "Rl",
    "RSV1", "RSV2", "RSV3", "RSV4",
)

_UINT32_MAX = 0xFFFFFFFF
_MAX_PATTERN_LENGTH = 1020

# KSDATAFORMAT_SUBTYPE_PCM, as four little-endian 32-bit words.
_PCM_SUBFORMAT = (0x00000001, 0x00100000, 0xAA000080, 0x719B3800)

Target = Union[str, "os.PathLike[str]", BinaryIO, None]


class WaveFlag(enum.IntFlag):
    """Options for :class:`WaveWriter`."""

    NONE = 0
    MONO = 0x01
    CLIP = 0x02


def _u16(value: int) -> bytes:
    return (value & 0xFFFF).to_bytes(2, "little")


def _u32(value: int) -> bytes:
    return (value & _UINT32_MAX).to_bytes(4, "little")


def _check_pattern(name: object) -> str:
    if not isinstance(name, str) or len(name) >= _MAX_PATTERN_LENGTH:
        raise DcaError(ErrorCode.EINVAL, "Mono output needs a file name pattern")
    pos = name.find("%")
    if pos < 0 or name[pos + 1:pos + 2] != "s" or "%" in name[pos + 2:]:
        raise DcaError(
            ErrorCode.EINVAL, "File name pattern must hold exactly one '%s'"
        )
    return name


class WaveWriter:
    """Writes planar PCM samples to a WAV file.

    ``name`` is a file name, a binary file object, or ``None`` for standard
    output. With :attr:`WaveFlag.MONO` it must be a pattern holding ``%s``,
    which is replaced by each DTS speaker name to make one mono file per
    channel. The first call to :meth:`write` fixes the audio parameters.
    """

    def __init__(self, name: Target = None, flags: int = WaveFlag.NONE) -> None:
        self.flags = WaveFlag(flags)
        self._pattern: str | None = None
        self._files: list[BinaryIO | None] = [None] * _SPEAKER_COUNT
        self._owned: list[bool] = [False] * _SPEAKER_COUNT
        self._closed = False

        self.size = 0
        self.channel_mask = 0
        self.nchannels = 0
        self.sample_rate = 0
        self.bits_per_sample = 0
        self.bytes_per_sample = 0
        self.block_align = 0

        if self.flags & WaveFlag.MONO:
            self._pattern = _check_pattern(name)
            return

        try:
            if name is None:
                self._files[0] = open(os.dup(sys.stdout.fileno()), "wb")
                self._owned[0] = True
            elif isinstance(name, (str, os.PathLike)):
                self._files[0] = open(name, "wb")
                self._owned[0] = True
            else:
                self._files[0] = name
        except OSError as exc:
            raise DcaError(ErrorCode.EIO, str(exc)) from exc

    def _header(self) -> bytes:
        extensible = not (self.flags & WaveFlag.MONO)
        extra = 24 if extensible else 0

        if self.size and self.size <= _UINT32_MAX - (36 + extra):
            riff_size = self.size + 36 + extra
        else:
            riff_size = 0

        parts = [
            b"RIFF",
            _u32(riff_size),
            b"WAVE",
            b"fmt ",
            _u32(16 + extra),
            _u16(0xFFFE if extensible else 0x0001),
            _u16(self.nchannels if extensible else 1),
            _u32(self.sample_rate),
            _u32(self.sample_rate * self.block_align),
            _u16(self.block_align),
            _u16(self.bytes_per_sample << 3),
        ]
        if extensible:
            parts += [
                _u16(22),
                _u16(self.bits_per_sample),
                _u32(self.channel_mask),
            ]
            parts += [_u32(word) for word in _PCM_SUBFORMAT]
        parts += [
            b"data",
            _u32(self.size if self.size <= _UINT32_MAX else 0),
        ]
        return b"".join(parts)

    @staticmethod
    def _emit(fp: BinaryIO, data: bytes) -> None:
        try:
            fp.write(data)
        except OSError as exc:
            raise DcaError(ErrorCode.EIO, str(exc)) from exc

    def _encode(self, planes: Sequence[Sequence[int]], nsamples: int) -> tuple[bytes, int]:
        bits = self.bits_per_sample
        bps = self.bytes_per_sample
        limit = 1 << (bits - 1)
        out_of_range = ~((1 << bits) - 1)
        byte_mask = (1 << (8 * bps)) - 1
        nclipped = 0

        out = bytearray()
        for i in range(nsamples):
            for plane in planes:
                sample = int(plane[i])
                if (sample + limit) & out_of_range:
                    sample = -limit if sample < 0 else limit - 1
                    nclipped += 1
                out += (sample & byte_mask).to_bytes(bps, "little")

        if nclipped and not (self.flags & WaveFlag.CLIP):
            raise DcaError(ErrorCode.EOVERFLOW)
        return bytes(out), nclipped

    def _open_channel_file(self, index: int, speaker: int) -> BinaryIO:
        fp = self._files[index]
        if fp is None:
            assert self._pattern is not None
            path = self._pattern.replace("%s", SPEAKER_NAMES[speaker], 1)
            try:
                fp = open(path, "wb")
            except OSError as exc:
                raise DcaError(ErrorCode.EIO, str(exc)) from exc
            self._files[index] = fp
            self._owned[index] = True
        return fp

    def _start(self, channel_mask: int, sample_rate: int, bits_per_sample: int) -> None:
        self.channel_mask = channel_mask
        self.nchannels = bin(channel_mask & _UINT32_MAX).count("1")
        self.sample_rate = sample_rate
        self.bits_per_sample = bits_per_sample
        self.bytes_per_sample = (bits_per_sample + 7) >> 3

        if self.flags & WaveFlag.MONO:
            self.block_align = self.bytes_per_sample
            header = self._header()
            speakers = [s for s in range(_SPEAKER_COUNT) if channel_mask & (1 << s)]
            for index, speaker in enumerate(speakers):
                self._emit(self._open_channel_file(index, speaker), header)
        else:
            self.block_align = self.nchannels * self.bytes_per_sample
            fp = self._files[0]
            assert fp is not None
            self._emit(fp, self._header())

    def write(
        self,
        samples: Sequence[Sequence[int]],
        channel_mask: int,
        sample_rate: int,
        bits_per_sample: int,
    ) -> int:
        """Write one block of planar samples; return the number of clipped samples.

        Raises :class:`DcaError` with ``EOVERFLOW`` when samples are out of
        range and :attr:`WaveFlag.CLIP` is not set, and with ``EOUTCHG`` when
        the audio parameters differ from the first block.
        """
        if self._closed:
            raise DcaError(ErrorCode.EINVAL, "Writer is closed")

        nsamples = len(samples[0]) if len(samples) else 0
        if nsamples == 0:
            return 0
        if not channel_mask:
            raise DcaError(ErrorCode.EINVAL, "Empty channel mask")
        if not 8000 <= sample_rate <= 384000:
            raise DcaError(ErrorCode.EINVAL, "Sample rate out of range")
        if not 8 <= bits_per_sample <= 32:
            raise DcaError(ErrorCode.EINVAL, "Bits per sample out of range")

        nchannels = bin(channel_mask & _UINT32_MAX).count("1")
        if len(samples) != nchannels:
            raise DcaError(ErrorCode.EINVAL, "Number of planes does not match channel mask")
        if any(len(plane) != nsamples for plane in samples):
            raise DcaError(ErrorCode.EINVAL, "Planes differ in length")

        if not self.size:
            self._start(channel_mask, sample_rate, bits_per_sample)
        elif (
            channel_mask != self.channel_mask
            or sample_rate != self.sample_rate
            or bits_per_sample != self.bits_per_sample
        ):
            raise DcaError(ErrorCode.EOUTCHG)

        if self.flags & WaveFlag.MONO:
            nclipped = 0
            for index in range(self.nchannels):
                data, clipped = self._encode([samples[index]], nsamples)
                fp = self._files[index]
                assert fp is not None
                self._emit(fp, data)
                nclipped += clipped
        else:
            data, nclipped = self._encode(samples, nsamples)
            fp = self._files[0]
            assert fp is not None
            self._emit(fp, data)

        self.size += nsamples * self.block_align
        return nclipped

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Rewrite the header with final sizes where possible and close the output."""
        if self._closed:
            return
        self._closed = True
        for fp, owned in zip(self._files, self._owned):
            if fp is None:
                continue
            try:
                try:
                    seekable = fp.seekable()
                except (AttributeError, OSError, ValueError):
                    seekable = False
                if self.size and seekable:
                    try:
                        fp.seek(0)
                        fp.write(self._header())
                    except OSError:
                        pass
                try:
                    fp.flush()
                except (OSError, ValueError):
                    pass
            finally:
                if owned:
                    fp.close()

    def __enter__(self) -> WaveWriter:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()