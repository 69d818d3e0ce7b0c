"""Reading DTS packets from raw streams, WAV files and DTS-HD containers."""

from __future__ import annotations

import io
import os
import sys
from dataclasses import dataclass
from typing import BinaryIO, Iterator, Union

from .errors import DcaError, ErrorCode
from .frame import (
    FRAME_HEADER_SIZE,
    SYNC_WORD_CORE,
    SYNC_WORD_CORE_BE14,
    SYNC_WORD_CORE_LE,
    SYNC_WORD_CORE_LE14,
    SYNC_WORD_EXSS,
    SYNC_WORD_EXSS_LE,
    buffer_size,
    convert_bitstream,
    parse_header,
)

_TAG_DTSHDHDR = b"DTSHDHDR"
_TAG_AUPR_HDR = b"AUPR-HDR"
_TAG_STRMDATA = b"STRMDATA"

_TAG_RIFF = b"RIFF"
_TAG_WAVE = b"WAVE"
_TAG_DATA = b"data"

_AUPR_SIZE = 21
_INT64_MAX = (1 << 63) - 1

_SYNC_WORDS = frozenset(
    {
        SYNC_WORD_CORE,
        SYNC_WORD_EXSS,
        SYNC_WORD_CORE_LE,
        SYNC_WORD_EXSS_LE,
        SYNC_WORD_CORE_LE14,
        SYNC_WORD_CORE_BE14,
    }
)

Source = Union[str, bytes, "os.PathLike[str]", BinaryIO, None]


@dataclass(frozen=True)
class StreamInfo:
    """Audio presentation information from a DTS-HD container."""

    stream_size: int
    sample_rate: int
    nframes: int
    nframesamples: int
    npcmsamples: int
    ch_mask: int
    ndelaysamples: int


def _container_error(what: str) -> DcaError:
    return DcaError(ErrorCode.EBADDATA, f"Invalid {what} container")


class DtsStream:
    """Splits a DTS byte stream into packets ready for the decoder.

    ``source`` is a file name, a binary file object, or ``None`` for
    standard input. Each packet holds a core frame, a standalone EXSS frame,
    or a core frame followed by its EXSS frame, converted to 16-bit
    big-endian form with every frame padded to a multiple of four bytes.
    """

    def __init__(self, source: Source = None) -> None:
        if source is None:
            self._fp: BinaryIO = open(os.dup(sys.stdin.fileno()), "rb")
            self._owns = True
        elif isinstance(source, (str, bytes, os.PathLike)):
            self._fp = open(source, "rb")
            self._owns = True
        else:
            self._fp = source
            self._owns = False

        self._closed = False
        self._stream_size = 0
        self._stream_start = 0
        self._stream_end = 0
        self._aupr: dict[str, int] | None = None
        self._packet = bytearray()
        self._backup_sync = 0
        self._core_plus_exss = False

        try:
            self._probe_container()
        except BaseException:
            if self._owns:
                self._fp.close()
            raise

    # Container detection

    def _read_exact(self, size: int) -> bytes | None:
        chunks = []
        remaining = size
        while remaining > 0:
            chunk = self._fp.read(remaining)
            if not chunk:
                return None
            chunks.append(chunk)
            remaining -= len(chunk)
        return b"".join(chunks)

    def _probe_container(self) -> None:
        try:
            seekable = self._fp.seekable()
        except (AttributeError, OSError, ValueError):
            seekable = False
        if not seekable:
            return
        try:
            end = self._fp.seek(0, io.SEEK_END)
        except OSError:
            return
        if end > 0:
            self._stream_size = end
        self._fp.seek(0, io.SEEK_SET)
        if end > 0 and not self._parse_hd_header():
            self._parse_wav_header()

    def _parse_hd_header(self) -> bool:
        header = self._read_exact(16)
        if header is None or header[:8] != _TAG_DTSHDHDR:
            self._fp.seek(0, io.SEEK_SET)
            return False

        while True:
            tag = header[:8]
            size = int.from_bytes(header[8:16], "big")
            if size > _INT64_MAX:
                raise _container_error("DTS-HD")

            if tag == _TAG_STRMDATA:
                pos = self._fp.tell()
                self._stream_size = size
                self._stream_start = pos
                self._stream_end = pos + size
                return True

            if tag == _TAG_AUPR_HDR:
                if size < _AUPR_SIZE:
                    raise _container_error("DTS-HD")
                data = self._read_exact(_AUPR_SIZE)
                if data is None:
                    raise _container_error("DTS-HD")
                self._fp.seek(size - _AUPR_SIZE, io.SEEK_CUR)
                self._aupr = {
                    "sample_rate": int.from_bytes(data[3:6], "big"),
                    "nframes": int.from_bytes(data[6:10], "big"),
                    "nframesamples": int.from_bytes(data[10:12], "big"),
                    "npcmsamples": int.from_bytes(data[12:17], "big"),
                    "ch_mask": int.from_bytes(data[17:19], "big"),
                    "ndelaysamples": int.from_bytes(data[19:21], "big"),
                }
            else:
                self._fp.seek(size, io.SEEK_CUR)

            header = self._read_exact(16)
            if header is None:
                raise _container_error("DTS-HD")

    def _parse_wav_header(self) -> bool:
        riff = self._read_exact(8)
        if riff is None or riff[:4] != _TAG_RIFF:
            self._fp.seek(0, io.SEEK_SET)
            return False
        wave = self._read_exact(4)
        if wave != _TAG_WAVE:
            self._fp.seek(0, io.SEEK_SET)
            return False

        while True:
            chunk = self._read_exact(8)
            if chunk is None:
                raise _container_error("WAV")
            size = int.from_bytes(chunk[4:8], "little")
            if chunk[:4] == _TAG_DATA:
                pos = self._fp.tell()
                if size:
                    self._stream_size = size
                    self._stream_start = pos
                    self._stream_end = pos + size
                return True
            self._fp.seek(size, io.SEEK_CUR)

    # Frame reading

    def _read_frame(self, any_frame: bool) -> int | None:
        """Read one frame into the packet; return its sync word, or None at EOF.

        Raises ``DcaError(ENOSYNC)`` when the header is invalid, or when only
        an EXSS frame is wanted and another frame type follows.
        """
        if self._stream_end > 0 and self._fp.tell() >= self._stream_end:
            return None

        sync = self._backup_sync
        while sync not in _SYNC_WORDS:
            byte = self._fp.read(1)
            if not byte:
                return None
            sync = ((sync << 8) | byte[0]) & 0xFFFFFFFF

        if sync not in (SYNC_WORD_EXSS, SYNC_WORD_EXSS_LE) and not any_frame:
            self._backup_sync = sync
            raise DcaError(ErrorCode.ENOSYNC)

        self._backup_sync = 0

        rest = self._read_exact(FRAME_HEADER_SIZE - 4)
        if rest is None:
            return None
        header = sync.to_bytes(4, "big") + rest

        _, frame_size = parse_header(header)
        # Validates the size the converted frame will occupy.
        buffer_size(frame_size)

        body = self._read_exact(frame_size - FRAME_HEADER_SIZE)
        if body is None:
            return None

        data, _ = convert_bitstream(header + body)
        self._packet += data
        self._packet += bytes(-len(data) % 4)
        return sync

    def read(self) -> bytes | None:
        """Return the next packet, or ``None`` at end of stream."""
        if self._closed:
            raise DcaError(ErrorCode.EINVAL, "Stream is closed")

        while True:
            try:
                sync = self._read_frame(any_frame=True)
            except DcaError as exc:
                if exc.code != ErrorCode.ENOSYNC:
                    raise
                continue
            if sync is None:
                return None
            break

        if sync in (SYNC_WORD_CORE, SYNC_WORD_CORE_LE):
            try:
                found = self._read_frame(any_frame=False) is not None
                at_eof = not found
            except DcaError as exc:
                if exc.code != ErrorCode.ENOSYNC:
                    raise
                found = at_eof = False
            # Skip an incomplete core-only frame at the end of a core + EXSS stream.
            if at_eof and self._core_plus_exss:
                self._packet.clear()
                return None
            self._core_plus_exss = found
        else:
            self._core_plus_exss = False

        packet = bytes(self._packet)
        self._packet.clear()
        return packet

    def __iter__(self) -> Iterator[bytes]:
        while (packet := self.read()) is not None:
            yield packet

    def progress(self) -> int | None:
        """Return progress through the stream data as a percentage, or None if unknown."""
        if self._closed or self._stream_size <= 0:
            return None
        try:
            pos = self._fp.tell()
        except OSError:
            return None
        if pos < self._stream_start:
            return 0
        if pos >= self._stream_start + self._stream_size:
            return 100
        return (pos - self._stream_start) * 100 // self._stream_size

    @property
    def info(self) -> StreamInfo | None:
        """Audio presentation information, available only for DTS-HD containers."""
        if self._aupr is None:
            return None
        return StreamInfo(stream_size=self._stream_size, **self._aupr)

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Release the stream; a file opened by name is closed."""
        if self._closed:
            return
        self._closed = True
        if self._owns:
            self._fp.close()

    def __enter__(self) -> DtsStream:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


def open_stream(name: str | os.PathLike[str] | None = None) -> DtsStream:
    """Open a DTS stream from a file, or from standard input when ``name`` is None."""
    return DtsStream(name)