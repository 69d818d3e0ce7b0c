"""Error and warning codes, decoder flags, profiles and version information."""

from __future__ import annotations

import enum

API_VERSION_MAJOR = 0
API_VERSION_MINOR = 1
API_VERSION_PATCH = 0

# Bytes of zero padding that must follow a packet handed to the parser.
BUFFER_PADDING = 8


class ErrorCode(enum.IntEnum):
    """Failure codes; a function reports one by raising :class:`DcaError`."""

    EINVAL = 1
    EBADDATA = 2
    EBADCRC = 3
    EBADREAD = 4
    ENOSYNC = 5
    ENOSUP = 6
    ENOMEM = 7
    EOVERFLOW = 8
    EIO = 9
    EOUTCHG = 10
    EFAIL = 32


class WarningCode(enum.IntEnum):
    """Non-fatal conditions reported alongside a successful result."""

    COREAUXFAILED = 1
    COREEXTFAILED = 2
    EXSSFAILED = 3
    XLLFAILED = 4
    XLLSYNCERR = 5
    XLLBANDERR = 6
    XLLCONFERR = 7
    XLLCLIPPED = 8
    XLLLOSSY = 9


class DecoderFlag(enum.IntFlag):
    """Options that control decoding."""

    NONE = 0
    CORE_ONLY = 0x01
    CORE_BIT_EXACT = 0x02
    CORE_SYNTH_X96 = 0x04
    CORE_LFE_IIR = 0x08
    CORE_LFE_FIR = 0x10
    KEEP_DMIX_2CH = 0x20
    KEEP_DMIX_6CH = 0x40
    NATIVE_LAYOUT = 0x80
    STRICT = 0x100
    DONT_CLIP = 0x200
    KEEP_DMIX_MASK = KEEP_DMIX_2CH | KEEP_DMIX_6CH


class Profile(enum.IntFlag):
    """Kind of DTS profile encoded or decoded."""

    UNKNOWN = 0
    DS = 0x01
    DS_96_24 = 0x02
    DS_ES = 0x04
    HD_HRA = 0x08
    HD_MA = 0x10
    EXPRESS = 0x20


class MatrixEncoding(enum.IntEnum):
    """Matrix encoding of a stereo signal."""

    NONE = 0
    SURROUND = 1
    HEADPHONE = 2


class LogLevel(enum.IntEnum):
    """Severity of a log message."""

    ERROR = 0
    WARNING = 1
    INFO = 2
    VERBOSE = 3
    DEBUG = 4


_ERROR_MESSAGES: dict[int, str] = {
    ErrorCode.EINVAL: "Invalid argument",
    ErrorCode.EBADDATA: "Invalid bitstream format",
    ErrorCode.EBADCRC: "CRC check failed",
    ErrorCode.EBADREAD: "Bitstream navigation error",
    ErrorCode.ENOSYNC: "Synchronization error",
    ErrorCode.ENOSUP: "Unsupported feature",
    ErrorCode.ENOMEM: "Memory allocation error",
    ErrorCode.EOVERFLOW: "PCM output overflow",
    ErrorCode.EIO: "I/O error",
    ErrorCode.EOUTCHG: "PCM output parameters changed",
}

_WARNING_MESSAGES: dict[int, str] = {
    WarningCode.COREAUXFAILED: "Failed to parse core auxiliary data",
    WarningCode.COREEXTFAILED: "Failed to parse core extension",
    WarningCode.EXSSFAILED: "Failed to parse EXSS",
    WarningCode.XLLFAILED: "Failed to parse XLL",
    WarningCode.XLLSYNCERR: "XLL synchronization error",
    WarningCode.XLLBANDERR: "XLL frequency band error",
    WarningCode.XLLCONFERR: "XLL configuration error",
    WarningCode.XLLCLIPPED: "Clipping detected in XLL output",
    WarningCode.XLLLOSSY: "XLL output not lossless",
}


def strerror(errnum: int) -> str:
    """Describe a negative error code or a positive warning code."""
    errnum = int(errnum)
    if errnum < 0:
        return _ERROR_MESSAGES.get(-errnum, "Unspecified error")
    if errnum > 0:
        return _WARNING_MESSAGES.get(errnum, "Unspecified warning")
    return "No error"


class DcaError(Exception):
    """Raised when decoding, reading or writing fails."""

    def __init__(self, code: int, message: str | None = None) -> None:
        try:
            self.code: int = ErrorCode(abs(int(code)))
        except ValueError:
            self.code = abs(int(code))
        self.message = message if message is not None else strerror(-self.code)
        super().__init__(self.message)


def version_code(major: int, minor: int, patch: int) -> int:
    """Pack a version triple into a single comparable integer."""
    return ((major << 24) | (minor << 12) | patch) & 0xFFFFFFFF


def version() -> int:
    """Return the packed API version."""
    return version_code(API_VERSION_MAJOR, API_VERSION_MINOR, API_VERSION_PATCH)