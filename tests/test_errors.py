import pytest

from dcadec.errors import (
    API_VERSION_MAJOR,
    API_VERSION_MINOR,
    API_VERSION_PATCH,
    DcaError,
    ErrorCode,
    WarningCode,
    strerror,
    version,
    version_code,
)


@pytest.mark.parametrize(
    "code, text",
    [
        (ErrorCode.EINVAL, "Invalid argument"),
        (ErrorCode.EBADCRC, "CRC check failed"),
        (ErrorCode.ENOSYNC, "Synchronization error"),
        (ErrorCode.EOUTCHG, "PCM output parameters changed"),
        (ErrorCode.EFAIL, "Unspecified error"),
    ],
)
def test_strerror_errors(code, text):
    assert strerror(-code) == text


@pytest.mark.parametrize(
    "code, text",
    [
        (WarningCode.COREAUXFAILED, "Failed to parse core auxiliary data"),
        (WarningCode.XLLCLIPPED, "Clipping detected in XLL output"),
        (WarningCode.XLLLOSSY, "XLL output not lossless"),
    ],
)
def test_strerror_warnings(code, text):
    assert strerror(code) == text


def test_strerror_zero_and_unknown():
    assert strerror(0) == "No error"
    assert strerror(1000) == "Unspecified warning"
    assert strerror(-1000) == "Unspecified error"


def test_dca_error_default_message():
    err = DcaError(ErrorCode.ENOSYNC)
    assert err.code == ErrorCode.ENOSYNC
    assert err.message == "Synchronization error"
    assert str(err) == "Synchronization error"


def test_dca_error_accepts_negative_code_and_message():
    err = DcaError(-ErrorCode.EIO, "disk gone")
    assert err.code == ErrorCode.EIO
    assert err.message == "disk gone"
    assert str(err) == "disk gone"


def test_dca_error_unknown_code():
    err = DcaError(99)
    assert err.code == 99
    assert err.message == "Unspecified error"


def test_version_matches_api_numbers():
    assert version() == version_code(
        API_VERSION_MAJOR, API_VERSION_MINOR, API_VERSION_PATCH
    )


def test_version_code_orders_components():
    assert version_code(1, 0, 0) > version_code(0, 4095, 4095)
    assert version_code(0, 1, 0) > version_code(0, 0, 4095)
    assert version_code(0, 0, 2) > version_code(0, 0, 1)