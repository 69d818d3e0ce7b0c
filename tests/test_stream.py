import io

import pytest

from dcadec.errors import DcaError, ErrorCode
from dcadec.frame import SYNC_WORD_CORE, SYNC_WORD_EXSS
from dcadec.stream import DtsStream, StreamInfo, open_stream


def core_frame(size=96, size_field=None):
    field = (size if size_field is None else size_field) - 1
    value = (1 << 27) | (31 << 22) | (15 << 14) | field
    head = SYNC_WORD_CORE.to_bytes(4, "big") + (value << 4).to_bytes(4, "big")
    return head + bytes(size - len(head))


def exss_frame(header_size=16, size=32):
    value = ((header_size - 1) << 16) | (size - 1)
    head = SYNC_WORD_EXSS.to_bytes(4, "big") + (value << 5).to_bytes(5, "big")
    return head + bytes(size - len(head))


def swap16(data):
    out = bytearray(data)
    out[0::2], out[1::2] = data[1::2], data[0::2]
    return bytes(out)


def to_be14(data, nwords):
    value = int.from_bytes(data, "big")
    total = len(data) * 8
    out = bytearray()
    for i in range(nwords):
        shift = total - 14 * (i + 1)
        word = (value >> shift) & 0x3FFF
        if word & 0x2000:
            word |= 0xC000
        out += word.to_bytes(2, "big")
    return bytes(out)


def chunk(tag, payload):
    return tag + len(payload).to_bytes(8, "big") + payload


def test_core_only_frames():
    frame = core_frame()
    stream = DtsStream(io.BytesIO(frame + frame))
    assert list(stream) == [frame, frame]


def test_core_plus_exss_packets():
    pair = core_frame() + exss_frame()
    stream = DtsStream(io.BytesIO(pair + pair))
    assert list(stream) == [pair, pair]


def test_trailing_core_only_frame_skipped():
    pair = core_frame() + exss_frame()
    stream = DtsStream(io.BytesIO(pair + core_frame()))
    assert list(stream) == [pair]


def test_standalone_exss():
    frame = exss_frame()
    stream = DtsStream(io.BytesIO(frame + frame))
    assert list(stream) == [frame, frame]


def test_leading_garbage_skipped():
    frame = core_frame()
    stream = DtsStream(io.BytesIO(b"\x01\x02\x03junk" + frame))
    assert stream.read() == frame
    assert stream.read() is None


def test_little_endian_converted():
    frame = core_frame()
    stream = DtsStream(io.BytesIO(swap16(frame)))
    assert list(stream) == [frame]


def test_be14_converted():
    frame = core_frame()
    raw = to_be14(frame, 54)
    stream = DtsStream(io.BytesIO(raw))
    packet = stream.read()
    assert packet[:16] == frame[:16]
    assert len(packet) % 4 == 0
    assert stream.read() is None


def test_invalid_header_resyncs():
    bad = core_frame(size=96, size_field=50)
    good = core_frame()
    stream = DtsStream(io.BytesIO(bad + good))
    assert list(stream) == [good]


def test_empty_stream():
    stream = DtsStream(io.BytesIO(b""))
    assert stream.read() is None
    assert stream.progress() is None


def test_raw_stream_progress_and_no_info():
    frame = core_frame()
    stream = DtsStream(io.BytesIO(frame))
    assert stream.info is None
    assert stream.progress() == 0
    assert stream.read() == frame
    assert stream.progress() == 100


def test_wav_container_limits_stream():
    frame = core_frame()
    fmt = b"fmt " + (16).to_bytes(4, "little") + bytes(16)
    data = b"data" + len(frame).to_bytes(4, "little") + frame
    body = b"WAVE" + fmt + data
    wav = b"RIFF" + len(body).to_bytes(4, "little") + body
    stream = DtsStream(io.BytesIO(wav + core_frame()))
    assert stream.progress() == 0
    assert list(stream) == [frame]
    assert stream.progress() == 100
    assert stream.info is None


def test_dtshd_container_info():
    frame = core_frame()
    aupr = (
        bytes(3)
        + (48000).to_bytes(3, "big")
        + (7).to_bytes(4, "big")
        + (512).to_bytes(2, "big")
        + (3584).to_bytes(5, "big")
        + (0x000F).to_bytes(2, "big")
        + (256).to_bytes(2, "big")
    )
    container = (
        chunk(b"DTSHDHDR", bytes(8))
        + chunk(b"AUPR-HDR", aupr + bytes(3))
        + chunk(b"STRMDATA", frame)
        + core_frame()
    )
    stream = DtsStream(io.BytesIO(container))
    assert stream.info == StreamInfo(
        stream_size=len(frame),
        sample_rate=48000,
        nframes=7,
        nframesamples=512,
        npcmsamples=3584,
        ch_mask=0x000F,
        ndelaysamples=256,
    )
    assert list(stream) == [frame]


def test_truncated_dtshd_container():
    with pytest.raises(DcaError) as excinfo:
        DtsStream(io.BytesIO(chunk(b"DTSHDHDR", bytes(8))))
    assert excinfo.value.code == ErrorCode.EBADDATA


def test_short_aupr_header_rejected():
    container = chunk(b"DTSHDHDR", bytes(8)) + chunk(b"AUPR-HDR", bytes(4))
    with pytest.raises(DcaError) as excinfo:
        DtsStream(io.BytesIO(container))
    assert excinfo.value.code == ErrorCode.EBADDATA


def test_open_stream_from_file(tmp_path):
    pair = core_frame() + exss_frame()
    path = tmp_path / "audio.dts"
    path.write_bytes(pair)
    with open_stream(path) as stream:
        assert list(stream) == [pair]
    assert stream.closed


def test_read_after_close_raises():
    stream = DtsStream(io.BytesIO(core_frame()))
    stream.close()
    with pytest.raises(DcaError) as excinfo:
        stream.read()
    assert excinfo.value.code == ErrorCode.EINVAL