# dcadec

Tools for handling DTS Coherent Acoustics audio streams. The package has no
required dependencies.

- `dcadec.frame` detects how a raw frame is packed: 16-bit or 14-bit words, big-
  or little-endian. It converts the frame to 16-bit big-endian form and
  validates DTS core and extension sub-stream (EXSS) frame headers.
- `dcadec.stream` splits raw DTS files, DTS-HD containers and WAV-wrapped
  streams into packets. A packet is a core frame, a standalone EXSS frame, or a
  core frame followed by its EXSS frame.
- `dcadec.waveout` writes planar PCM samples to WAV files. It writes either one
  WAVE_FORMAT_EXTENSIBLE file or one mono file per channel.
- `dcadec.idct` provides a fast floating-point inverse DCT and inverse MDCT
  (`IdctContext`).
- `dcadec.tables` holds the downmix coefficient tables, with the lookups
  `dmix_coeff`, `dmix_coeff_inv` and `primary_channel_count`.
- `dcadec.errors` holds `ErrorCode`, `WarningCode`, `DecoderFlag`, `Profile`,
  `MatrixEncoding`, `LogLevel`, the `DcaError` exception, `strerror()` and
  `version()`.

## Installation

```
pip install .
```

## Reading packets

```python
from dcadec.stream import open_stream

with open_stream("movie.dts") as stream:
    for packet in stream:
        print(len(packet), stream.progress())
    print(stream.info)
```

`open_stream(None)` reads from standard input. `DtsStream` also accepts an
open binary file object. `DtsStream.read()` returns the next packet as
`bytes`, or `None` at the end of the stream. Each frame in a packet has already
been converted to 16-bit big-endian form and padded to a multiple of four
bytes.

`progress()` returns a percentage between 0 and 100, or `None` when the stream
size is unknown. For example, the size is unknown when the input cannot seek.
`info` is a `StreamInfo` when a DTS-HD container has an audio presentation
header (`AUPR-HDR`). Otherwise it is `None`.

## Parsing a frame header

```python
from dcadec.frame import parse_header, convert_bitstream

frame_type, size = parse_header(raw[:16])        # FrameType, raw size in bytes
converted, fmt = convert_bitstream(raw[:size])   # bytes, BitstreamFormat
```

`buffer_size(size)` gives the padded buffer size for a frame of `size` bytes.

## Writing WAV output

```python
from dcadec.waveout import WaveWriter, WaveFlag

with WaveWriter("out.wav", WaveFlag.NONE) as wav:
    clipped = wav.write([left, right], channel_mask=0x3, sample_rate=48000,
                        bits_per_sample=24)
```

The first call to `write` fixes the channel mask, the sample rate and the bit
depth. Later calls that change any of them raise `DcaError` with `EOUTCHG`.
Samples that fall out of range raise `DcaError` with `EOVERFLOW`, unless you
set `WaveFlag.CLIP`. With that flag the writer clips those samples and
`write` returns how many it clipped.

When you pass `WaveFlag.MONO`, the name must be a pattern that contains `%s`
exactly once. The writer replaces it with the DTS name of each speaker. On
close, the writer rewrites the header with the final sizes if the output can
seek.

## Errors

Failures raise `DcaError`. Its `code` attribute holds an `ErrorCode`.

```python
from dcadec.errors import strerror, ErrorCode

strerror(-ErrorCode.ENOSYNC)   # "Synchronization error"
```

## What this package does not do

The package does not decode audio. It has no decoder for core, XLL or LBR
audio, and so it cannot turn packets into PCM samples. It has no command-line
program. It reads and splits streams, parses frame headers, provides the
transform and table building blocks, and writes PCM that you supply to WAV
files.

## Testing

```
pip install .[test]
pytest
```