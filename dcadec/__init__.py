"""DTS stream reading, frame header parsing, transforms, downmix tables and WAV output."""

__version__ = "0.2.0"

__all__ = ["errors", "tables", "frame", "idct", "stream", "waveout"]