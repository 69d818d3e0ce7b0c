"""Fast floating point inverse DCT and inverse MDCT."""

from __future__ import annotations

import math
from collections.abc import Sequence

MAX_BITS = 8


class IdctContext:
    """Precomputed tables for transforms of size ``1 << nbits``."""

    def __init__(self, nbits: int, scale: float = 1.0) -> None:
        if not 2 <= nbits <= MAX_BITS:
            raise ValueError(f"nbits must be in range 2..{MAX_BITS}")

        m = nbits
        n = 1 << m
        n2 = n >> 1
        n4 = n >> 2

        self.nbits = nbits
        self.scale = scale

        cs: list[float] = []
        for i in range(m - 1):
            cs.extend(
                math.cos(math.pi * (4 * j + 1) * (n4 >> i) / n)
                for j in range(1 << i)
            )
        self._cs = cs

        angles = [math.pi * (1.0 / (n << 2) + i / (n << 1)) for i in range(n2)]
        self._ac = [scale * math.cos(a) for a in angles]
        self._as = [scale * math.sin(a) for a in angles]

        width = m - 1
        self._permute = [
            int(format(i, f"0{width}b")[::-1], 2) if width else 0
            for i in range(n2)
        ]

    def _proc(self, x: list[float], negate: bool) -> list[float]:
        m = self.nbits - 1
        n = 1 << m
        n2 = n >> 1
        y = list(x[:n])

        for i in range(m - 2, -1, -1):
            f0 = n >> i
            f1 = f0 >> 1
            f2 = f1 >> 1
            f3 = ((1 << i) - 1) << 1
            for j in range(f2, 0, -1):
                for k in range(f3, -1, -1):
                    p = f0 - j + k * f1
                    q = f1 - j + k * f1
                    y[q] -= y[p]
                    y[p] += y[p]

        for i in range(1, n - 1):
            k = self._permute[i]
            if i < k:
                y[i], y[k] = y[k], y[i]

        base = 0
        for i in range(m):
            p = 1 << i
            q = 2 << i
            for j in range(p):
                c = self._cs[base + j]
                for k in range(j, n, q):
                    tmp = y[k + p] * c
                    y[k + p] = y[k] - tmp
                    y[k] += tmp
            base += p

        out = [0.0] * n
        sign = -1.0 if negate else 1.0
        for i in range(n2):
            out[2 * i] = y[i]
            out[2 * i + 1] = sign * y[n - 1 - i]
        return out

    def _split(self, samples: Sequence[float], half: int) -> tuple[list[float], list[float]]:
        a = [0.0] * half
        b = [0.0] * half
        a[0] = float(samples[0])
        b[0] = float(samples[2 * half - 1])
        for i in range(1, half):
            a[i] = samples[2 * i - 1] + samples[2 * i]
            b[half - i] = samples[2 * i - 1] - samples[2 * i]
        return self._proc(a, False), self._proc(b, True)

    def idct(self, samples: Sequence[float]) -> list[float]:
        """Return the scaled inverse DCT of ``1 << nbits`` samples."""
        n = 1 << self.nbits
        if len(samples) != n:
            raise ValueError(f"expected {n} samples, got {len(samples)}")
        n2 = n >> 1

        a, b = self._split(samples, n2)
        output = [0.0] * n
        for i, (ac, as_) in enumerate(zip(self._ac, self._as)):
            output[i] = a[i] * ac + b[i] * as_
            output[n - i - 1] = a[i] * as_ - b[i] * ac
        return output

    def imdct(self, samples: Sequence[float]) -> list[float]:
        """Return ``2 << nbits`` output samples from ``1 << nbits`` coefficients."""
        n2 = 1 << self.nbits
        if len(samples) != n2:
            raise ValueError(f"expected {n2} samples, got {len(samples)}")
        n = n2 << 1
        n4 = n2 >> 1

        a, b = self._split(samples, n4)
        output = [0.0] * n
        for i in range(n4):
            ac = self._ac[i]
            as_ = self._as[i]
            output[n4 + i] = -a[i] * as_ + b[i] * ac
            output[n - n4 - i - 1] = -a[i] * ac - b[i] * as_

        for i in range(n4):
            output[i] = -output[n2 - i - 1]
            output[n - i - 1] = output[n2 + i]
        return output