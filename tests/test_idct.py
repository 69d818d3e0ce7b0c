import math

import pytest

from dcadec.idct import MAX_BITS, IdctContext


def _signal(n, seed=1):
    return [math.sin(0.7 * (i + seed)) * (i % 5 - 2) + 0.25 * seed for i in range(n)]


@pytest.mark.parametrize("nbits", [1, MAX_BITS + 1, 0, -3])
def test_rejects_bad_size(nbits):
    with pytest.raises(ValueError):
        IdctContext(nbits, 1.0)


def test_idct_length_and_zero():
    ctx = IdctContext(5, 1.0)
    assert ctx.idct([0.0] * 32) == [0.0] * 32


def test_idct_wrong_length():
    ctx = IdctContext(4, 1.0)
    with pytest.raises(ValueError):
        ctx.idct([0.0] * 15)


def test_imdct_wrong_length():
    ctx = IdctContext(4, 1.0)
    with pytest.raises(ValueError):
        ctx.imdct([0.0] * 32)


def test_idct_impulse_small():
    ctx = IdctContext(2, 1.0)
    out = ctx.idct([1.0, 0.0, 0.0, 0.0])
    expected = [math.cos(k * math.pi / 16) for k in (1, 3, 5, 7)]
    assert out == pytest.approx(expected, abs=1e-12)


def test_idct_small_is_involution_up_to_gain():
    ctx = IdctContext(2, 1.0)
    x = [0.5, -1.25, 2.0, 3.5]
    twice = ctx.idct(ctx.idct(x))
    assert twice == pytest.approx([2 * v for v in x], abs=1e-12)


@pytest.mark.parametrize("nbits", [2, 3, 5, 8])
def test_idct_is_linear(nbits):
    ctx = IdctContext(nbits, 1.0)
    n = 1 << nbits
    x = _signal(n, 1)
    y = _signal(n, 2)
    combined = ctx.idct([2.0 * a - 3.0 * b for a, b in zip(x, y)])
    separate = [2.0 * a - 3.0 * b for a, b in zip(ctx.idct(x), ctx.idct(y))]
    assert combined == pytest.approx(separate, rel=1e-9, abs=1e-9)


@pytest.mark.parametrize("nbits", [3, 6])
def test_idct_scale_multiplies_output(nbits):
    n = 1 << nbits
    x = _signal(n, 3)
    base = IdctContext(nbits, 1.0).idct(x)
    scaled = IdctContext(nbits, 0.25).idct(x)
    assert scaled == pytest.approx([0.25 * v for v in base], rel=1e-9, abs=1e-12)


@pytest.mark.parametrize("nbits", [2, 4, 7])
def test_imdct_output_symmetry(nbits):
    ctx = IdctContext(nbits, 1.0)
    n2 = 1 << nbits
    n = 2 * n2
    n4 = n2 // 2
    out = ctx.imdct(_signal(n2, 4))
    assert len(out) == n
    for i in range(n4):
        assert out[i] == -out[n2 - i - 1]
        assert out[n - i - 1] == out[n2 + i]


def test_imdct_zero():
    ctx = IdctContext(3, 2.0)
    assert ctx.imdct([0.0] * 8) == [0.0] * 16


@pytest.mark.parametrize("nbits", [2, 5])
def test_imdct_is_linear_and_scaled(nbits):
    n2 = 1 << nbits
    x = _signal(n2, 5)
    y = _signal(n2, 6)
    ctx = IdctContext(nbits, 1.0)
    combined = ctx.imdct([a + 0.5 * b for a, b in zip(x, y)])
    separate = [a + 0.5 * b for a, b in zip(ctx.imdct(x), ctx.imdct(y))]
    assert combined == pytest.approx(separate, rel=1e-9, abs=1e-9)
    doubled = IdctContext(nbits, 2.0).imdct(x)
    assert doubled == pytest.approx([2.0 * v for v in ctx.imdct(x)], rel=1e-9, abs=1e-12)