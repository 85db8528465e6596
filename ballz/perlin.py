"""Seeded 3D gradient noise in single precision, plus fractal variants."""

from __future__ import annotations

import math
import struct

_F32 = struct.Struct("<f")

# Permutation table; doubled so that index sums up to 511 need no mask.
_RANDTAB_BASE = (
    23, 125, 161, 52, 103, 117, 70, 37, 247, 101, 203, 169, 124, 126, 44, 123,
    152, 238, 145, 45, 171, 114, 253, 10, 192, 136, 4, 157, 249, 30, 35, 72,
    175, 63, 77, 90, 181, 16, 96, 111, 133, 104, 75, 162, 93, 56, 66, 240,
    8, 50, 84, 229, 49, 210, 173, 239, 141, 1, 87, 18, 2, 198, 143, 57,
    225, 160, 58, 217, 168, 206, 245, 204, 199, 6, 73, 60, 20, 230, 211, 233,
    94, 200, 88, 9, 74, 155, 33, 15, 219, 130, 226, 202, 83, 236, 42, 172,
    165, 218, 55, 222, 46, 107, 98, 154, 109, 67, 196, 178, 127, 158, 13, 243,
    65, 79, 166, 248, 25, 224, 115, 80, 68, 51, 184, 128, 232, 208, 151, 122,
    26, 212, 105, 43, 179, 213, 235, 148, 146, 89, 14, 195, 28, 78, 112, 76,
    250, 47, 24, 251, 140, 108, 186, 190, 228, 170, 183, 139, 39, 188, 244, 246,
    132, 48, 119, 144, 180, 138, 134, 193, 82, 182, 120, 121, 86, 220, 209, 3,
    91, 241, 149, 85, 205, 150, 113, 216, 31, 100, 41, 164, 177, 214, 153, 231,
    38, 71, 185, 174, 97, 201, 29, 95, 7, 92, 54, 254, 191, 118, 34, 221,
    131, 11, 163, 99, 234, 81, 227, 147, 156, 176, 17, 142, 69, 12, 110, 62,
    27, 255, 0, 194, 59, 116, 242, 252, 19, 21, 187, 53, 207, 129, 64, 135,
    61, 40, 167, 237, 102, 223, 106, 159, 197, 189, 215, 137, 36, 32, 22, 5,
)

# Gradient index for each table slot, chosen to reduce bias among the 12 gradients.
_GRAD_IDX_BASE = (
    7, 9, 5, 0, 11, 1, 6, 9, 3, 9, 11, 1, 8, 10, 4, 7,
    8, 6, 1, 5, 3, 10, 9, 10, 0, 8, 4, 1, 5, 2, 7, 8,
    7, 11, 9, 10, 1, 0, 4, 7, 5, 0, 11, 6, 1, 4, 2, 8,
    8, 10, 4, 9, 9, 2, 5, 7, 9, 1, 7, 2, 2, 6, 11, 5,
    5, 4, 6, 9, 0, 1, 1, 0, 7, 6, 9, 8, 4, 10, 3, 1,
    2, 8, 8, 9, 10, 11, 5, 11, 11, 2, 6, 10, 3, 4, 2, 4,
    9, 10, 3, 2, 6, 3, 6, 10, 5, 3, 4, 10, 11, 2, 9, 11,
    1, 11, 10, 4, 9, 4, 11, 0, 4, 11, 4, 0, 0, 0, 7, 6,
    10, 4, 1, 3, 11, 5, 3, 4, 2, 9, 1, 3, 0, 1, 8, 0,
    6, 7, 8, 7, 0, 4, 6, 10, 8, 2, 3, 11, 11, 8, 0, 2,
    4, 8, 3, 0, 0, 10, 6, 1, 2, 2, 4, 5, 6, 0, 1, 3,
    11, 9, 5, 5, 9, 6, 9, 8, 3, 8, 1, 8, 9, 6, 9, 11,
    10, 7, 5, 6, 5, 9, 1, 3, 7, 0, 2, 10, 11, 2, 6, 1,
    3, 11, 7, 7, 2, 1, 7, 3, 0, 8, 1, 1, 5, 0, 6, 10,
    11, 11, 0, 2, 7, 0, 10, 8, 3, 5, 7, 1, 11, 1, 0, 7,
    9, 0, 11, 5, 10, 3, 2, 3, 5, 9, 7, 9, 8, 4, 6, 5,
)

_RANDTAB = _RANDTAB_BASE * 2
_GRAD_IDX = _GRAD_IDX_BASE * 2

_BASIS = (
    (1, 1, 0), (-1, 1, 0), (1, -1, 0), (-1, -1, 0),
    (1, 0, 1), (-1, 0, 1), (1, 0, -1), (-1, 0, -1),
    (0, 1, 1), (0, -1, 1), (0, 1, -1), (0, -1, -1),
)


def _f(value: float) -> float:
    """Round to the nearest single-precision value."""
    return _F32.unpack(_F32.pack(value))[0]


def _lerp(a: float, b: float, t: float) -> float:
    return _f(a + _f(_f(b - a) * t))


def _ease(a: float) -> float:
    t = _f(_f(a * 6) - 15)
    t = _f(_f(t * a) + 10)
    t = _f(t * a)
    t = _f(t * a)
    return _f(t * a)


def _grad(grad_idx: int, x: float, y: float, z: float) -> float:
    gx, gy, gz = _BASIS[grad_idx]
    return _f(_f(_f(gx * x) + _f(gy * y)) + _f(gz * z))


def _cmod(a: int, b: int) -> int:
    """Remainder whose sign follows the dividend."""
    r = abs(a) % abs(b)
    return r if a >= 0 else -r


def _blend(
    x: float, y: float, z: float,
    r00: int, r01: int, r10: int, r11: int,
    z0: int, z1: int,
) -> float:
    u, v, w = _ease(x), _ease(y), _ease(z)
    xm, ym, zm = _f(x - 1), _f(y - 1), _f(z - 1)

    n000 = _grad(_GRAD_IDX[r00 + z0], x, y, z)
    n001 = _grad(_GRAD_IDX[r00 + z1], x, y, zm)
    n010 = _grad(_GRAD_IDX[r01 + z0], x, ym, z)
    n011 = _grad(_GRAD_IDX[r01 + z1], x, ym, zm)
    n100 = _grad(_GRAD_IDX[r10 + z0], xm, y, z)
    n101 = _grad(_GRAD_IDX[r10 + z1], xm, y, zm)
    n110 = _grad(_GRAD_IDX[r11 + z0], xm, ym, z)
    n111 = _grad(_GRAD_IDX[r11 + z1], xm, ym, zm)

    n00 = _lerp(n000, n001, w)
    n01 = _lerp(n010, n011, w)
    n10 = _lerp(n100, n101, w)
    n11 = _lerp(n110, n111, w)

    n0 = _lerp(n00, n01, v)
    n1 = _lerp(n10, n11, v)
    return _lerp(n0, n1, u)


def _noise3_internal(
    x: float, y: float, z: float, x_wrap: int, y_wrap: int, z_wrap: int, seed: int
) -> float:
    x, y, z = _f(x), _f(y), _f(z)
    seed &= 0xFF
    x_mask = (x_wrap - 1) & 255
    y_mask = (y_wrap - 1) & 255
    z_mask = (z_wrap - 1) & 255
    px, py, pz = math.floor(x), math.floor(y), math.floor(z)
    x0, x1 = px & x_mask, (px + 1) & x_mask
    y0, y1 = py & y_mask, (py + 1) & y_mask
    z0, z1 = pz & z_mask, (pz + 1) & z_mask

    r0 = _RANDTAB[x0 + seed]
    r1 = _RANDTAB[x1 + seed]

    return _blend(
        _f(x - px), _f(y - py), _f(z - pz),
        _RANDTAB[r0 + y0], _RANDTAB[r0 + y1],
        _RANDTAB[r1 + y0], _RANDTAB[r1 + y1],
        z0, z1,
    )


def noise3(
    x: float, y: float, z: float, x_wrap: int = 0, y_wrap: int = 0, z_wrap: int = 0
) -> float:
    """Gradient noise at (x, y, z); wraps must be powers of two, 0 for none."""
    return _noise3_internal(x, y, z, x_wrap, y_wrap, z_wrap, 0)


def noise3_seed(
    x: float,
    y: float,
    z: float,
    x_wrap: int = 0,
    y_wrap: int = 0,
    z_wrap: int = 0,
    seed: int = 0,
) -> float:
    """Like noise3, choosing a variation by the low eight bits of ``seed``."""
    return _noise3_internal(x, y, z, x_wrap, y_wrap, z_wrap, seed & 0xFF)


def ridge_noise3(
    x: float,
    y: float,
    z: float,
    lacunarity: float,
    gain: float,
    offset: float,
    octaves: int,
) -> float:
    """Ridged multifractal noise summed over ``octaves`` octaves."""
    x, y, z = _f(x), _f(y), _f(z)
    lacunarity, gain, offset = _f(lacunarity), _f(gain), _f(offset)
    frequency = 1.0
    prev = 1.0
    amplitude = 0.5
    total = 0.0
    for octave in range(octaves):
        r = _noise3_internal(
            _f(x * frequency), _f(y * frequency), _f(z * frequency), 0, 0, 0, octave & 0xFF
        )
        r = _f(offset - abs(r))
        r = _f(r * r)
        total = _f(total + _f(_f(r * amplitude) * prev))
        prev = r
        frequency = _f(frequency * lacunarity)
        amplitude = _f(amplitude * gain)
    return total


def fbm_noise3(
    x: float, y: float, z: float, lacunarity: float, gain: float, octaves: int
) -> float:
    """Fractal Brownian motion: noise summed over ``octaves`` octaves."""
    x, y, z = _f(x), _f(y), _f(z)
    lacunarity, gain = _f(lacunarity), _f(gain)
    frequency = 1.0
    amplitude = 1.0
    total = 0.0
    for octave in range(octaves):
        n = _noise3_internal(
            _f(x * frequency), _f(y * frequency), _f(z * frequency), 0, 0, 0, octave & 0xFF
        )
        total = _f(total + _f(n * amplitude))
        frequency = _f(frequency * lacunarity)
        amplitude = _f(amplitude * gain)
    return total


def turbulence_noise3(
    x: float, y: float, z: float, lacunarity: float, gain: float, octaves: int
) -> float:
    """Turbulence: absolute noise values summed over ``octaves`` octaves."""
    x, y, z = _f(x), _f(y), _f(z)
    lacunarity, gain = _f(lacunarity), _f(gain)
    frequency = 1.0
    amplitude = 1.0
    total = 0.0
    for octave in range(octaves):
        r = _f(
            _noise3_internal(
                _f(x * frequency), _f(y * frequency), _f(z * frequency), 0, 0, 0, octave & 0xFF
            )
            * amplitude
        )
        total = _f(total + abs(r))
        frequency = _f(frequency * lacunarity)
        amplitude = _f(amplitude * gain)
    return total


def noise3_wrap_nonpow2(
    x: float,
    y: float,
    z: float,
    x_wrap: int = 0,
    y_wrap: int = 0,
    z_wrap: int = 0,
    seed: int = 0,
) -> float:
    """Gradient noise that wraps at any period up to 256; 0 means 256."""
    x, y, z = _f(x), _f(y), _f(z)
    seed &= 0xFF
    px, py, pz = math.floor(x), math.floor(y), math.floor(z)
    x_wrap2 = x_wrap or 256
    y_wrap2 = y_wrap or 256
    z_wrap2 = z_wrap or 256

    x0 = _cmod(px, x_wrap2)
    y0 = _cmod(py, y_wrap2)
    z0 = _cmod(pz, z_wrap2)
    if x0 < 0:
        x0 += x_wrap2
    if y0 < 0:
        y0 += y_wrap2
    if z0 < 0:
        z0 += z_wrap2
    x1 = _cmod(x0 + 1, x_wrap2)
    y1 = _cmod(y0 + 1, y_wrap2)
    z1 = _cmod(z0 + 1, z_wrap2)

    r0 = _RANDTAB[_RANDTAB[x0] + seed]
    r1 = _RANDTAB[_RANDTAB[x1] + seed]

    return _blend(
        _f(x - px), _f(y - py), _f(z - pz),
        _RANDTAB[r0 + y0], _RANDTAB[r0 + y1],
        _RANDTAB[r1 + y0], _RANDTAB[r1 + y1],
        z0, z1,
    )