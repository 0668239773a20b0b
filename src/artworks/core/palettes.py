# どこで: `src/artworks/core/palettes.py`。
# 何を: poline 以外の軽量パレット（黄金比の色相送り / コサインパレット）を提供する。
# なぜ: 均等に散った色相や、t に沿って連続変化する色をスケッチから直接使えるようにするため。

from __future__ import annotations

import math

from artworks.core.color import Hsva, fract
from artworks.core.rng import RandomLike, as_random_source, uniform

GOLDEN_RATIO = 0.618033988749895

Rgb = tuple[float, float, float]


def random_golden_ratio_palette(
    length: int,
    saturation: float,
    value: float,
    *,
    rng: RandomLike = None,
) -> tuple[Hsva, ...]:
    """色相を黄金比で送り続けた HSV パレットを返す。

    開始色相だけ乱数で決め、各色の前に色相へ黄金比を足して小数部を取る。
    see: https://martin.ankerl.com/2009/12/09/how-to-create-random-colors-programmatically/

    Raises
    ------
    ValueError
        length が負の場合。
    """

    n = int(length)
    if n < 0:
        raise ValueError(f"length は 0 以上である必要がある: got={length!r}")

    hue = uniform(as_random_source(rng))
    out: list[Hsva] = []
    for _ in range(n):
        hue = fract(hue + GOLDEN_RATIO)
        out.append(Hsva(hue=hue, saturation=float(saturation), value=float(value), alpha=1.0))
    return tuple(out)


def cosine_palette(t: float, a: Rgb, b: Rgb, c: Rgb, d: Rgb) -> tuple[float, float, float, float]:
    """``a + b * cos(2π(c * t + d))`` をチャンネルごとに評価した RGBA を返す。

    see: https://iquilezles.org/articles/palettes/
    結果はクランプしない。alpha は常に 1.0。
    """

    tt = float(t)
    rgb = [
        float(a[i]) + float(b[i]) * math.cos(math.tau * (float(c[i]) * tt + float(d[i])))
        for i in range(3)
    ]
    return rgb[0], rgb[1], rgb[2], 1.0


__all__ = ["GOLDEN_RATIO", "cosine_palette", "random_golden_ratio_palette"]
