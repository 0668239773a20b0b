"""
どこで: `src/artworks/core/poline.py`。
何を: 2〜3 個のランダムなアンカー色を結ぶ経路上をサンプリングしてカラーパレットを作る。
なぜ: スケッチ間で使い回せる、seed 固定で再現可能なパレット生成を描画から切り離して持つため。

HSL 色は平面表現 (x, y, z) に写してから線形補間する。
(x, y) は中心 (0.5, 0.5) からの角度が色相、距離が明度 * 0.5 に対応し、z は彩度そのもの。
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

import numpy as np

from artworks.core.color import Hsla, LightnessRange, fract
from artworks.core.pacing import Pacing, PacingChoice, linear, resolve_pacing
from artworks.core.pacing_registry import PacingFunc
from artworks.core.rng import RandomLike, RandomSource, as_random_source, uniform

_logger = logging.getLogger(__name__)

_CX = 0.5
_CY = 0.5

DEFAULT_PAIR_LIGHTNESS: tuple[LightnessRange, LightnessRange] = ((0.75, 0.2), (0.3, 0.2))
DEFAULT_TRIPLE_LIGHTNESS: tuple[LightnessRange, LightnessRange, LightnessRange] = (
    (0.75, 0.2),
    (0.5, 0.2),
    (0.25, 0.2),
)


class InvalidPaletteLength(ValueError):
    """パレット長が短すぎて補間パラメータを定義できない。"""

    def __init__(self, length: int, *, minimum: int = 2) -> None:
        self.length = int(length)
        self.minimum = int(minimum)
        super().__init__(
            f"invalid palette length: length={self.length}（{self.minimum} 以上が必要）"
        )


def hsl_to_point(hsl: Sequence[float] | np.ndarray) -> np.ndarray:
    """(hue[deg], saturation, lightness) を平面表現 (x, y, z) に変換して返す。

    末尾軸が長さ 3 の配列なら行ごとに変換する。
    """

    v = np.asarray(hsl, dtype=np.float64)
    radians = np.deg2rad(v[..., 0])
    dist = v[..., 2] * _CX
    x = _CX + dist * np.cos(radians)
    y = _CY + dist * np.sin(radians)
    return np.stack([x, y, v[..., 1]], axis=-1)


def point_to_hsl(point: Sequence[float] | np.ndarray) -> np.ndarray:
    """平面表現 (x, y, z) を (hue[deg], saturation, lightness) に変換して返す。

    Notes
    -----
    hue は (-180, 180] で返る。中心 (0.5, 0.5) は明度 0 で色相が定まらないが、
    `atan2(0, 0) == 0` に従い hue=0 を返す。
    """

    p = np.asarray(point, dtype=np.float64)
    dx = p[..., 0] - _CX
    dy = p[..., 1] - _CY
    deg = np.rad2deg(np.arctan2(dy, dx))
    lightness = np.sqrt(dy**2 + dx**2) / _CX
    return np.stack([deg, p[..., 2], lightness], axis=-1)


def _next_hue(hue: float, rng: RandomSource) -> float:
    """直前の色相から [60, 240) 度ずらした色相を返す。"""

    return (hue + 60.0 + uniform(rng) * 180.0) % 360.0


def random_hsl_pair(
    start_hue: float,
    saturations: tuple[float, float],
    lightnesses: tuple[float, float],
    *,
    rng: RandomSource,
) -> tuple[np.ndarray, np.ndarray]:
    """色相が start_hue から始まる 2 アンカーを返す。2 つ目の色相だけ rng から引く。"""

    c1 = np.array([start_hue, saturations[0], lightnesses[0]], dtype=np.float64)
    c2 = np.array(
        [_next_hue(start_hue, rng), saturations[1], lightnesses[1]],
        dtype=np.float64,
    )
    return c1, c2


def random_hsl_triple(
    start_hue: float,
    saturations: tuple[float, float, float],
    lightnesses: tuple[float, float, float],
    *,
    rng: RandomSource,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """3 アンカーを返す。2 つ目以降の色相はそれぞれ直前のアンカーからずらす。"""

    hue1 = _next_hue(start_hue, rng)
    hue2 = _next_hue(hue1, rng)
    c1 = np.array([start_hue, saturations[0], lightnesses[0]], dtype=np.float64)
    c2 = np.array([hue1, saturations[1], lightnesses[1]], dtype=np.float64)
    c3 = np.array([hue2, saturations[2], lightnesses[2]], dtype=np.float64)
    return c1, c2, c3


def vectors_on_line(
    p1: Sequence[float] | np.ndarray,
    p2: Sequence[float] | np.ndarray,
    num_points: int,
    *,
    reverse: bool = False,
    fx: PacingFunc = linear,
    fy: PacingFunc = linear,
    fz: PacingFunc = linear,
) -> np.ndarray:
    """p1 → p2 を num_points 点でサンプリングした shape (num_points, 3) の配列を返す。

    t_i = i / (num_points - 1) を軸ごとの pacing 関数で変形してから線形補間する。

    Raises
    ------
    InvalidPaletteLength
        num_points < 2 の場合（t_i が定義できない）。
    """

    n = int(num_points)
    if n < 2:
        raise InvalidPaletteLength(n, minimum=2)

    a = np.asarray(p1, dtype=np.float64)
    b = np.asarray(p2, dtype=np.float64)
    invert = bool(reverse)

    t_mod = np.empty((n, 3), dtype=np.float64)
    for i in range(n):
        t = i / (n - 1)
        t_mod[i, 0] = float(fx(t, invert))
        t_mod[i, 1] = float(fy(t, invert))
        t_mod[i, 2] = float(fz(t, invert))

    return (1.0 - t_mod) * a + t_mod * b


def _to_palette(points: np.ndarray) -> tuple[Hsla, ...]:
    hsl = point_to_hsl(points)
    return tuple(
        Hsla(
            hue=fract(float(row[0]) / 360.0),
            saturation=float(row[1]),
            lightness=float(row[2]),
            alpha=1.0,
        )
        for row in hsl
    )


def _draw_lightness(lightness_range: LightnessRange, rng: RandomSource) -> float:
    base, spread = lightness_range
    return float(base) + uniform(rng) * float(spread)


def random_color_palette(
    length: int,
    pacing: PacingChoice = Pacing.LINEAR,
    *,
    rng: RandomLike = None,
    reverse: bool = False,
    lightness_ranges: tuple[LightnessRange, LightnessRange] | None = None,
) -> tuple[Hsla, ...]:
    """2 アンカー間を補間したランダムパレットを返す。

    Parameters
    ----------
    length : int
        色数。2 以上。
    pacing : Pacing or CustomPacing or str, default Pacing.LINEAR
        サンプル点の寄せ方。
    rng : RandomSource or int or None, optional
        乱数源。int は seed。None は毎回新しいエントロピー。
    reverse : bool, default False
        pacing 関数の reverse 引数。
    lightness_ranges : ((base, spread), (base, spread)) or None, optional
        各アンカーの明度レンジ。None の場合は ``DEFAULT_PAIR_LIGHTNESS``。

    Returns
    -------
    tuple[Hsla, ...]
        長さ ``length`` のパレット。先頭と末尾は各アンカーの色。

    Raises
    ------
    InvalidPaletteLength
        length < 2 の場合。乱数は消費しない。
    """

    n = int(length)
    if n < 2:
        raise InvalidPaletteLength(n, minimum=2)
    fx, fy, fz = resolve_pacing(pacing)
    ranges = DEFAULT_PAIR_LIGHTNESS if lightness_ranges is None else lightness_ranges
    src = as_random_source(rng)

    # 乱数の消費順: hue0, sat0, sat1, light0, light1, hue1 のずらし量。
    start_hue = 360.0 * uniform(src)
    saturations = (uniform(src), uniform(src))
    lightnesses = (_draw_lightness(ranges[0], src), _draw_lightness(ranges[1], src))
    c1, c2 = random_hsl_pair(start_hue, saturations, lightnesses, rng=src)
    _logger.debug("poline anchors: %s -> %s", c1.tolist(), c2.tolist())

    points = vectors_on_line(
        hsl_to_point(c1), hsl_to_point(c2), n, reverse=reverse, fx=fx, fy=fy, fz=fz
    )
    return _to_palette(points)


def triple_segment_sizes(length: int) -> tuple[int, int]:
    """3 アンカーパレットの区間ごとの点数 (n1, n2) を返す。

    1 区間目は両端を含む ceil(length / 2) 点、2 区間目は共有アンカーを除いた残り。
    """

    n = int(length)
    if n < 3:
        raise InvalidPaletteLength(n, minimum=3)
    n1 = math.ceil(n / 2)
    return n1, n - n1


def random_color_palette3(
    length: int,
    pacing: PacingChoice = Pacing.LINEAR,
    *,
    rng: RandomLike = None,
    reverse: bool = False,
    lightness_ranges: tuple[LightnessRange, LightnessRange, LightnessRange] | None = None,
) -> tuple[Hsla, ...]:
    """3 アンカーを順に結ぶ 2 区間を補間したランダムパレットを返す。

    区間の分け方は `triple_segment_sizes` を参照。中央のアンカーは 1 回だけ現れる。

    Raises
    ------
    InvalidPaletteLength
        length < 3 の場合。乱数は消費しない。
    """

    n1, n2 = triple_segment_sizes(length)
    fx, fy, fz = resolve_pacing(pacing)
    ranges = DEFAULT_TRIPLE_LIGHTNESS if lightness_ranges is None else lightness_ranges
    src = as_random_source(rng)

    start_hue = 360.0 * uniform(src)
    saturations = (uniform(src), uniform(src), uniform(src))
    lightnesses = (
        _draw_lightness(ranges[0], src),
        _draw_lightness(ranges[1], src),
        _draw_lightness(ranges[2], src),
    )
    c1, c2, c3 = random_hsl_triple(start_hue, saturations, lightnesses, rng=src)
    _logger.debug(
        "poline anchors: %s -> %s -> %s", c1.tolist(), c2.tolist(), c3.tolist()
    )

    p1, p2, p3 = hsl_to_point(c1), hsl_to_point(c2), hsl_to_point(c3)
    first = vectors_on_line(p1, p2, n1, reverse=reverse, fx=fx, fy=fy, fz=fz)
    second = vectors_on_line(p2, p3, n2 + 1, reverse=reverse, fx=fx, fy=fy, fz=fz)[1:]
    return _to_palette(np.concatenate([first, second], axis=0))


__all__ = [
    "DEFAULT_PAIR_LIGHTNESS",
    "DEFAULT_TRIPLE_LIGHTNESS",
    "InvalidPaletteLength",
    "hsl_to_point",
    "point_to_hsl",
    "random_color_palette",
    "random_color_palette3",
    "random_hsl_pair",
    "random_hsl_triple",
    "triple_segment_sizes",
    "vectors_on_line",
]
