# どこで: `src/artworks/core/color.py`。
# 何を: パレットが返す色値（Hsla/Hsva）と RGB への変換ユーティリティを定義する。
# なぜ: 生成側は HSL のまま扱い、描画側の色型への変換は呼び出し側に任せるため。

from __future__ import annotations

import colorsys
import math
from dataclasses import dataclass

LightnessRange = tuple[float, float]
"""アンカー明度の (base, spread)。lightness = base + spread * U(0, 1)。"""


def fract(x: float) -> float:
    """x の小数部を [0, 1) で返す。

    負の微小値は ``x - floor(x)`` が丸めで 1.0 になり得るため 0.0 に畳む。
    """

    f = float(x) - math.floor(float(x))
    return 0.0 if f >= 1.0 else f


def rgb01_to_rgb255(rgb: tuple[float, float, float]) -> tuple[int, int, int]:
    """0..1 float の RGB を 0..255 int の RGB に変換して返す。"""

    r, g, b = rgb
    out: list[int] = []
    for v in (r, g, b):
        fv = float(v)
        fv = 0.0 if fv < 0.0 else 1.0 if fv > 1.0 else fv
        out.append(int(round(fv * 255.0)))
    return int(out[0]), int(out[1]), int(out[2])


def rgb01_to_hex(rgb: tuple[float, float, float]) -> str:
    """0..1 float RGB を #RRGGBB に変換して返す。"""

    r, g, b = rgb01_to_rgb255(rgb)
    return f"#{r:02X}{g:02X}{b:02X}"


@dataclass(frozen=True, slots=True)
class Hsla:
    """HSL + alpha の色。

    hue は 1 回転を 1.0 とする turn-fraction（[0, 1)）。
    saturation / lightness はクランプしない。
    """

    hue: float
    saturation: float
    lightness: float
    alpha: float = 1.0

    def to_rgb01(self) -> tuple[float, float, float]:
        """0..1 float の RGB を返す（saturation/lightness は 0..1 にクランプして変換）。"""

        s = min(max(float(self.saturation), 0.0), 1.0)
        l = min(max(float(self.lightness), 0.0), 1.0)
        # colorsys は H, L, S の順で受け取る。
        return colorsys.hls_to_rgb(float(self.hue), l, s)

    def to_hex(self) -> str:
        return rgb01_to_hex(self.to_rgb01())


@dataclass(frozen=True, slots=True)
class Hsva:
    """HSV + alpha の色（hue は turn-fraction）。"""

    hue: float
    saturation: float
    value: float
    alpha: float = 1.0

    def to_rgb01(self) -> tuple[float, float, float]:
        s = min(max(float(self.saturation), 0.0), 1.0)
        v = min(max(float(self.value), 0.0), 1.0)
        return colorsys.hsv_to_rgb(float(self.hue), s, v)

    def to_hex(self) -> str:
        return rgb01_to_hex(self.to_rgb01())


__all__ = ["Hsla", "Hsva", "LightnessRange", "fract", "rgb01_to_hex", "rgb01_to_rgb255"]
