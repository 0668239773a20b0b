# どこで: `src/artworks/core/pacing.py`。
# 何を: 組み込み pacing 関数 9 種と、pacing 選択（名前 / Custom）の解決を提供する。
# なぜ: パレットのサンプル点をアンカー経路のどちら側に寄せるかを差し替え可能にするため。

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Union

from artworks.core.pacing_registry import PacingFunc, pacing, pacing_registry

_HALF_PI = math.pi / 2.0


@pacing
def linear(t: float, reverse: bool) -> float:
    return t


@pacing
def exponential(t: float, reverse: bool) -> float:
    if reverse:
        return 1.0 - (1.0 - t) ** 2
    return t**2


@pacing
def quadratic(t: float, reverse: bool) -> float:
    if reverse:
        return 1.0 - (1.0 - t) ** 3
    return t**3


@pacing
def cubic(t: float, reverse: bool) -> float:
    if reverse:
        return 1.0 - (1.0 - t) ** 4
    return t**4


@pacing
def quartic(t: float, reverse: bool) -> float:
    if reverse:
        return 1.0 - (1.0 - t) ** 5
    return t**5


@pacing
def sinusoidal(t: float, reverse: bool) -> float:
    if reverse:
        return 1.0 - math.sin((1.0 - t) * math.pi / 2.0)
    return math.sin(t * math.pi / 2.0)


def _clamped_asin(x: float) -> float:
    # 呼び出し側の丸め誤差で |x| が 1 をわずかに超えても domain error にしない。
    return math.asin(min(max(float(x), -1.0), 1.0))


@pacing
def asinusoidal(t: float, reverse: bool) -> float:
    if reverse:
        return 1.0 - _clamped_asin(1.0 - t) / _HALF_PI
    return _clamped_asin(t) / _HALF_PI


@pacing
def arc(t: float, reverse: bool) -> float:
    if reverse:
        return math.sqrt(1.0 - (1.0 - t) ** 2)
    return 1.0 - math.sqrt(1.0 - t)


@pacing
def smooth_step(t: float, reverse: bool) -> float:
    """reverse に依存しない smoothstep。"""
    return t**2 * (3.0 - 2.0 * t)


class Pacing(str, Enum):
    """組み込み pacing の名前。値はレジストリの登録名と一致する。"""

    LINEAR = "linear"
    EXPONENTIAL = "exponential"
    QUADRATIC = "quadratic"
    CUBIC = "cubic"
    QUARTIC = "quartic"
    SINUSOIDAL = "sinusoidal"
    ASINUSOIDAL = "asinusoidal"
    ARC = "arc"
    SMOOTH_STEP = "smooth_step"


@dataclass(frozen=True, slots=True)
class CustomPacing:
    """軸ごとに別の pacing 関数を指定する。

    fx / fy は平面表現の x / y（色相と明度が混ざった 2 軸）、fz は彩度軸に適用される。
    """

    fx: PacingFunc
    fy: PacingFunc
    fz: PacingFunc


PacingChoice = Union[Pacing, CustomPacing, str]


def resolve_pacing(choice: PacingChoice) -> tuple[PacingFunc, PacingFunc, PacingFunc]:
    """pacing 選択を (fx, fy, fz) の関数 3 つ組へ解決して返す。

    Raises
    ------
    ValueError
        未登録の pacing 名が指定された場合。
    TypeError
        選択値の型が不正な場合。
    """

    if isinstance(choice, CustomPacing):
        return choice.fx, choice.fy, choice.fz
    if isinstance(choice, Pacing):
        name = choice.value
    elif isinstance(choice, str):
        name = choice.strip().lower()
    else:
        raise TypeError(f"pacing には Pacing / CustomPacing / str を指定する: got={choice!r}")

    if name not in pacing_registry:
        known = ", ".join(pacing_registry.names())
        raise ValueError(f"未登録の pacing です: {name!r}（known: {known}）")
    f = pacing_registry.get(name)
    return f, f, f


__all__ = [
    "CustomPacing",
    "Pacing",
    "PacingChoice",
    "arc",
    "asinusoidal",
    "cubic",
    "exponential",
    "linear",
    "quadratic",
    "quartic",
    "resolve_pacing",
    "sinusoidal",
    "smooth_step",
]
