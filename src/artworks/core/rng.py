# どこで: `src/artworks/core/rng.py`。
# 何を: パレット生成が消費する乱数源（`random() -> float`）の型と正規化を提供する。
# なぜ: プロセス全体の乱数状態に頼らず、seed 固定で決定的に再現できるようにするため。

from __future__ import annotations

from typing import Protocol, Union, runtime_checkable

import numpy as np


@runtime_checkable
class RandomSource(Protocol):
    """[0, 1) の一様乱数を返す乱数源。

    `numpy.random.Generator` と `random.Random` はどちらもこの形を満たす。
    """

    def random(self) -> float: ...


RandomLike = Union[RandomSource, int, None]


def as_random_source(rng: RandomLike) -> RandomSource:
    """乱数源指定を RandomSource に正規化して返す。

    Parameters
    ----------
    rng : RandomSource or int or None
        None は OS エントロピーから初期化した新しい Generator、
        int は `numpy.random.default_rng(seed)` の seed として扱う。

    Raises
    ------
    TypeError
        `random()` を持たない値が渡された場合。
    """

    if rng is None:
        return np.random.default_rng()
    if isinstance(rng, bool):
        raise TypeError("rng に bool は指定できない")
    if isinstance(rng, (int, np.integer)):
        return np.random.default_rng(int(rng))
    if not callable(getattr(rng, "random", None)):
        raise TypeError(f"rng は random() を持つ必要がある: got={rng!r}")
    return rng


def uniform(rng: RandomSource) -> float:
    """乱数源から 1 回だけ一様乱数を引いて float で返す。"""

    return float(rng.random())


__all__ = ["RandomLike", "RandomSource", "as_random_source", "uniform"]
