# どこで: `src/artworks/core/pacing_registry.py`。
# 何を: pacing 名から pacing 関数（t の再パラメータ化）を引けるレジストリを提供する。
# なぜ: パレット生成側が名前で pacing を切り替え、ユーザー定義も同じ導線で追加できるようにするため。

from __future__ import annotations

from collections.abc import ItemsView
from typing import Callable

PacingFunc = Callable[[float, bool], float]


class PacingRegistry:
    """pacing 名と pacing 関数を対応付けるレジストリ。

    Notes
    -----
    登録された関数のシグネチャは ``func(t: float, reverse: bool) -> float`` を想定する。
    t は [0, 1] で渡され、``func(0, _) == 0`` / ``func(1, _) == 1`` を満たすこと。
    """

    def __init__(self) -> None:
        """空のレジストリを初期化する。"""
        self._items: dict[str, PacingFunc] = {}

    def _register(self, name: str, func: PacingFunc, *, overwrite: bool = True) -> None:
        """pacing を登録する（内部用）。

        Notes
        -----
        登録は `@pacing` デコレータ経由に統一する。
        """
        if not overwrite and name in self._items:
            raise ValueError(f"pacing '{name}' は既に登録されている")
        self._items[name] = func

    def get(self, name: str) -> PacingFunc:
        """名前に対応する pacing 関数を取得する。

        Parameters
        ----------
        name : str
            pacing 名。

        Returns
        -------
        PacingFunc
            対応する pacing 関数。

        Raises
        ------
        KeyError
            未登録の名前が指定された場合。
        """
        return self._items[name]

    def __contains__(self, name: object) -> bool:
        """指定された名前が登録済みかどうかを返す。"""
        return name in self._items

    def __getitem__(self, name: str) -> PacingFunc:
        """辞書風に pacing を取得するショートカット。"""
        return self.get(name)

    def items(self) -> ItemsView[str, PacingFunc]:
        """登録済みエントリの (name, func) ビューを返す。"""
        return self._items.items()

    def names(self) -> tuple[str, ...]:
        """登録順の pacing 名を返す。"""
        return tuple(self._items.keys())


pacing_registry = PacingRegistry()
"""グローバルな pacing レジストリインスタンス。"""


def pacing(
    func: PacingFunc | None = None,
    *,
    name: str | None = None,
    overwrite: bool = True,
):
    """グローバル pacing レジストリ用デコレータ。

    既定では関数名をそのまま pacing 名として登録する。

    Parameters
    ----------
    func : PacingFunc or None, optional
        デコレート対象の関数。引数付きデコレータ利用時は None。
    name : str or None, optional
        登録名。None の場合は関数名。
    overwrite : bool, optional
        既存エントリがある場合に上書きするかどうか。

    Examples
    --------
    @pacing
    def linear(t, reverse):
        return t
    """

    def decorator(f: PacingFunc) -> PacingFunc:
        key = str(name) if name is not None else str(f.__name__)
        if not key:
            raise ValueError("pacing 名は空でない必要がある")
        pacing_registry._register(key, f, overwrite=overwrite)
        return f

    if func is None:
        return decorator
    return decorator(func)


__all__ = ["PacingFunc", "PacingRegistry", "pacing", "pacing_registry"]
