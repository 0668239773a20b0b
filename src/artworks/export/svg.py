"""
どこで: `src/artworks/export/svg.py`。
何を: パレット列をスウォッチのグリッドとして SVG に保存する関数を提供する。
なぜ: ウィンドウを立ち上げずに生成結果を見比べ、差分を取れる形で残すため。
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from artworks.core.color import rgb01_to_hex

_logger = logging.getLogger(__name__)

_SVG_NS = "http://www.w3.org/2000/svg"
_FLOAT_DECIMALS = 3

DEFAULT_BACKGROUND = (0.08627, 0.08627, 0.08627)


class _SwatchColor(Protocol):
    def to_rgb01(self) -> tuple[float, float, float]: ...


def _fmt(value: float, *, decimals: int = _FLOAT_DECIMALS) -> str:
    """SVG 出力向けに float を決定的な文字列へ変換して返す。"""
    text = f"{float(value):.{int(decimals)}f}"
    if text.startswith("-0") and float(text) == 0.0:
        return text[1:]
    return text


def export_palettes_svg(
    palettes: Sequence[Sequence[_SwatchColor]],
    path: str | Path,
    *,
    cell_size: float = 40.0,
    gap: float = 4.0,
    background_color: tuple[float, float, float] = DEFAULT_BACKGROUND,
) -> Path:
    """パレット列を 1 行 1 パレットのスウォッチとして SVG に保存する。

    Parameters
    ----------
    palettes : Sequence[Sequence[color]]
        `to_rgb01()` を持つ色の列の列。行ごとに長さが違ってもよい。
    path : str or Path
        出力先パス。親ディレクトリは作成する。
    cell_size : float
        1 色あたりの正方形の一辺。
    gap : float
        正方形同士および外周の余白。
    background_color : tuple[float, float, float]
        背景色（0..1）。

    Returns
    -------
    Path
        保存先パス。

    Raises
    ------
    ValueError
        palettes が空、または寸法が不正な場合。
    """
    _path = Path(path)
    if not palettes:
        raise ValueError("palettes は 1 行以上必要である")
    size = float(cell_size)
    pad = float(gap)
    if size <= 0.0:
        raise ValueError(f"cell_size は正の値である必要がある: got={cell_size!r}")
    if pad < 0.0:
        raise ValueError(f"gap は 0 以上である必要がある: got={gap!r}")

    cols = max(len(row) for row in palettes)
    rows = len(palettes)
    canvas_w = pad + cols * (size + pad)
    canvas_h = pad + rows * (size + pad)

    lines: list[str] = []
    lines.append('<?xml version="1.0" encoding="UTF-8"?>')
    lines.append(
        (
            f'<svg xmlns="{_SVG_NS}" viewBox="0 0 {_fmt(canvas_w)} {_fmt(canvas_h)}" '
            f'width="{_fmt(canvas_w)}" height="{_fmt(canvas_h)}">'
        )
    )
    lines.append(
        f'  <rect x="0" y="0" width="{_fmt(canvas_w)}" height="{_fmt(canvas_h)}" '
        f'fill="{rgb01_to_hex(background_color)}" />'
    )

    for r, row in enumerate(palettes):
        y = pad + r * (size + pad)
        for c, color in enumerate(row):
            x = pad + c * (size + pad)
            fill = rgb01_to_hex(color.to_rgb01())
            lines.append(
                (
                    f'  <rect x="{_fmt(x)}" y="{_fmt(y)}" width="{_fmt(size)}" '
                    f'height="{_fmt(size)}" fill="{fill}" />'
                )
            )

    lines.append("</svg>")

    _path.parent.mkdir(parents=True, exist_ok=True)
    with _path.open("w", encoding="utf-8", newline="\n") as f:
        f.write("\n".join(lines) + "\n")

    _logger.info("Saved palette SVG: %s (%d rows x %d cols)", _path, rows, cols)
    return _path


__all__ = ["DEFAULT_BACKGROUND", "export_palettes_svg"]
