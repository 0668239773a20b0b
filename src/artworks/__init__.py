# どこで: `src/artworks/__init__.py`。
# 何を: ルート `artworks` パッケージを定義し、パレット生成の公開 API を再エクスポートする。
# なぜ: スケッチ側から `from artworks import random_color_palette` だけで使えるようにするため。

from __future__ import annotations

from artworks.core.color import Hsla, Hsva
from artworks.core.pacing import CustomPacing, Pacing
from artworks.core.pacing_registry import pacing
from artworks.core.palettes import cosine_palette, random_golden_ratio_palette
from artworks.core.poline import InvalidPaletteLength, random_color_palette, random_color_palette3

__all__ = [
    "CustomPacing",
    "Hsla",
    "Hsva",
    "InvalidPaletteLength",
    "Pacing",
    "cosine_palette",
    "pacing",
    "random_color_palette",
    "random_color_palette3",
    "random_golden_ratio_palette",
]
