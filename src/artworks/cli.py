"""
どこで: `src/artworks/cli.py`。
何を: ランダムパレットを複数行生成し、スウォッチ SVG として保存するコマンドを提供する。
なぜ: pacing や seed の違いをスケッチを書かずに見比べられるようにするため。
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

import numpy as np

from artworks.core.output_paths import output_path_for_palette
from artworks.core.pacing import Pacing
from artworks.core.poline import InvalidPaletteLength, random_color_palette, random_color_palette3
from artworks.core.runtime_config import runtime_config, set_config_path
from artworks.export.svg import export_palettes_svg

_logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.config:
        set_config_path(args.config)
    cfg = runtime_config()

    # 行ごとに同じ Generator から引くので、seed を固定すればグリッド全体が再現する。
    rng = np.random.default_rng(args.seed)
    try:
        if args.triple:
            palettes = [
                random_color_palette3(
                    args.length,
                    args.pacing,
                    rng=rng,
                    reverse=args.reverse,
                    lightness_ranges=cfg.triple_lightness,
                )
                for _ in range(args.rows)
            ]
        else:
            palettes = [
                random_color_palette(
                    args.length,
                    args.pacing,
                    rng=rng,
                    reverse=args.reverse,
                    lightness_ranges=cfg.pair_lightness,
                )
                for _ in range(args.rows)
            ]
    except InvalidPaletteLength as exc:
        _logger.error("%s", exc)
        return 2

    out = Path(args.out) if args.out else output_path_for_palette(
        kind="svg", ext="svg", run_id=args.run_id
    )
    saved = export_palettes_svg(palettes, out, cell_size=cfg.svg_cell_size, gap=cfg.svg_gap)
    print(f"[artworks] wrote: {saved}")  # noqa: T201
    return 0


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="artworks-palette")
    p.add_argument("--length", type=int, default=15, help="1 パレットあたりの色数")
    p.add_argument("--rows", type=int, default=15, help="生成するパレット数（SVG の行数）")
    p.add_argument(
        "--pacing",
        default=Pacing.LINEAR.value,
        choices=[m.value for m in Pacing],
        help="サンプル点の寄せ方",
    )
    p.add_argument("--triple", action="store_true", help="3 アンカーのパレットを生成する")
    p.add_argument("--reverse", action="store_true", help="pacing を reverse で評価する")
    p.add_argument("--seed", type=int, default=None, help="乱数 seed（省略時は毎回変わる）")
    p.add_argument("--out", default="", help="出力 SVG パス（省略時は output_dir/svg/ 配下）")
    p.add_argument("--run-id", default=None, help="既定出力ファイル名の接尾辞")
    p.add_argument("--config", default="", help="明示 config.yaml のパス")
    p.add_argument("-v", "--verbose", action="store_true", help="DEBUG ログを出す")
    args = p.parse_args(argv)
    if args.rows < 1:
        p.error(f"--rows は 1 以上である必要がある: got={args.rows}")
    return args


if __name__ == "__main__":
    raise SystemExit(main())
