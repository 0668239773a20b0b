# どこで: `src/artworks/core/runtime_config.py`。
# 何を: config.yaml による実行時設定（探索・ロード・キャッシュ）を提供する。
# なぜ: パレットのアンカー明度レンジや出力先をユーザーが差し替えられるようにするため。

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

from artworks.core.color import LightnessRange

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """artworks の実行時設定。"""

    config_path: Path | None
    output_dir: Path
    pair_lightness: tuple[LightnessRange, LightnessRange]
    triple_lightness: tuple[LightnessRange, LightnessRange, LightnessRange]
    svg_cell_size: float
    svg_gap: float


_EXPLICIT_CONFIG_PATH: Path | None = None
_CONFIG_CACHE: RuntimeConfig | None = None


def set_config_path(path: str | Path | None) -> None:
    """以降の設定探索で使う明示 config パスを設定する。

    Notes
    -----
    `path` を None にすると明示指定を解除し、既定の探索に戻る。
    """

    global _EXPLICIT_CONFIG_PATH, _CONFIG_CACHE
    if path is None:
        _EXPLICIT_CONFIG_PATH = None
        _CONFIG_CACHE = None
        return
    _EXPLICIT_CONFIG_PATH = Path(str(path)).expanduser()
    _CONFIG_CACHE = None


def _default_config_candidates() -> tuple[Path, ...]:
    cwd = Path.cwd()
    home = Path.home()
    return (
        cwd / ".artworks" / "config.yaml",
        home / ".config" / "artworks" / "config.yaml",
    )


def _expand_path_text(text: str) -> str:
    return os.path.expandvars(os.path.expanduser(str(text)))


def _as_optional_path(value: Any) -> Path | None:
    if value is None:
        return None
    s = str(value).strip()
    if not s:
        return None
    return Path(_expand_path_text(s))


def _as_mapping(value: Any, *, key: str) -> dict[str, Any]:
    if value is None:
        return {}
    if isinstance(value, dict):
        return dict(value)
    raise RuntimeError(f"{key} は mapping である必要があります: got={value!r}")


def _as_float(value: Any, *, key: str) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は数値である必要があります: got={value!r}") from exc


def _as_lightness_ranges(value: Any, *, key: str, count: int) -> tuple[LightnessRange, ...] | None:
    """`[[base, spread], ...]` を float ペアのタプルへ正規化して返す。"""

    if value is None:
        return None
    try:
        rows = list(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は [[base, spread], ...] の配列である必要があります: got={value!r}") from exc
    if len(rows) != count:
        raise RuntimeError(f"{key} は {count} 要素である必要があります: got={value!r}")

    out: list[LightnessRange] = []
    for row in rows:
        try:
            pair = list(row)
            if len(pair) != 2:
                raise ValueError(pair)
            base = float(pair[0])
            spread = float(pair[1])
        except Exception as exc:
            raise RuntimeError(
                f"{key} の各要素は [base, spread] の数値ペアである必要があります: got={row!r}"
            ) from exc
        out.append((base, spread))
    return tuple(out)


def _load_yaml_text(text: str, *, source: str) -> dict[str, Any]:
    import yaml

    try:
        data = yaml.safe_load(text)
    except Exception as exc:
        raise RuntimeError(f"config.yaml の読み込みに失敗しました: source={source}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RuntimeError(f"config.yaml は mapping である必要があります: source={source}")

    return dict(data)


def _load_yaml_config(path: Path) -> dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    return _load_yaml_text(text, source=str(path))


def _load_packaged_default_config() -> dict[str, Any]:
    """同梱デフォルト config をロードして dict を返す。"""

    try:
        blob = (
            resources.files("artworks")
            .joinpath("resource", "default_config.yaml")
            .read_text(encoding="utf-8")
        )
    except Exception as exc:  # pragma: no cover
        raise RuntimeError(
            "同梱 default_config.yaml の読み込みに失敗しました"
            "（パッケージ配布物の package-data を確認してください）"
        ) from exc

    return _load_yaml_text(blob, source="artworks/resource/default_config.yaml")


def _merge_sections(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """override を base へ再帰的にマージして返す（mapping 同士は子キー単位で後勝ち）。"""

    out = dict(base)
    for key, value in override.items():
        current = out.get(key)
        if isinstance(value, dict) and isinstance(current, dict):
            out[key] = _merge_sections(current, value)
        else:
            out[key] = value
    return out


def runtime_config() -> RuntimeConfig:
    """実行時設定をロードして返す（キャッシュ）。"""

    global _CONFIG_CACHE
    if _CONFIG_CACHE is not None:
        return _CONFIG_CACHE

    explicit_path = _EXPLICIT_CONFIG_PATH
    if explicit_path is not None and not explicit_path.is_file():
        raise FileNotFoundError(f"config.yaml が見つかりません: {explicit_path}")

    discovered_path: Path | None = None
    for p in _default_config_candidates():
        if p.is_file():
            discovered_path = p
            break

    payload = _load_packaged_default_config()
    if discovered_path is not None:
        _logger.debug("Loading discovered config: %s", discovered_path)
        payload = _merge_sections(payload, _load_yaml_config(discovered_path))
    if explicit_path is not None:
        _logger.debug("Loading explicit config: %s", explicit_path)
        payload = _merge_sections(payload, _load_yaml_config(explicit_path))

    version = payload.get("version")
    if version is None:
        raise RuntimeError(
            "config.yaml の version が未設定です（同梱 default_config.yaml を確認してください）"
        )
    try:
        version_i = int(version)
    except Exception as exc:
        raise RuntimeError(f"config.yaml の version は整数である必要があります: got={version!r}") from exc
    if version_i != 1:
        raise RuntimeError(f"未対応の config.yaml version です: got={version_i}")

    paths = _as_mapping(payload.get("paths"), key="paths")
    output_dir = _as_optional_path(paths.get("output_dir"))
    if output_dir is None:
        raise RuntimeError(
            "paths.output_dir が未設定です（同梱 default_config.yaml を確認してください）"
        )

    palette = _as_mapping(payload.get("palette"), key="palette")
    pair_lightness = _as_lightness_ranges(
        palette.get("pair_lightness"), key="palette.pair_lightness", count=2
    )
    if pair_lightness is None:
        raise RuntimeError(
            "palette.pair_lightness が未設定です（同梱 default_config.yaml を確認してください）"
        )
    triple_lightness = _as_lightness_ranges(
        palette.get("triple_lightness"), key="palette.triple_lightness", count=3
    )
    if triple_lightness is None:
        raise RuntimeError(
            "palette.triple_lightness が未設定です（同梱 default_config.yaml を確認してください）"
        )

    export = _as_mapping(payload.get("export"), key="export")
    svg = _as_mapping(export.get("svg"), key="export.svg")
    cell_size = _as_float(svg.get("cell_size"), key="export.svg.cell_size")
    if cell_size is None:
        raise RuntimeError(
            "export.svg.cell_size が未設定です（同梱 default_config.yaml を確認してください）"
        )
    if cell_size <= 0:
        raise ValueError(f"export.svg.cell_size は正の値である必要があります: got={cell_size}")
    gap = _as_float(svg.get("gap"), key="export.svg.gap")
    if gap is None:
        raise RuntimeError(
            "export.svg.gap が未設定です（同梱 default_config.yaml を確認してください）"
        )
    if gap < 0:
        raise ValueError(f"export.svg.gap は 0 以上である必要があります: got={gap}")

    cfg = RuntimeConfig(
        config_path=explicit_path or discovered_path,
        output_dir=output_dir,
        pair_lightness=(pair_lightness[0], pair_lightness[1]),
        triple_lightness=(triple_lightness[0], triple_lightness[1], triple_lightness[2]),
        svg_cell_size=float(cell_size),
        svg_gap=float(gap),
    )
    _CONFIG_CACHE = cfg
    return cfg


def output_root_dir() -> Path:
    """出力ファイルを保存する既定ルートディレクトリを返す。

    上書き順（後勝ち）:
    1) 同梱 default_config.yaml
    2) `./.artworks/config.yaml` / `~/.config/artworks/config.yaml`
    3) `set_config_path(...)` で指定したパス
    """

    cfg = runtime_config()
    return Path(cfg.output_dir)


__all__ = ["LightnessRange", "RuntimeConfig", "output_root_dir", "runtime_config", "set_config_path"]
