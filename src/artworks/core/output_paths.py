# どこで: `src/artworks/core/output_paths.py`。
# 何を: パレット出力ファイルの保存先パスを決める。
# なぜ: `output/{kind}/` 配下に run_id 付きで整理して保存するため。

from __future__ import annotations

import re
from pathlib import Path

from artworks.core.runtime_config import output_root_dir


def _sanitize_run_id(run_id: str) -> str:
    """run_id をファイル名の一部として使える形に正規化して返す。"""

    return re.sub(r"[^A-Za-z0-9._-]+", "_", str(run_id))


def _run_id_suffix(run_id: str | None) -> str:
    """run_id の接尾辞（例: `_v1`）を返す。未指定なら空文字を返す。"""

    if run_id is None:
        return ""
    s = str(run_id).strip()
    if not s:
        return ""
    sanitized = _sanitize_run_id(s)
    if not sanitized:
        return ""
    return f"_{sanitized}"


def output_path_for_palette(
    *,
    kind: str,
    ext: str,
    run_id: str | None = None,
    stem: str = "palette",
) -> Path:
    """`output_root/{kind}/<stem>[_run_id].{ext}` を返す。"""

    ext_norm = str(ext).lstrip(".").strip()
    if not ext_norm:
        raise ValueError("ext は空でない必要がある")

    base_dir = output_root_dir() / str(kind)
    return base_dir / f"{stem}{_run_id_suffix(run_id)}.{ext_norm}"


__all__ = ["output_path_for_palette"]
