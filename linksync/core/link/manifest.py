"""package.json 读取与校验

职责:
- 读取并解析 JSON 清单
- 加载时校验字段类型，下游只接触结构化的 Manifest
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from linksync.core.exceptions import ManifestNotFoundError, ManifestParseError
from linksync.core.link.models import Manifest

logger = logging.getLogger(__name__)


class _JSONObject(dict):
    """JSON 对象，额外保留原始键值对序列（含重复键）"""

    def __init__(self, pairs: list[tuple[str, Any]]) -> None:
        super().__init__(pairs)
        self.pairs = list(pairs)


def load_document(path: str | Path) -> dict[str, Any]:
    """读取清单文件并返回原始 JSON 对象

    异常:
        ManifestNotFoundError: 文件不存在或不可读
        ManifestParseError: 不是合法 JSON，或顶层不是对象
    """
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as e:
        raise ManifestNotFoundError(f"清单文件不存在或不可读: {p} ({e})", path=str(p)) from e
    except UnicodeDecodeError as e:
        raise ManifestParseError(f"清单文件不是 UTF-8 文本: {p}", path=str(p)) from e

    try:
        doc = json.loads(text, object_pairs_hook=_JSONObject)
    except json.JSONDecodeError as e:
        raise ManifestParseError(
            f"清单文件不是合法 JSON: {p} (第 {e.lineno} 行: {e.msg})", path=str(p),
        ) from e

    if not isinstance(doc, dict):
        raise ManifestParseError(
            f"清单顶层必须是对象: {p} (实际类型: {type(doc).__name__})", path=str(p),
        )
    logger.debug("已读取清单: %s", p)
    return doc


def _type_error(doc: dict[str, Any], field_name: str, expected: str, p: Path) -> ManifestParseError:
    actual = type(doc[field_name]).__name__
    return ManifestParseError(
        f"清单字段 '{field_name}' 应为 {expected}，实际为 {actual}: {p}", path=str(p),
    )


def _parse_files(doc: dict[str, Any], p: Path) -> tuple[str, ...] | None:
    """files 字段: 缺失或为 null 时返回 None"""
    raw_files = doc.get("files")
    if raw_files is None:
        return None
    if not isinstance(raw_files, list) or not all(isinstance(f, str) for f in raw_files):
        raise _type_error(doc, "files", "字符串数组", p)
    return tuple(raw_files)


def read_files(path: str | Path) -> tuple[str, ...] | None:
    """只读取并校验被链接包的 files 字段，其余字段不做检查"""
    p = Path(path)
    return _parse_files(load_document(p), p)


def read_manifest(path: str | Path) -> Manifest:
    """读取清单并校验为 Manifest

    可选字段缺失或为 null 都视为未声明 (None)。
    """
    p = Path(path)
    doc = load_document(p)

    name = doc.get("name")
    if name is not None and not isinstance(name, str):
        raise _type_error(doc, "name", "字符串", p)

    dependencies = None
    deps = doc.get("dependencies")
    if deps is not None:
        if not isinstance(deps, dict):
            raise _type_error(doc, "dependencies", "对象", p)
        pairs = deps.pairs if isinstance(deps, _JSONObject) else list(deps.items())
        for dep_name, spec in pairs:
            if not isinstance(spec, str):
                raise ManifestParseError(
                    f"依赖 '{dep_name}' 的版本声明应为字符串: {p}", path=str(p),
                )
        dependencies = tuple(pairs)

    package_manager = doc.get("packageManager")
    if package_manager is not None and not isinstance(package_manager, str):
        raise _type_error(doc, "packageManager", "字符串", p)

    return Manifest(
        path=p,
        name=name,
        dependencies=dependencies,
        files=_parse_files(doc, p),
        package_manager=package_manager,
        workspaces=doc.get("workspaces") is not None,
    )
