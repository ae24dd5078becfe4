"""工作区探测 - 判断所在工作区使用的包管理器

仅用于提示信息，同步结果不依赖这里的任何返回值。

判定顺序:
  1. 从 cwd 向上查找工作区根目录
  2. 根目录 package.json 的 packageManager 字段（如 "pnpm@8.0.0"）
  3. 根目录下的 yarn.lock / pnpm-lock.yaml
"""

from __future__ import annotations

import logging
from pathlib import Path

from linksync.core.exceptions import WorkspaceRootNotFoundError
from linksync.core.link.manifest import read_manifest
from linksync.core.link.models import MANIFEST_NAME

logger = logging.getLogger(__name__)

SUPPORTED_MANAGERS = ("yarn", "pnpm")

# 按优先级排列的工作区标记文件
WORKSPACE_MARKERS = (
    "lerna.json",
    "rush.json",
    "yarn.lock",
    "pnpm-workspace.yaml",
    "package-lock.json",
)

LOCKFILES = (
    ("yarn.lock", "yarn"),
    ("pnpm-lock.yaml", "pnpm"),
)


def _is_workspace_root(directory: Path) -> bool:
    if any((directory / marker).exists() for marker in WORKSPACE_MARKERS):
        return True
    manifest_path = directory / MANIFEST_NAME
    return manifest_path.is_file() and read_manifest(manifest_path).workspaces


def find_workspace_root(cwd: str | Path) -> Path:
    """从 cwd 开始向上查找第一个带工作区标记的目录"""
    start = Path(cwd).resolve()
    for directory in (start, *start.parents):
        if _is_workspace_root(directory):
            logger.debug("工作区根目录: %s", directory)
            return directory
    raise WorkspaceRootNotFoundError(f"从 {start} 向上找不到工作区根目录")


def parse_package_manager_field(value: str) -> str | None:
    """'pnpm@8.0.0' -> 'pnpm'，不支持的包管理器返回 None"""
    name = value.split("@", 1)[0].strip()
    return name if name in SUPPORTED_MANAGERS else None


def get_package_manager(cwd: str | Path) -> str | None:
    """返回 "yarn" / "pnpm" / None

    异常:
        WorkspaceRootNotFoundError: 找不到工作区根目录
    """
    root = find_workspace_root(cwd)

    manifest_path = root / MANIFEST_NAME
    if manifest_path.is_file():
        manifest = read_manifest(manifest_path)
        if manifest.package_manager:
            name = parse_package_manager_field(manifest.package_manager)
            if name:
                logger.debug("packageManager 字段声明: %s", manifest.package_manager)
                return name

    for lockfile, name in LOCKFILES:
        if (root / lockfile).exists():
            logger.debug("锁文件命中: %s", root / lockfile)
            return name
    return None
