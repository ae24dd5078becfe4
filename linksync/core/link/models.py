"""link 依赖数据模型

数据类:
- Manifest: package.json 中与同步相关的字段
- LinkField: 一条 link:<path> 依赖声明
- LocalPackageInfo: 补全了 files 列表的本地包
- SyncResult: 单个包的同步结果
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

MANIFEST_NAME = "package.json"
DEFAULT_MODULES_DIR = "node_modules"
LINK_PROTOCOL = "link"


@dataclass(frozen=True)
class Manifest:
    """package.json 的结构化视图

    可选字段用 None 表示缺失，与空值（空元组）区分。
    dependencies 保留为有序的 (name, specifier) 对，重复键不会被 JSON 解析吞掉。
    """

    path: Path
    name: str | None = None
    dependencies: tuple[tuple[str, str], ...] | None = None
    files: tuple[str, ...] | None = None
    package_manager: str | None = None
    workspaces: bool = False


@dataclass(frozen=True)
class LinkField:
    """一条 link 依赖声明"""

    name: str
    path: str  # link: 之后的原始路径，未解析

    def source_dir(self, cwd: Path) -> Path:
        return Path(cwd) / self.path


@dataclass(frozen=True)
class LocalPackageInfo:
    """被链接包的元信息"""

    name: str
    path: str
    files: tuple[str, ...] | None = None

    def source_dir(self, cwd: Path) -> Path:
        """源码目录，相对路径按工作目录解析"""
        return Path(cwd) / self.path

    def target_dir(self, modules_root: Path) -> Path:
        """安装目录: <modules_root>/<name>，scope 包名自然形成两级目录"""
        return Path(modules_root) / self.name


@dataclass
class SyncResult:
    """单个包的同步结果"""

    name: str
    target: Path
    copied: list[str]
