"""link 依赖管理器

把 package.json 中 link:<path> 声明的本地包，按它们自己声明的 files
列表复制到 node_modules，效果等同于从注册表安装一个已发布的包。

核心流程:
  - list_links(): 读根清单，提取 link 依赖
  - resolve():    读每个被链接包的清单，补全 files
  - sync():       清理旧目录，再复制 files

所有路径都以构造时传入的 cwd 为基准，不读取进程的当前目录。

用法:
    from linksync.core.link_manager import LinkManager

    lm = LinkManager(cwd="/path/to/app")
    for result in lm.sync():
        print(result.name, result.target)
"""

from __future__ import annotations

import logging
from pathlib import Path

from linksync.core.config import Config, get_config
from linksync.core.exceptions import MissingDependenciesError
from linksync.core.link.extractor import extract_link_fields
from linksync.core.link.manifest import read_manifest
from linksync.core.link.models import LinkField, LocalPackageInfo, SyncResult
from linksync.core.link.resolver import LocalPackageResolver
from linksync.core.link.synchronizer import InstallSynchronizer
from linksync.core.workspace import get_package_manager

logger = logging.getLogger(__name__)


class LinkManager:
    """一次同步运行的入口"""

    def __init__(self, cwd: str | Path, config: Config | None = None) -> None:
        self.cwd = Path(cwd).resolve()
        self.config = config or get_config()
        self.resolver = LocalPackageResolver(
            self.cwd,
            max_workers=self.config.max_workers,
            manifest_name=self.config.manifest_name,
        )
        self.synchronizer = InstallSynchronizer(
            self.cwd,
            modules_root=Path(self.config.modules_dir),
            max_workers=self.config.max_workers,
        )

    @property
    def manifest_path(self) -> Path:
        return self.cwd / self.config.manifest_name

    @property
    def modules_root(self) -> Path:
        return self.synchronizer.modules_root

    def list_links(self) -> list[LinkField]:
        """读取根清单中的 link 依赖"""
        return extract_link_fields(read_manifest(self.manifest_path))

    def resolve(self) -> list[LocalPackageInfo]:
        return self.resolver.resolve(self.list_links())

    def sync(self) -> list[SyncResult]:
        """完整同步一次

        有 dependencies 但没有任何 link 依赖时，与缺失 dependencies 同样报错，
        此时尚未改动任何文件。
        """
        links = self.list_links()
        if not links:
            raise MissingDependenciesError(
                f"{self.manifest_path} 的 'dependencies' 中没有 link 依赖",
            )
        logger.info("开始同步 %d 个本地包 -> %s", len(links), self.modules_root)
        packages = self.resolver.resolve(links)
        results = self.synchronizer.sync(packages)
        logger.info("同步完成: %s", ", ".join(r.name for r in results))
        return results

    def package_manager(self) -> str | None:
        """探测工作区包管理器，仅供提示"""
        return get_package_manager(self.cwd)
