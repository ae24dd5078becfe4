"""本地包解析器

职责:
- 读取每个 link 目标目录下的 package.json
- 原样取出 files 字段（缺失留给同步阶段报错）
"""

from __future__ import annotations

import logging
from pathlib import Path

from linksync.core.link.manifest import read_files
from linksync.core.link.models import MANIFEST_NAME, LinkField, LocalPackageInfo
from linksync.utils.pool import run_ordered

logger = logging.getLogger(__name__)


class LocalPackageResolver:
    """本地包解析器 - 只读，不修改文件系统"""

    def __init__(
        self,
        cwd: Path,
        max_workers: int = 1,
        manifest_name: str = MANIFEST_NAME,
    ) -> None:
        self.cwd = Path(cwd)
        self.max_workers = max_workers
        self.manifest_name = manifest_name

    def resolve_one(self, link: LinkField) -> LocalPackageInfo:
        files = read_files(link.source_dir(self.cwd) / self.manifest_name)
        logger.info(
            "解析: %s -> %s (%s)",
            link.name, link.path,
            f"{len(files)} 个文件条目" if files is not None else "未声明 files",
        )
        return LocalPackageInfo(name=link.name, path=link.path, files=files)

    def resolve(self, links: list[LinkField]) -> list[LocalPackageInfo]:
        """并发读取所有被链接包的清单，任一失败则整批失败"""
        return run_ordered(self.resolve_one, links, self.max_workers)
