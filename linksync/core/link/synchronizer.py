"""安装目录同步器

两阶段执行，顺序不可交换:
  A. 清理: 删除每个包名在依赖目录下的旧目录，保证不残留已不再声明的文件
  B. 复制: 按 files 列表把源文件复制到 <modules_root>/<name>/，跟随符号链接

没有回滚: 某个包在阶段 B 失败时，它的旧目录已被阶段 A 删除，留下空目录或部分内容。
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from linksync.core.exceptions import ManifestParseError, MissingFilesError
from linksync.core.link.extractor import is_safe_package_name
from linksync.core.link.models import DEFAULT_MODULES_DIR, LocalPackageInfo, SyncResult
from linksync.utils.pool import run_ordered

logger = logging.getLogger(__name__)


def remove_path(target: Path) -> bool:
    """删除文件、符号链接或目录树，不存在时返回 False

    符号链接只删除链接本身，不跟随到源目录。
    """
    if target.is_symlink() or target.is_file():
        target.unlink(missing_ok=True)
        return True
    if target.exists():
        shutil.rmtree(target)
        return True
    return False


def copy_entry(src: Path, dest: Path) -> None:
    """复制单个文件或整个目录，覆盖已有目标，复制链接指向的内容而非链接本身"""
    if src.is_dir():
        shutil.copytree(src, dest, symlinks=False, dirs_exist_ok=True)
        return
    dest.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(src, dest, follow_symlinks=True)


class InstallSynchronizer:
    """把本地包的 files 同步到依赖安装目录"""

    def __init__(
        self,
        cwd: Path,
        modules_root: Path | None = None,
        max_workers: int = 1,
    ) -> None:
        self.cwd = Path(cwd)
        self.modules_root = Path(modules_root) if modules_root else self.cwd / DEFAULT_MODULES_DIR
        if not self.modules_root.is_absolute():
            self.modules_root = self.cwd / self.modules_root
        self.max_workers = max_workers

    def cleanup(self, packages: list[LocalPackageInfo]) -> list[str]:
        """阶段 A: 删除所有涉及包名的旧安装目录，返回实际删除的包名"""
        names = list(dict.fromkeys(p.name for p in packages))

        def _remove(name: str) -> bool:
            target = self.modules_root / name
            removed = remove_path(target)
            if removed:
                logger.info(
                    "已清理旧目录: %s", target,
                    extra={"package": name, "target": str(target)},
                )
            return removed

        flags = run_ordered(_remove, names, self.max_workers)
        return [name for name, removed in zip(names, flags) if removed]

    def copy_package(self, pkg: LocalPackageInfo) -> SyncResult:
        """阶段 B (单个包): 按 files 列表逐项复制"""
        if pkg.files is None:
            raise MissingFilesError(
                f"本地包 '{pkg.name}' 的 package.json 中没有 'files' 字段 ({pkg.path})",
                package=pkg.name,
            )

        source = pkg.source_dir(self.cwd)
        target = pkg.target_dir(self.modules_root)
        for entry in pkg.files:
            copy_entry(source / entry, target / entry)
            logger.debug(
                "  复制: %s -> %s", source / entry, target / entry,
                extra={"package": pkg.name, "target": str(target / entry)},
            )

        logger.info(
            "已同步: %s (%d 个条目) -> %s", pkg.name, len(pkg.files), target,
            extra={"package": pkg.name, "target": str(target)},
        )
        return SyncResult(name=pkg.name, target=target, copied=list(pkg.files))

    def sync(self, packages: list[LocalPackageInfo]) -> list[SyncResult]:
        """先完整清理，再并发复制；第一个失败直接抛出

        包名先统一校验，不合法时在任何删除之前报错。
        """
        if not packages:
            logger.info("没有需要同步的本地包")
            return []
        for pkg in packages:
            if not is_safe_package_name(pkg.name):
                raise ManifestParseError(f"本地包名不合法，拒绝写入依赖目录: {pkg.name!r}")
        self.cleanup(packages)
        return run_ordered(self.copy_package, packages, self.max_workers)
