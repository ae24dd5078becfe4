"""link 依赖同步模块

拆分说明:
- models.py: 数据模型
- manifest.py: package.json 读取与校验
- extractor.py: link 声明提取
- resolver.py: 被链接包清单解析
- synchronizer.py: 依赖目录清理 + 复制
"""

from linksync.core.link.extractor import extract_link_fields, parse_link_specifier
from linksync.core.link.manifest import load_document, read_files, read_manifest
from linksync.core.link.models import LinkField, LocalPackageInfo, Manifest, SyncResult
from linksync.core.link.resolver import LocalPackageResolver
from linksync.core.link.synchronizer import InstallSynchronizer

__all__ = [
    "Manifest",
    "LinkField",
    "LocalPackageInfo",
    "SyncResult",
    "load_document",
    "read_manifest",
    "read_files",
    "extract_link_fields",
    "parse_link_specifier",
    "LocalPackageResolver",
    "InstallSynchronizer",
]
