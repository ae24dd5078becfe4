"""link 依赖声明提取

从根清单的 dependencies 中挑出 link:<path> 形式的条目。
其余条目是普通的注册表依赖，直接跳过。
"""

from __future__ import annotations

import logging

from linksync.core.exceptions import (
    DuplicateLinkError,
    ManifestParseError,
    MissingDependenciesError,
)
from linksync.core.link.models import LINK_PROTOCOL, LinkField, Manifest

logger = logging.getLogger(__name__)


def parse_link_specifier(specifier: str) -> str | None:
    """解析版本声明，是 link 协议时返回路径部分，否则返回 None

    只在第一个冒号处切分，路径本身可以包含冒号。
    """
    protocol, sep, path = specifier.partition(":")
    if not sep or protocol != LINK_PROTOCOL:
        return None
    return path


def is_safe_package_name(name: str) -> bool:
    """包名会直接作为 <modules_root>/<name> 使用，必须落在依赖目录之内

    允许 "lib" 和 "@scope/lib"；拒绝空名、绝对路径、反斜杠，以及空段、"."、".." 段。
    """
    if not name or name.startswith("/") or "\\" in name or ":" in name:
        return False
    segments = name.split("/")
    if len(segments) > 2 or (len(segments) == 2 and not segments[0].startswith("@")):
        return False
    return all(seg and seg not in (".", "..") for seg in segments)


def extract_link_fields(manifest: Manifest) -> list[LinkField]:
    """按清单顺序返回所有 link 依赖

    异常:
        MissingDependenciesError: 清单没有 dependencies 字段
        DuplicateLinkError: 同一包名出现多次 link 声明
        ManifestParseError: 包名不合法，或 link: 之后路径为空
    """
    if manifest.dependencies is None:
        raise MissingDependenciesError(
            f"{manifest.path} 中没有 'dependencies' 字段",
        )

    links: list[LinkField] = []
    seen: set[str] = set()
    for name, specifier in manifest.dependencies:
        path = parse_link_specifier(specifier)
        if path is None:
            continue
        if not is_safe_package_name(name):
            raise ManifestParseError(
                f"link 依赖的包名不合法: {name!r}", path=str(manifest.path),
            )
        if not path:
            raise ManifestParseError(
                f"依赖 '{name}' 的 link 路径为空: {specifier!r}", path=str(manifest.path),
            )
        if name in seen:
            raise DuplicateLinkError(
                f"依赖 '{name}' 被重复声明为 link: {manifest.path}", name=name,
            )
        seen.add(name)
        links.append(LinkField(name=name, path=path))

    logger.debug("发现 %d 个 link 依赖: %s", len(links), [lf.name for lf in links])
    return links
