"""linksync.yml 读取

配置文件是可选的: 不存在或为空时返回空字典。
存在时顶层必须是以字符串为键的映射，否则抛 ValueError，由 Config 转为 ConfigError。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

# 配置文件只有几个标量字段，超过这个大小一定是放错了文件
MAX_CONFIG_SIZE = 64 * 1024


def load_yaml(path: str | Path) -> dict[str, Any]:
    """读取配置 YAML

    异常:
        yaml.YAMLError: YAML 格式错误
        ValueError: 文件过大，或顶层不是字符串键映射
        OSError: 读取失败
    """
    p = Path(path)
    if not p.is_file():
        logger.debug("配置文件不存在，使用默认值: %s", p)
        return {}

    file_size = p.stat().st_size
    if file_size > MAX_CONFIG_SIZE:
        raise ValueError(f"配置文件过大: {p} ({file_size} 字节)")

    with open(p, encoding="utf-8") as f:
        result = yaml.safe_load(f)

    if result is None:
        return {}
    if not isinstance(result, dict):
        raise ValueError(f"配置文件顶层必须是映射: {p} (实际类型: {type(result).__name__})")
    bad_keys = [k for k in result if not isinstance(k, str)]
    if bad_keys:
        raise ValueError(f"配置项名必须是字符串: {p} ({bad_keys})")
    return result
