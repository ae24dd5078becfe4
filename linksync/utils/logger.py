"""linksync 日志配置

同步过程中的日志通过 extra={"package": ..., "target": ...} 携带包名和安装路径，
两种输出格式都会带上这些上下文:

  文本: 2024-01-01 12:00:00 [INFO   ] linksync.core.link.synchronizer [shared-lib]: 已同步 ...
  JSON: {"level": "INFO", "message": "已同步 ...", "package": "shared-lib", "target": "/app/node_modules/shared-lib", ...}
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone

# 同步日志可携带的上下文字段
CONTEXT_FIELDS = ("package", "target")


def _context(record: logging.LogRecord) -> dict[str, str]:
    return {
        key: str(getattr(record, key))
        for key in CONTEXT_FIELDS
        if getattr(record, key, None) is not None
    }


class JSONFormatter(logging.Formatter):
    """结构化 JSON 日志格式器，便于 CI 流水线按包名过滤"""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_context(record),
        }
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, ensure_ascii=False)


class TextFormatter(logging.Formatter):
    """人类可读格式，有包名时附在 logger 名之后"""

    def __init__(self) -> None:
        super().__init__("%(asctime)s [%(levelname)-7s] %(name)s%(package_tag)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        package = _context(record).get("package")
        record.package_tag = f" [{package}]" if package else ""
        return super().format(record)


def setup_logging(level: str = "INFO", json_output: bool = False) -> None:
    """配置根日志器，输出到 stderr（stdout 留给命令结果）

    无法识别的级别名回退为 INFO；重复调用会替换已有 handler。
    """
    reset_logging()

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JSONFormatter() if json_output else TextFormatter())
    root.addHandler(handler)


def reset_logging() -> None:
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
