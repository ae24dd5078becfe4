"""linksync 命令行接口

命令按领域拆分为子模块，每个模块注册自己的命令到 main group。
"""

from __future__ import annotations

import dataclasses
import functools
import os
from pathlib import Path
from typing import Any, Callable

import click

from linksync import __version__
from linksync.core.config import DEFAULT_CONFIG_FILE, Config
from linksync.core.exceptions import LinkSyncError
from linksync.core.link_manager import LinkManager
from linksync.utils.logger import setup_logging


def _manager(cwd: str, config: str = DEFAULT_CONFIG_FILE, modules_dir: str | None = None) -> LinkManager:
    """按命令行参数构造 LinkManager，配置文件相对 cwd 查找"""
    config_path = Path(config)
    if not config_path.is_absolute():
        config_path = Path(cwd) / config_path
    cfg = Config.from_file(str(config_path))
    if modules_dir:
        cfg = dataclasses.replace(cfg, modules_dir=modules_dir)
    return LinkManager(cwd=cwd, config=cfg)


def handle_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    """把业务异常和文件系统异常转为 click 的错误输出（退出码 1）"""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except LinkSyncError as e:
            raise click.ClickException(f"[{e.code}] {e}") from e
        except OSError as e:
            raise click.ClickException(f"[FILESYSTEM_ERROR] {e}") from e

    return wrapper


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """linksync - 把 link: 本地依赖按发布内容同步到 node_modules"""
    setup_logging(
        level=os.getenv("LINKSYNC_LOG_LEVEL", "INFO"),
        json_output=os.getenv("LINKSYNC_LOG_JSON", "") == "1",
    )


# 注册各领域子命令
from linksync.cli.cmd_link import register as _reg_link  # noqa: E402

_reg_link(main)
