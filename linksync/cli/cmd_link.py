"""CLI: link 依赖同步命令"""

from __future__ import annotations

import logging

import click

from linksync.cli import _manager, handle_errors
from linksync.core.config import DEFAULT_CONFIG_FILE
from linksync.core.exceptions import LinkSyncError

logger = logging.getLogger(__name__)

_cwd_option = click.option(
    "--cwd", default=".", type=click.Path(exists=True, file_okay=False),
    help="项目目录（package.json 所在目录）",
)


def register(group: click.Group) -> None:
    group.add_command(sync)
    group.add_command(list_links)
    group.add_command(package_manager)


@click.command()
@_cwd_option
@click.option("--config", default=DEFAULT_CONFIG_FILE, help="配置文件路径（相对 --cwd）")
@click.option("--modules-dir", default=None, help="依赖安装目录（覆盖配置文件）")
@handle_errors
def sync(cwd: str, config: str, modules_dir: str | None) -> None:
    """清理并重新复制所有 link 依赖"""
    lm = _manager(cwd, config, modules_dir)
    results = lm.sync()
    for r in results:
        click.echo(f"  {r.name:30s} {len(r.copied):3d} 个条目 -> {r.target}")
    click.echo(f"已同步 {len(results)} 个本地包")

    # 包管理器探测只用于提示，失败不影响同步结果
    try:
        pm = lm.package_manager()
    except LinkSyncError as e:
        logger.warning("无法探测包管理器: %s", e)
        return
    if pm:
        click.echo(f"检测到包管理器: {pm}。执行 '{pm} install' 后需重新运行 linksync sync")


@click.command(name="links")
@_cwd_option
@handle_errors
def list_links(cwd: str) -> None:
    """列出 package.json 中的 link 依赖"""
    lm = _manager(cwd)
    links = lm.list_links()
    if not links:
        click.echo("没有 link 依赖。")
        return
    for link in links:
        click.echo(f"  {link.name:30s} {link.path}  ({link.source_dir(lm.cwd).resolve()})")


@click.command(name="pm")
@_cwd_option
@handle_errors
def package_manager(cwd: str) -> None:
    """显示工作区使用的包管理器"""
    click.echo(_manager(cwd).package_manager() or "none")
