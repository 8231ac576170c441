"""
CLI 模块

命令行接口实现。
"""

import asyncio
import json
from pathlib import Path

import click
import toml
import yaml
from dotenv import find_dotenv, load_dotenv
from loguru import logger

from packsync import __version__
from packsync.exceptions import ConfigError, ConfigParseError, PackSyncError
from packsync.logger import setup_logger
from packsync.models import PackSyncConfig
from packsync.orchestrator import PackSyncOrchestrator, PipelineReport
from packsync.services import VersionCatalog
from packsync.settings import Selection, SelectionStore


def load_config(config_path: str) -> dict:
    """加载配置文件"""
    path = Path(config_path)

    if not path.exists():
        raise ConfigError(f"配置文件不存在: {config_path}")

    suffix = path.suffix.lower()

    try:
        if suffix == ".toml":
            return toml.load(config_path)
        elif suffix == ".json":
            return json.loads(path.read_text(encoding="utf-8"))
        elif suffix in (".yaml", ".yml"):
            return yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (toml.TomlDecodeError, yaml.YAMLError, ValueError) as e:
        raise ConfigParseError(
            f"配置文件解析失败: {e}", context={"path": config_path}
        ) from e
    raise ConfigParseError(f"不支持的配置文件格式: {suffix}")


def print_report(report: PipelineReport) -> None:
    for sync in report.sync:
        line = (
            f"  [{sync.status.value}] {sync.target.bucket} -> {sync.target.directory}: "
            f"下载 {len(sync.downloaded)}，跳过 {len(sync.skipped)}，"
            f"删除 {len(sync.deleted)}，失败 {len(sync.failed)}"
        )
        click.echo(line)
    if report.install is not None:
        click.echo(f"  加载器 {report.install.version_tag}: {report.install.state.value}")
    if report.profile is not None:
        click.echo(f"  启动配置: {report.profile.name} ({report.profile.version_id})")
    elif report.profile_error is not None:
        click.echo(f"  启动配置失败: {report.profile_error}")
    if report.launched is False:
        click.echo("  Minecraft 启动器启动失败")


async def run_async(
    config: PackSyncConfig,
    skip_install: bool,
    skip_profile: bool,
    launch: bool = False,
) -> PipelineReport:
    orchestrator = PackSyncOrchestrator(config)
    return await orchestrator.run(
        skip_install=skip_install, skip_profile=skip_profile, launch=launch
    )


@click.group()
@click.option("--debug", is_flag=True, help="启用调试模式")
@click.version_option(version=__version__)
def main(debug: bool):
    """PackSync - Minecraft 整合包同步与安装工具"""
    setup_logger(level="DEBUG" if debug else None)
    env_path = find_dotenv(usecwd=True)
    if env_path:
        load_dotenv(dotenv_path=env_path, override=False)
        logger.debug(f"已加载环境变量文件: {env_path}")


@main.command()
@click.argument("config", type=click.Path(exists=True), default="packsync.toml")
@click.option("--dry-run", is_flag=True, help="干运行模式（只验证配置）")
@click.option("--skip-install", is_flag=True, help="跳过加载器安装")
@click.option("--skip-profile", is_flag=True, help="跳过启动配置写入")
@click.option("--no-remember", is_flag=True, help="不保存本次的版本选择")
@click.option("--launch", is_flag=True, help="完成后打开 Minecraft 启动器")
def sync(
    config: str,
    dry_run: bool,
    skip_install: bool,
    skip_profile: bool,
    no_remember: bool,
    launch: bool,
):
    """同步整合包内容并安装加载器"""
    try:
        cfg = PackSyncConfig.from_dict(load_config(config))
        cfg.validate()
    except PackSyncError as e:
        logger.error(f"配置错误: {e}")
        raise click.ClickException(str(e))

    if dry_run:
        logger.info("[干运行模式] 配置验证通过")
        for key, value in cfg.summary().items():
            logger.info(f"  {key}: {value}")
        return

    report = asyncio.run(run_async(cfg, skip_install, skip_profile, launch))
    print_report(report)

    if not report.ok:
        raise click.ClickException("部分步骤失败，详见日志")

    if not no_remember:
        SelectionStore().save(
            Selection(
                minecraft_version=cfg.minecraft.version,
                mod_loader=cfg.minecraft.loader.value,
                mod_loader_version=cfg.minecraft.loader_version,
            )
        )


@main.command()
@click.argument("kind", type=click.Choice(["minecraft", "forge", "fabric"]))
@click.option("--mc", "mc_version", help="Minecraft 版本（用于 forge）")
def versions(kind: str, mc_version: str):
    """列出可用版本"""

    async def fetch():
        async with VersionCatalog() as catalog:
            if kind == "minecraft":
                return await catalog.minecraft_releases()
            if kind == "fabric":
                return await catalog.fabric_installer_versions()
            if mc_version:
                promos = await catalog.forge_versions(mc_version)
                return [f"{channel}: {version}" for channel, version in promos.items()]
            promos = await catalog.forge_promotions()
            return [f"{key}: {version}" for key, version in promos.items()]

    try:
        for line in asyncio.run(fetch()):
            click.echo(line)
    except PackSyncError as e:
        raise click.ClickException(str(e))


@main.command()
def last():
    """显示上次使用的版本选择"""
    selection = SelectionStore().load()
    if selection is None:
        click.echo("没有保存的选择")
        return
    click.echo(f"Minecraft 版本: {selection.minecraft_version}")
    click.echo(f"加载器: {selection.mod_loader}")
    click.echo(f"加载器版本: {selection.mod_loader_version}")


if __name__ == "__main__":
    main()
