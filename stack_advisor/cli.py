"""
CLI 入口 - Stack Advisor 命令行工具
"""

import asyncio
import json
import logging
import sys
from pathlib import Path

import click
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .compatibility import CompatibilityReport, Severity, analyze_compatibility
from .config import AdvisorConfig
from .errors import AdvisorError
from .health import CheckStatus, HealthReport, OverallStatus, ProjectHandle, check_health

console = Console()

SEVERITY_STYLES = {
    Severity.LOW: "cyan",
    Severity.MEDIUM: "yellow",
    Severity.HIGH: "red",
    Severity.CRITICAL: "bold red",
}

STATUS_ICONS = {
    CheckStatus.PASS: "✅",
    CheckStatus.WARNING: "⚠️ ",
    CheckStatus.FAIL: "❌",
}

OVERALL_STYLES = {
    OverallStatus.HEALTHY: "green",
    OverallStatus.WARNING: "yellow",
    OverallStatus.CRITICAL: "red",
}


def setup_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


def print_compatibility_report(report: CompatibilityReport, modules, framework: str):
    """打印兼容性报告"""
    title = f"🧩 模块兼容性 ({framework}): {', '.join(modules) or '-'}"
    if report.conflicts:
        table = Table(title=escape(title), show_header=True)
        table.add_column("类型", style="cyan")
        table.add_column("级别")
        table.add_column("涉及模块")
        table.add_column("描述")

        for conflict in report.conflicts:
            style = SEVERITY_STYLES[conflict.severity]
            table.add_row(
                conflict.type,
                f"[{style}]{conflict.severity.value}[/{style}]",
                ", ".join(conflict.affected),
                escape(conflict.description),
            )
        console.print(table)
    else:
        console.print(escape(title), style="bold")

    verdict = "✅ 兼容" if report.compatible else "❌ 不兼容"
    console.print(Panel(
        f"{verdict}    分数: {report.score}/100",
        border_style="green" if report.compatible else "red",
    ))

    console.print("\n💡 建议:", style="bold")
    for i, rec in enumerate(report.recommendations, 1):
        console.print(escape(f"   {i}. {rec}"))

    if report.rule_errors:
        console.print("\n⚠️  规则执行失败:", style="bold yellow")
        for error in report.rule_errors:
            console.print(escape(f"   - {error}"))


def print_health_report(report: HealthReport):
    """打印健康报告"""
    table = Table(title="🩺 项目健康检查", show_header=True)
    table.add_column("检查", style="cyan")
    table.add_column("状态")
    table.add_column("分数", justify="right")
    table.add_column("详情")

    for check in report.checks:
        table.add_row(
            check.name,
            f"{STATUS_ICONS[check.status]} {check.status.value}",
            str(check.score),
            escape(check.details),
        )
    console.print(table)

    summary = report.summary
    style = OVERALL_STYLES[report.overall]
    console.print(Panel(
        f"整体状态: [{style}]{report.overall.value}[/{style}]    分数: {report.score:.1f}/100\n"
        f"通过 {summary.passed_checks} / 警告 {summary.warning_checks} / "
        f"失败 {summary.failed_checks} / 共 {summary.total_checks}",
        title="健康报告",
        border_style=style,
    ))

    if report.is_degenerate:
        console.print("⚠️  没有注册任何检查，结果不代表项目健康", style="bold yellow")

    recommendations = [
        (check.name, rec) for check in report.checks for rec in check.recommendations
    ]
    if recommendations:
        console.print("\n💡 建议:", style="bold")
        for name, rec in recommendations:
            console.print(escape(f"   [{name}] {rec}"))


def load_facts(path: Path) -> ProjectHandle:
    """读取上游采集的项目事实（YAML 或 JSON）"""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (yaml.YAMLError, UnicodeDecodeError) as e:
        raise click.BadParameter(f"无法解析事实文件: {e}", param_hint="--facts")
    return ProjectHandle.from_dict(data)


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="输出调试日志")
@click.version_option(version=__version__)
def main(verbose: bool) -> None:
    """Stack Advisor - 模块兼容性与项目健康评分"""
    setup_logging(verbose)


@main.command("compat")
@click.argument("modules", nargs=-1)
@click.option("--framework", "-f", required=True, help="目标框架 (nextjs|react-native|flutter|tauri|sveltekit)")
@click.option("--platform", "-p", default="web", show_default=True, help="目标平台")
@click.option("--json", "as_json", is_flag=True, default=False, help="以 JSON 输出")
def compat_cmd(modules, framework: str, platform: str, as_json: bool) -> None:
    """检查模块组合的兼容性"""
    try:
        report = analyze_compatibility(list(modules), framework, platform)
    except AdvisorError as e:
        console.print(escape(f"❌ {e}"), style="bold red")
        sys.exit(2)

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
    else:
        print_compatibility_report(report, modules, framework)

    if not report.compatible:
        sys.exit(1)


@main.command("health")
@click.option("--facts", "facts_path", required=True,
              type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="上游采集的项目事实文件")
@click.option("--config", "config_path", default=None,
              type=click.Path(dir_okay=False, path_type=Path), help="配置文件 (YAML)")
@click.option("--timeout", type=click.FloatRange(min=0, min_open=True), default=None, help="单项检查超时（秒）")
@click.option("--threshold", type=float, default=None, help="最低健康分数")
@click.option("--fail-under", is_flag=True, default=False,
              help="状态为 critical 或分数低于阈值时以非零码退出")
@click.option("--json", "as_json", is_flag=True, default=False, help="以 JSON 输出")
def health_cmd(
    facts_path: Path,
    config_path: Path,
    timeout: float,
    threshold: float,
    fail_under: bool,
    as_json: bool,
) -> None:
    """评估已有项目的健康状况"""
    try:
        config = AdvisorConfig.load(config_path)
        if timeout is not None:
            config.health.timeout_seconds = timeout
        project = load_facts(facts_path)
        report = asyncio.run(check_health(project, config=config))
    except AdvisorError as e:
        console.print(escape(f"❌ {e}"), style="bold red")
        sys.exit(2)

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
    else:
        print_health_report(report)

    if threshold is None:
        threshold = config.thresholds.overall_score
    below = report.score < threshold
    if below and not as_json:
        console.print(f"\n⚠️  健康分数 {report.score:.1f} 低于阈值 {threshold:g}", style="yellow")

    if fail_under and (below or report.overall == OverallStatus.CRITICAL):
        sys.exit(1)


if __name__ == "__main__":
    main()
