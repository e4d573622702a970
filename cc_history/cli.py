import json
import logging
import os
from datetime import date, datetime, timezone

import click

from . import __version__
from .config import Config
from .core import ConfigurationError, aggregate, build_threads, load_records_for_date
from .ui import HistoryBrowser
from .ui.formatting import history_title, render_daily_stats, render_header, render_thread_summary
from .utils.logging import setup_logging

# Set up logging
setup_logging()
logger = logging.getLogger(__name__)

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

date_option = click.option(
    "--date",
    "target_date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    help="Day to show (YYYY-MM-DD, default: today in UTC)",
)
log_dir_option = click.option("--log-dir", type=click.Path(), help="Claude projects directory to read")


def _resolve_date(target_date: datetime | None) -> date:
    if target_date is None:
        # Log timestamps are UTC, and days are matched on their raw prefix
        return datetime.now(timezone.utc).date()
    return target_date.date()


def _load_day(ctx: click.Context, target_date: date, log_dir: str | None):
    """Run load -> build -> aggregate, exiting with a message when there is nothing to show."""
    if log_dir is None:
        log_dir = Config().get("log_dir")

    try:
        records = load_records_for_date(target_date, log_dir)
        threads = build_threads(records)
        stats = aggregate(threads)
    except ConfigurationError as e:
        error = f"Error: {e}"
    except Exception as e:
        logger.debug("Pipeline failed", exc_info=True)
        error = f"An error occurred: {e}"
    else:
        error = None

    if error:
        click.echo(error, err=True)
        ctx.exit(1)

    if not records:
        click.echo(f"No log entries found for {target_date.isoformat()}.")
        click.echo("Please use Claude Code first, then try again.")
        ctx.exit(0)

    if not threads:
        click.echo(f"No user messages found for {target_date.isoformat()}.")
        ctx.exit(0)

    return threads, stats


@click.group(invoke_without_command=True, context_settings=CONTEXT_SETTINGS)
@date_option
@log_dir_option
@click.pass_context
def cli(ctx, target_date, log_dir):
    """cc-history - browse today's Claude Code messages, tokens and costs"""
    if ctx.invoked_subcommand is not None:
        return

    day = _resolve_date(target_date)
    threads, stats = _load_day(ctx, day, log_dir)

    cfg = Config()
    browser = HistoryBrowser(
        threads,
        stats,
        day,
        page_size=cfg.get("page_size"),
        preview_length=cfg.get("preview_length"),
    )

    try:
        browser.run()
    except (KeyboardInterrupt, click.Abort):
        click.echo("\n\nExiting program.")


@cli.command()
@date_option
@log_dir_option
@click.option("--json", "as_json", is_flag=True, help="Output in JSON format")
@click.pass_context
def summary(ctx, target_date, log_dir, as_json):
    """Print the day's threads and statistics without browsing"""
    day = _resolve_date(target_date)
    threads, stats = _load_day(ctx, day, log_dir)

    if as_json:
        data = {
            "date": day.isoformat(),
            "stats": stats.to_dict(),
            "threads": [thread.to_dict() for thread in threads],
        }
        click.echo(json.dumps(data, indent=2, ensure_ascii=False))
        return

    preview_length = Config().get("preview_length")
    lines = render_header(history_title(day))
    for number, thread in enumerate(threads, 1):
        lines.extend(render_thread_summary(thread, number, preview_length))
    lines.extend(render_daily_stats(stats))
    click.echo("\n".join(lines))


@cli.command()
def version():
    """Show version information"""
    click.echo(f"cc-history v{__version__}")


@cli.group()
def config():
    """Manage configuration settings"""
    pass


@config.command("show")
@click.option("--json", "as_json", is_flag=True, help="Output in JSON format")
def show_config(as_json):
    """Show current configuration"""
    cfg = Config()
    config_data = cfg.get_all()

    if as_json:
        click.echo(json.dumps(config_data, indent=2))
    else:
        click.echo("Current configuration:")
        file_config = cfg._load_config_file()
        for key, value in sorted(config_data.items()):
            # Show source of value
            env_key = Config.ENV_MAPPINGS.get(key, key.upper())
            if os.getenv(env_key) is not None:
                source = " (from environment)"
            elif key in file_config:
                source = " (from config file)"
            else:
                source = " (default)"
            click.echo(f"  {key}: {value}{source}")


@config.command("set")
@click.argument("key")
@click.argument("value")
def set_config(key, value):
    """Set a configuration value"""
    cfg = Config()

    # Validate key
    if key not in Config.DEFAULTS:
        click.echo(f"Error: Unknown configuration key '{key}'")
        click.echo(f"Valid keys: {', '.join(sorted(Config.DEFAULTS.keys()))}")
        return

    # Parse value based on type
    default = Config.DEFAULTS.get(key)
    if isinstance(default, bool):
        value = value.lower() in ("true", "1", "yes", "on")
    elif isinstance(default, int):
        try:
            value = int(value)
        except ValueError:
            click.echo(f"Error: {key} must be an integer")
            return

    cfg.set(key, value)
    click.echo(f"✅ Set {key} = {value}")


@config.command("unset")
@click.argument("key")
def unset_config(key):
    """Remove a configuration value"""
    if key not in Config.DEFAULTS:
        click.echo(f"Error: Unknown configuration key '{key}'")
        click.echo(f"Valid keys: {', '.join(sorted(Config.DEFAULTS.keys()))}")
        return

    cfg = Config()
    cfg.unset(key)
    click.echo(f"✅ Removed {key} from config file")


@cli.command(name="help")
def show_help():
    """Show detailed help and usage examples"""
    click.echo(
        """cc-history - Claude Code History Viewer

Usage Examples:

  # Browse today's messages
  cc-history

  # Browse another day
  cc-history --date 2024-01-02

  # Read logs from a different directory
  cc-history --log-dir /path/to/.claude/projects

  # Print the day's summary without browsing
  cc-history summary
  cc-history summary --json

  # Show configuration
  cc-history config show

  # Set configuration value
  cc-history config set page_size 20

  # Show version
  cc-history version

Features:
  • List the day's user messages
  • Show a detailed view by selecting a message
  • Assistant response history and tool usage
  • Token usage and cost analysis

Configuration Keys:
  log_dir         - Claude projects directory (default: ~/.claude/projects)
  log_level       - Logging level (default: WARNING)
  page_size       - Messages per page when browsing (default: 15)
  preview_length  - Characters of each message shown in lists (default: 60)
"""
    )
