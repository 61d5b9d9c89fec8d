"""CLI for templar."""

import functools
import sys
from typing import get_origin

import click
from dotenv import find_dotenv, load_dotenv

from templar import __version__
from templar.config import ConfigError, ConfigLoader, UnknownSettingError
from templar.config.converters import get_converter
from templar.config.settings import get_setting_type
from templar.utils.logging import FORMAT_STYLES, get_logger, resolve_log_level, setup_logging

logger = get_logger(__name__)

INDENT = "    "
OVERRIDE_WARNING_MSG = (
    "The user configuration file overrides this setting, so the new value won't take effect"
)


def reports_config_errors(func):
    """Log configuration errors and exit with status 1 instead of a traceback."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except UnknownSettingError as e:
            logger.error(f"Unrecognized setting: '{e.setting_name}'")
        except ConfigError as e:
            logger.error(e.message)
        sys.exit(1)

    return wrapper


def format_value(cfg, name: str, value) -> str:
    """Render a setting value the way a user would type it, e.g. `true`, `[a, b]`."""
    if value is None:
        return ""

    setting_type = get_setting_type(name, cfg.valid_options)
    converter = get_converter(setting_type) if setting_type is not None else None
    if converter is None:
        return str(value)

    text = converter.to_string(value)
    return f"[{text}]" if isinstance(value, list) else text


def simple_name(value_type) -> str:
    if get_origin(value_type) is not None:
        return repr(value_type)
    return getattr(value_type, "__name__", repr(value_type))


@click.group()
@click.version_option(version=__version__, prog_name="templar")
@click.option("--verbose", "-v", is_flag=True, help="Show debug output")
@click.option("--quiet", "-q", is_flag=True, help="Only show warnings and errors")
@click.option("--info", is_flag=True, help="Show informational output")
@click.option("--log-level", default=None, help="Explicit log level (DEBUG, INFO, ...)")
@click.option(
    "--log-format",
    type=click.Choice(FORMAT_STYLES),
    default="plain",
    show_default=True,
    help="Log line format",
)
@click.pass_context
@reports_config_errors
def cli(ctx, verbose, quiet, info, log_level, log_format):
    """templar - create projects from templates."""
    load_dotenv(find_dotenv(usecwd=True))
    setup_logging(format_style=log_format)

    configuration = ConfigLoader().load()

    # Options from the config, with command line flags winning
    options = configuration.get_sub_settings("options")
    flags = {"verbose": verbose, "quiet": quiet, "info": info, "log_level": log_level}
    options.update({k: v for k, v in flags.items() if v})

    try:
        setup_logging(level=resolve_log_level(options), format_style=log_format)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    ctx.obj = configuration


@cli.group()
def config():
    """View and change configuration settings."""
    pass


@config.command("set")
@click.argument("name")
@click.argument("values", nargs=-1, required=True)
@click.pass_obj
@reports_config_errors
def config_set(cfg, name, values):
    """Change or initialise a setting. Multiple values make a list."""
    if not cfg.put_setting(name, ", ".join(values)):
        logger.warning(OVERRIDE_WARNING_MSG)
    cfg.store_settings()


@config.command("add")
@click.argument("name")
@click.argument("value")
@click.pass_obj
@reports_config_errors
def config_add(cfg, name, value):
    """Add a value to a list setting."""
    if not cfg.append_to_setting(name, value):
        logger.warning(OVERRIDE_WARNING_MSG)
    cfg.store_settings()


@config.command("clear")
@click.argument("name")
@click.pass_obj
@reports_config_errors
def config_clear(cfg, name):
    """Remove a setting so the default applies."""
    cfg.clear_setting(name)
    cfg.store_settings()


@config.command("show")
@click.argument("name", required=False)
@click.option("--all", "show_all", is_flag=True, help="Show every current setting")
@click.pass_obj
@reports_config_errors
def config_show(cfg, name, show_all):
    """Show the current value of a setting."""
    if show_all:
        settings = cfg.get_all_settings()
        width = max((len(k) for k in settings), default=0) + 3

        click.echo("Current configuration settings:\n")
        for key, value in settings.items():
            click.echo(f"{INDENT}{key.ljust(width)}= {format_value(cfg, key, value)}")
        return

    if not name:
        raise click.UsageError("Provide a setting name or --all")

    click.echo(format_value(cfg, name, cfg.get_setting(name)))


@config.command("list")
@click.pass_obj
def config_list(cfg):
    """List the available settings and their types."""
    width = max((len(k) for k in cfg.valid_options), default=0) + 3

    click.echo("Valid templar configuration settings:\n")
    for key, value_type in cfg.valid_options.items():
        click.echo(f"{INDENT}{key.ljust(width)}{simple_name(value_type)}")


if __name__ == "__main__":
    cli()
