import logging
import pathlib
import sys

import click

import swaywsr
import swaywsr.config
import swaywsr.errors

_logger = logging.getLogger(__name__)


@click.group()
@click.pass_context
@click.option(
    "-v",
    "--log-level",
    "log_level",
    type=click.Choice(
        [str(x) for x in logging._nameToLevel.keys()], case_sensitive=False
    ),
    default="WARNING",
    show_default=True,
    help="Verbosity level of logging",
)
@click.option(
    "-c",
    "--config-file",
    "config_file",
    default=None,
    help="Config file to use.",
    type=click.Path(
        dir_okay=False, file_okay=True, resolve_path=True, path_type=pathlib.Path
    ),
)
@click.option(
    "--save-current-config",
    is_flag=True,
    default=False,
    help="Save the current effective configuration in a file.",
)
@click.option(
    "--default-icon",
    default=None,
    help="Icon for windows without a matching rule.",
)
@click.option(
    "--remove-duplicates/--no-remove-duplicates",
    default=None,
    help="(Don't) Show repeated icons only once.",
)
@click.option(
    "--check-names-first/--no-check-names-first",
    default=None,
    help="Match window titles before app ids and classes.",
)
def main(
    ctx,
    log_level: str,
    config_file: pathlib.Path | None,
    save_current_config: bool,
    default_icon: str | None,
    remove_duplicates: bool | None,
    check_names_first: bool | None,
):
    log_handlers = []
    log_stream_handler = logging.StreamHandler(sys.stdout)
    log_handlers.append(log_stream_handler)
    logging.basicConfig(
        handlers=log_handlers,
        format="%(asctime)s %(levelname)-8s %(message)s",
        level=logging._nameToLevel[log_level.upper()],
    )
    _logger.info(
        f"swaywsr started with log-level: {logging.getLevelName(logging.root.level)}"
    )
    config_file = swaywsr.config.find_config_file(config_file)
    config = swaywsr.config.load_config(
        config_file,
        default_icon=default_icon,
        remove_duplicates=remove_duplicates,
        check_names_first=check_names_first,
        save_current_config=save_current_config,
    )
    ctx.params["config_file"] = config_file
    ctx.params["config"] = config


@main.command()
@click.pass_context
def run(ctx) -> None:
    """Keep the name of the focused workspace up to date."""

    obj = swaywsr.Swaywsr(ctx.parent.params["config"])
    obj.run()


@main.command()
@click.pass_context
def rename(ctx) -> None:
    """Update the name of the focused workspace once and exit."""

    obj = swaywsr.Swaywsr(ctx.parent.params["config"])
    try:
        new_name = obj.update_workspace()
    except swaywsr.errors.SwaywsrError as e:
        _logger.error(f"Could not update workspace name: {e}")
        sys.exit(1)
    if new_name is not None:
        print(new_name)


@main.command()
@click.pass_context
def show_config(ctx) -> None:
    """Show the effective configuration and exit"""

    print(f"configuration file: {ctx.parent.params['config_file']}")
    print("effective configuration:")
    print(ctx.parent.params["config"].model_dump_json(indent=2))


if __name__ == "__main__":
    main()
