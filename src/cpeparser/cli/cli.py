from __future__ import annotations

import dataclasses
import enum
import logging
import sys
from typing import TYPE_CHECKING, Any

import click
import orjson
import yaml

from cpeparser import __name__ as package_name
from cpeparser import matching, parser
from cpeparser.cli import config
from cpeparser.exceptions import CpeError
from cpeparser.utils import validate
from cpeparser.utils.versions import version_key
from cpeparser.values import ATTRIBUTES

if TYPE_CHECKING:
    from cpeparser.cpe import Cpe


@click.option("--verbose", "-v", default=False, help="show logs", count=True)
@click.option("--config", "-c", "config_path", default=".cpeparser.yaml", help="override config path")
@click.group(help="Parse, validate, convert and match CPE names.")
@click.version_option(package_name=package_name, message="%(prog)s %(version)s")
@click.pass_context
def cli(ctx: click.core.Context, verbose: bool, config_path: str) -> None:
    import logging.config

    ctx.obj = config.load(path=config_path)

    log_level = ctx.obj.log.level
    if verbose == 1:
        log_level = "DEBUG"
    elif verbose >= 2:
        log_level = "TRACE"

    if ctx.obj.log.slim:
        timestamp_format = ""
        level_format = ""
    else:
        timestamp_format = "%(asctime)s "
        if not ctx.obj.log.show_timestamp:
            timestamp_format = ""

        level_format = "[%(levelname)-5s] "
        if not ctx.obj.log.show_level:
            level_format = ""

    log_format = f"%(log_color)s{timestamp_format}{level_format}%(message)s"

    logging.config.dictConfig(
        {
            "version": 1,
            # module loggers are created at import time, before the CLI configures logging
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {
                    "()": "colorlog.ColoredFormatter",
                    "format": log_format,
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                    "log_colors": {
                        "TRACE": "purple",
                        "DEBUG": "cyan",
                        "INFO": "reset",
                        "WARNING": "yellow",
                        "ERROR": "red",
                        "CRITICAL": "red,bg_white",
                    },
                },
            },
            "handlers": {
                "default": {
                    "level": log_level,
                    "formatter": "standard",
                    "class": "colorlog.StreamHandler",
                    "stream": "ext://sys.stderr",
                },
            },
            "loggers": {
                "": {  # root logger
                    "handlers": ["default"],
                    "level": log_level,
                },
            },
        },
    )


def _parse(value: str, lenient: bool) -> Cpe:
    try:
        return parser.parse(value, lenient=lenient)
    except CpeError as e:
        logging.error(f"unable to parse {value!r}")
        raise click.ClickException(str(e)) from e


def _bind(cpe: Cpe, output_format: config.OutputFormat) -> str:
    try:
        if output_format is config.OutputFormat.URI:
            return cpe.to_cpe22_uri()
        return cpe.to_cpe23_fs()
    except CpeError as e:
        logging.error(f"unable to bind {cpe} as {output_format.value}")
        raise click.ClickException(str(e)) from e


@cli.command(name="config", help="show the application config")
@click.pass_obj
def show_config(cfg: config.Application) -> None:
    logging.info("showing application config")

    class IndentDumper(yaml.Dumper):
        def increase_indent(self, flow: bool = False, indentless: bool = False) -> None:
            return super().increase_indent(flow, False)

    def enum_asdict_factory(data: list[tuple[str, Any]]) -> dict[Any, Any]:
        # enums are shown by value instead of as !!python/object/apply tags
        def convert_value(obj: Any) -> Any:
            if isinstance(obj, enum.Enum):
                return obj.value
            return obj

        return {k: convert_value(v) for k, v in data}

    cfg_dict = dataclasses.asdict(cfg, dict_factory=enum_asdict_factory)
    print(yaml.dump(cfg_dict, Dumper=IndentDumper, default_flow_style=False))


@cli.command(name="parse", help="parse a CPE 2.2 URI or CPE 2.3 formatted string and show its attributes")
@click.argument("value", metavar="CPE")
@click.option("--lenient", is_flag=True, default=False, help="escape characters that are not allowed in URI components")
@click.option("--json", "output_json", default=False, is_flag=True, help="output as JSON")
@click.pass_obj
def parse_cpe(cfg: config.Application, value: str, lenient: bool, output_json: bool) -> None:
    lenient = lenient or cfg.parse.lenient

    cpe = _parse(value, lenient)
    attributes = {"part": cpe.part.abbreviation}
    attributes.update({name: getattr(cpe, name) for name in ATTRIBUTES[1:]})

    if output_json:
        doc = {
            "cpe22_uri": _bind(cpe, config.OutputFormat.URI),
            "cpe23_fs": cpe.to_cpe23_fs(),
            "attributes": attributes,
        }
        print(orjson.dumps(doc, option=orjson.OPT_INDENT_2).decode("utf-8"))
        return

    width = max(len(name) for name in attributes)
    for name, attribute in attributes.items():
        print(f"{name:<{width}}  {attribute}")


@cli.command(name="convert", help="rebind a CPE name as a CPE 2.2 URI or a CPE 2.3 formatted string")
@click.argument("value", metavar="CPE")
@click.option(
    "--to",
    "output_format",
    type=click.Choice([f.value for f in config.OutputFormat]),
    default=None,
    help="the target binding (defaults to output.format from the config)",
)
@click.option("--lenient", is_flag=True, default=False, help="escape characters that are not allowed in URI components")
@click.pass_obj
def convert_cpe(cfg: config.Application, value: str, output_format: str | None, lenient: bool) -> None:
    lenient = lenient or cfg.parse.lenient
    fmt = config.OutputFormat(output_format) if output_format else cfg.output.format

    logging.debug(f"converting {value!r} to {fmt.value}")
    print(_bind(_parse(value, lenient), fmt))


@cli.command(name="validate", help="validate one or more CPE names")
@click.argument("values", metavar="CPE", nargs=-1)
def validate_cpe(values: tuple[str, ...]) -> None:
    if not values:
        logging.warning("no CPE names specified, bailing...")
        sys.exit(1)

    failed = False
    for value in values:
        status = validate.cpe(value)
        print(f"{status.name:<22} {value}")
        if not status.is_valid:
            failed = True

    if failed:
        sys.exit(1)


@cli.command(name="match", help="compare a source CPE (usually a pattern) against a target CPE")
@click.argument("source_value", metavar="SOURCE")
@click.argument("target_value", metavar="TARGET")
@click.option("--version-aware", is_flag=True, default=False, help="treat equivalent version strings as equal")
@click.option("--json", "output_json", default=False, is_flag=True, help="output as JSON")
@click.pass_obj
def match_cpe(cfg: config.Application, source_value: str, target_value: str, version_aware: bool, output_json: bool) -> None:
    source = _parse(source_value, cfg.parse.lenient)
    target = _parse(target_value, cfg.parse.lenient)

    comparators = matching.VERSION_AWARE if version_aware else None
    relations = matching.compare_names(source, target, comparators)
    matched = matching.matches(source, target, comparators)

    if output_json:
        doc = {
            "source": str(source),
            "target": str(target),
            "relations": {name: relation.value for name, relation in relations.items()},
            "matches": matched,
        }
        print(orjson.dumps(doc, option=orjson.OPT_INDENT_2).decode("utf-8"))
        return

    width = max(len(name) for name in relations)
    for name, relation in relations.items():
        print(f"{name:<{width}}  {relation.value}")
    print(f"{'matches':<{width}}  {str(matched).lower()}")


@cli.command(name="sort-versions", help="sort version strings from lowest to highest")
@click.argument("versions", metavar="VERSION", nargs=-1)
@click.option("--reverse", "-r", is_flag=True, default=False, help="sort from highest to lowest")
def sort_versions(versions: tuple[str, ...], reverse: bool) -> None:
    for version in sorted(versions, key=version_key, reverse=reverse):
        print(version)
