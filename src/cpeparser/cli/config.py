from __future__ import annotations

import enum
import os
from dataclasses import dataclass, field

import mergedeep
import yaml
from mashumaro.mixins.dict import DataClassDictMixin


class OutputFormat(str, enum.Enum):
    FORMATTED_STRING = "fs"
    URI = "uri"

    def __repr__(self) -> str:
        return self.value


@dataclass
class Log:
    slim: bool = os.environ.get("CPEPARSER_LOG_SLIM", default="false") == "true"
    level: str = os.environ.get("CPEPARSER_LOG_LEVEL", default="WARNING")
    show_timestamp: bool = os.environ.get("CPEPARSER_LOG_SHOW_TIMESTAMP", default="false") == "true"
    show_level: bool = os.environ.get("CPEPARSER_LOG_SHOW_LEVEL", default="true") == "true"

    def __post_init__(self) -> None:
        self.level = self.level.upper()


@dataclass
class Parse:
    # escape characters that are not allowed in CPE 2.2 URI components instead of failing
    lenient: bool = False


@dataclass
class Output:
    # the binding used when a CPE name is written out
    format: OutputFormat = OutputFormat.FORMATTED_STRING


@dataclass
class Application(DataClassDictMixin):
    log: Log = field(default_factory=Log)
    parse: Parse = field(default_factory=Parse)
    output: Output = field(default_factory=Output)


def load(path: str = ".cpeparser.yaml") -> Application:
    try:
        with open(path, encoding="utf-8") as f:
            app_object = yaml.safe_load(f.read()) or {}
            # start from a full default config and merge the loaded values on top so that a
            # partially specified section keeps the defaults for everything it omits
            instance = Application().to_dict()

            mergedeep.merge(instance, app_object)
            cfg = Application.from_dict(instance)
            if cfg is None:
                raise FileNotFoundError("parsed empty config")
    except FileNotFoundError:
        cfg = Application()

    return cfg
