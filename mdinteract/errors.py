"""Error kinds raised while reading interactions into a system.

Callers branch on the class (or on ``kind``):

YamlError
    The input is not well-formed YAML.
FileError
    The input could not be read.
ConfigError
    The document is valid YAML but a section, record or value is missing,
    has the wrong shape, or is out of range.
UnitParsingError
    A physical quantity string could not be parsed or converted.
"""

from __future__ import annotations


class InteractionsError(Exception):
    kind: str = "interactions"

    def __init__(self, msg: str):
        super().__init__(msg)
        self.msg = str(msg)


class YamlError(InteractionsError):
    kind = "yaml"


class FileError(InteractionsError):
    kind = "file"


class ConfigError(InteractionsError, ValueError):
    kind = "config"


class UnitParsingError(InteractionsError, ValueError):
    kind = "units"
