"""Configuration: the attribute table and runtime settings."""

from .attribute_table import (
    ATTRIBUTE_ARGUMENTS,
    DEFAULT_ATTRIBUTE_TABLE,
    default_attribute_definitions,
    dump_attribute_table,
    load_attribute_table,
    parse_attribute_table,
)
from .settings import ViewRuntimeConfig, load_view_config

__all__ = [
    "ATTRIBUTE_ARGUMENTS",
    "DEFAULT_ATTRIBUTE_TABLE",
    "default_attribute_definitions",
    "dump_attribute_table",
    "load_attribute_table",
    "parse_attribute_table",
    "ViewRuntimeConfig",
    "load_view_config",
]
