"""Centralized ARIA Attribute Table.

This module is the single source of truth for which logical property
names exist and which codec kind backs each of them. The table follows
the WAI-ARIA 1.0 states and properties value types:

https://www.w3.org/TR/wai-aria/states_and_properties#propcharacteristic_value

A YAML file with the same shape can replace the built-in table::

    attributes:
      boolean: [busy, hidden]
      token_list: [dropeffect]
    arguments:
      dropeffect:
        tokens: copy move link execute popup none
        default: none
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml
from pydantic import ValidationError

from ariaview.domains.registry.value_objects import AttributeDefinition
from ariaview.domains.shared.errors import AttributeTableError

logger = logging.getLogger(__name__)


# ============================================================================
# ARIA ATTRIBUTE TABLE
# ============================================================================

DEFAULT_ATTRIBUTE_TABLE: Dict[str, List[str]] = {
    'boolean': [
        'atomic', 'busy', 'disabled', 'haspopup', 'hidden',
        'multiline', 'multiselectable', 'readonly', 'required',
    ],
    'tristate': ['checked', 'pressed'],
    'optional_boolean': ['expanded', 'grabbed', 'selected'],
    'reference': ['activedescendant'],
    'reference_list': ['controls', 'describedby', 'flowto', 'labelledby', 'owns'],
    'integer': ['level', 'posinset', 'setsize'],
    'number': ['valuemax', 'valuemin', 'valuenow'],
    'string': ['label', 'valuetext'],
    'token': ['autocomplete', 'invalid', 'live', 'orientation', 'sort'],
    'token_list': ['dropeffect', 'relevant'],
}

# Per-property construction arguments. The first token is the default.
ATTRIBUTE_ARGUMENTS: Dict[str, Dict[str, List[str]]] = {
    'autocomplete': {'tokens': ['none', 'inline', 'list', 'both']},
    'invalid': {'tokens': ['false', 'true', 'grammar', 'spelling']},
    'live': {'tokens': ['off', 'polite', 'assertive']},
    'orientation': {'tokens': ['horizontal', 'vertical']},
    'sort': {'tokens': ['none', 'ascending', 'descending', 'other']},
    'dropeffect': {
        'tokens': ['copy', 'move', 'link', 'execute', 'popup', 'none'],
        'default': ['none'],
    },
    'relevant': {
        'tokens': ['additions', 'removals', 'text', 'all'],
        'default': ['additions', 'text'],
    },
}


def parse_attribute_table(
    table: Mapping[str, Any],
    arguments: Optional[Mapping[str, Any]] = None,
) -> List[AttributeDefinition]:
    """Validate a kind -> names table plus its argument side table.

    Args:
        table: Mapping of codec kind to a list of property names
        arguments: Mapping of property name to constructor arguments
            (``tokens`` and, for token lists, ``default``)

    Returns:
        Definitions in table order

    Raises:
        AttributeTableError: If the table is malformed
    """
    arguments = dict(arguments or {})
    definitions: List[AttributeDefinition] = []
    seen = set()

    if not isinstance(table, Mapping):
        raise AttributeTableError(
            f"Attribute table must be a mapping, got {type(table).__name__}"
        )

    for kind, names in table.items():
        if isinstance(names, str):
            names = names.split()
        for name in names or []:
            if name in seen:
                raise AttributeTableError(f"Attribute '{name}' is listed more than once")
            seen.add(name)
            extra = arguments.pop(name, None) or {}
            if not isinstance(extra, Mapping):
                raise AttributeTableError(f"Arguments for '{name}' must be a mapping")
            try:
                definitions.append(
                    AttributeDefinition(name=name, kind=kind, **dict(extra))
                )
            except (ValidationError, TypeError) as e:
                raise AttributeTableError(f"Invalid definition for '{name}': {e}") from e

    if arguments:
        # Arguments for names that are not in the table are a configuration slip
        logger.warning(
            "Ignoring arguments for unlisted attributes: %s", ", ".join(sorted(arguments))
        )

    return definitions


def default_attribute_definitions() -> List[AttributeDefinition]:
    """Return the validated built-in ARIA attribute table."""
    return parse_attribute_table(DEFAULT_ATTRIBUTE_TABLE, ATTRIBUTE_ARGUMENTS)


def load_attribute_table(path: Union[str, Path]) -> List[AttributeDefinition]:
    """Load an attribute table from a YAML file.

    Args:
        path: Path to a YAML document with ``attributes`` and optional
            ``arguments`` sections

    Returns:
        Validated definitions

    Raises:
        AttributeTableError: If the file is missing or malformed
    """
    table_path = Path(path)
    try:
        with open(table_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise AttributeTableError(f"Cannot read attribute table {table_path}: {e}") from e
    except yaml.YAMLError as e:
        raise AttributeTableError(f"Invalid YAML in {table_path}: {e}") from e

    if not isinstance(data, dict) or "attributes" not in data:
        raise AttributeTableError(
            f"Attribute table {table_path} needs a top-level 'attributes' mapping"
        )

    definitions = parse_attribute_table(data["attributes"], data.get("arguments"))
    logger.info("Loaded %d attribute definitions from %s", len(definitions), table_path)
    return definitions


def dump_attribute_table(definitions: List[AttributeDefinition]) -> str:
    """Serialize definitions back to the YAML table shape."""
    attributes: Dict[str, List[str]] = {}
    arguments: Dict[str, Dict[str, List[str]]] = {}
    for definition in definitions:
        attributes.setdefault(definition.kind, []).append(definition.name)
        extra = definition.model_dump(include={"tokens", "default"}, exclude_none=True)
        if extra:
            arguments[definition.name] = extra
    document: Dict[str, Any] = {"attributes": attributes}
    if arguments:
        document["arguments"] = arguments
    return yaml.safe_dump(document, sort_keys=False)
