import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict

import yaml
from yaml import YAMLError

logger = logging.getLogger(__name__)

SCRIPT_DIR = Path(__file__).parent

##############################
# Defaults
##############################
DEFAULT_CONFIG_FILE = SCRIPT_DIR / "resume_config.yaml"

# 539 twips (0.95 cm) on every side
DEFAULT_MARGIN_INCHES = 0.3743

DEFAULT_CONFIG = {
    "document_defaults": {
        "font_name": "Times New Roman",
        "font_size": 12,
        "margin_top": DEFAULT_MARGIN_INCHES,
        "margin_bottom": DEFAULT_MARGIN_INCHES,
        "margin_left": DEFAULT_MARGIN_INCHES,
        "margin_right": DEFAULT_MARGIN_INCHES,
        "label_separator": "",
    },
    "block_styles": {
        "title": {"font_size": 16, "bold": True, "alignment": "center", "space_after": 5},
        "subtitle": {"font_size": 12, "alignment": "center", "space_after": 10},
        "section_header": {
            "font_size": 12,
            "bold": True,
            "space_before": 10,
            "space_after": 5,
        },
        "section_trailing": {"font_size": 12, "space_after": 5},
        "labeled_line": {"font_size": 12, "space_after": 5},
        "paragraph": {"font_size": 12, "space_after": 5},
        "bullet": {"font_size": 12, "space_after": 3},
    },
    "paragraph_lists": {
        "ul": {
            "style": "List Bullet",
            "indent_left": 0.5,
            "indent_hanging": 0.25,
        },
    },
}

ALIGNMENTS = ("left", "center", "right", "justify")

FONT_PROP_TYPES = {
    "font_name": str,
    "font_size": (int, float),
    "bold": bool,
    "italic": bool,
    "underline": bool,
    "color": str,
}

PARAGRAPH_PROP_TYPES = {
    "line_spacing": (int, float),
    "space_after": (int, float),
    "space_before": (int, float),
    "indent_left": (int, float),
    "indent_right": (int, float),
    "alignment": str,
}

DOCUMENT_DEFAULT_TYPES = {
    "font_name": str,
    "font_size": (int, float),
    "margin_top": (int, float),
    "margin_bottom": (int, float),
    "margin_left": (int, float),
    "margin_right": (int, float),
    "page_width": (int, float),
    "page_height": (int, float),
    "label_separator": str,
}

LIST_OPTION_TYPES = {
    "style": str,
    "indent_left": (int, float),
    "indent_hanging": (int, float),
}


class ConfigLoader:
    """Document configuration loaded from YAML over built-in defaults

    Recognized sections:
        document_defaults: font_name, font_size (pt), margin_top, margin_bottom,
            margin_left, margin_right, page_width, page_height (inches),
            label_separator (text between the bold label and the rest of a line)
        block_styles: one entry per block kind (title, subtitle, section_header,
            section_trailing, labeled_line, paragraph, bullet) holding font
            properties (font_name, font_size, bold, italic, underline, color)
            and paragraph properties (space_before, space_after, line_spacing,
            indent_left, indent_right, alignment)
        paragraph_lists: `ul` entry with style, indent_left, indent_hanging (inches)
    """

    def __init__(self, config_file: Path | None = DEFAULT_CONFIG_FILE):
        """Initialize by loading configuration from YAML file

        Args:
            config_file (Path): Path to configuration file. Defaults to
                'resume_config.yaml' in the package directory. None skips
                loading and keeps the built-in defaults.
        """
        self._config = copy.deepcopy(DEFAULT_CONFIG)

        if config_file is None:
            return

        if not os.path.exists(config_file):
            logger.warning(f"{config_file} not found, using default configuration")
            return

        try:
            with open(config_file, "r", encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f)
        except (OSError, YAMLError) as e:
            logger.warning(
                f"Error loading config file: {str(e)}, using default configuration"
            )
            return

        if yaml_config and isinstance(yaml_config, dict):
            self.merge(yaml_config)
            logger.info(f"Config loaded from {config_file}")

    @property
    def config(self) -> dict:
        """Get the entire configuration dictionary

        Returns:
            dict: Complete configuration dictionary
        """
        return self._config

    @property
    def document_defaults(self) -> dict:
        """Get validated document default settings

        Returns:
            dict: Document defaults configuration, wrongly typed values dropped
        """
        return _validate_properties(
            self._config.get("document_defaults") or {}, DOCUMENT_DEFAULT_TYPES
        )

    @property
    def block_styles(self) -> dict:
        """Get per-block style settings

        Returns:
            dict: Block styles keyed by block kind
        """
        return _section(self._config, "block_styles")

    @property
    def paragraph_lists(self) -> dict:
        """Get list settings

        Returns:
            dict: List configuration keyed by list tag
        """
        return _section(self._config, "paragraph_lists")

    def get_block_style(self, key: str) -> Dict[str, Any]:
        """Get the validated style for a block kind

        Args:
            key (str): Block style key (e.g. 'title', 'bullet')

        Returns:
            dict: Validated style properties, empty if the key is unknown
        """
        return _validate_style_properties(self.block_styles.get(key) or {})

    def get_list_option(self, list_type: str, option_name: str, default=None):
        """Get a list option from config

        Args:
            list_type: The list type ("ul")
            option_name: The option name to retrieve
            default: Default value if not found or wrongly typed

        Returns:
            The option value or default
        """
        options = _validate_properties(
            self.paragraph_lists.get(list_type) or {}, LIST_OPTION_TYPES
        )
        return options.get(option_name, default)

    def merge(self, overrides: Dict[str, Any]) -> None:
        """Merge configuration overrides section by section

        Dictionary sections are merged one level deeper so that a single block
        style can be tweaked without restating the others; anything else
        replaces the existing value.

        Args:
            overrides (dict): Configuration sections to merge
        """
        for section_key, section_values in overrides.items():
            current = self._config.get(section_key)
            if isinstance(current, dict) and isinstance(section_values, dict):
                logger.debug(
                    f"Merging section '{section_key}' with values: {section_values}"
                )
                for key, value in section_values.items():
                    if isinstance(current.get(key), dict) and isinstance(value, dict):
                        current[key].update(value)
                    else:
                        current[key] = value
            else:
                logger.debug(
                    f"Replacing section '{section_key}' with values: {section_values}"
                )
                self._config[section_key] = section_values


def _section(config: Dict[str, Any], key: str) -> Dict[str, Any]:
    """Get a configuration section, empty when it is missing or not a mapping"""
    section = config.get(key) or {}
    if not isinstance(section, dict):
        logger.warning(f"Ignoring section '{key}', expected a mapping")
        return {}
    return section


def _validate_style_properties(
    properties: Dict[str, str | int | float],
) -> Dict[str, str | int | float]:
    """Validate and clean style properties with type checking

    Args:
        properties: Raw properties dictionary

    Returns:
        dict: Validated and cleaned properties
    """
    valid_props = {
        **_validate_properties(properties, FONT_PROP_TYPES),
        **_validate_properties(properties, PARAGRAPH_PROP_TYPES),
    }

    alignment = valid_props.get("alignment")
    if alignment is not None and alignment.lower() not in ALIGNMENTS:
        logger.warning(f"Unknown alignment '{alignment}', expected one of {ALIGNMENTS}")
        del valid_props["alignment"]

    return valid_props


def _validate_properties(
    properties: Dict[str, Any], prop_types: Dict[str, type | tuple]
) -> Dict[str, Any]:
    """Keep the known properties whose values have the expected type

    Args:
        properties: Raw properties dictionary
        prop_types: Expected type per recognized property

    Returns:
        dict: Properties that passed the type check
    """
    valid_props = {}

    if not isinstance(properties, dict):
        logger.warning(f"Expected a mapping of properties, got {type(properties).__name__}")
        return valid_props

    for prop, expected_type in prop_types.items():
        if prop not in properties or properties[prop] is None:
            continue

        value = properties[prop]
        # bool is an int subclass, keep it out of numeric options
        if isinstance(value, expected_type) and not (
            isinstance(value, bool) and expected_type is not bool
        ):
            valid_props[prop] = value
        else:
            logger.warning(
                f"Invalid type for {prop}, expected {expected_type}, got {type(value).__name__}"
            )

    return valid_props


__all__ = ["ConfigLoader", "DEFAULT_CONFIG", "DEFAULT_CONFIG_FILE"]
