"""Configuration loader and validation for reconciliation settings."""

from pathlib import Path
from typing import Any, Literal, Optional
import logging

import yaml
from pydantic import BaseModel, Field, ValidationError

from .utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class StatementInputConfig(BaseModel):
    """Configuration for statement export parsing."""

    encoding: str = "iso-8859-1"
    field_separator: str = ";"
    header_labels: list[str] = Field(
        default_factory=lambda: ["Date of movement", "Description", "Amount"]
    )
    date_field: int = Field(default=0, ge=0)
    description_field: int = Field(default=2, ge=0)
    amount_field: int = Field(default=3, ge=0)
    min_fields: int = Field(default=4, ge=1)


class InputConfig(BaseModel):
    """Configuration for input file parsing."""

    statement: StatementInputConfig = Field(default_factory=StatementInputConfig)


class AmountsConfig(BaseModel):
    """How raw amount strings are cleaned and split."""

    currency_markers: list[str] = Field(default_factory=lambda: ["EUR", "€"])
    # "comma": 1.234,56 ; "period": 1,234.56
    decimal_convention: Literal["comma", "period"] = "comma"
    token_separator: str = ","


class MatchingConfig(BaseModel):
    """Configuration for matching engine."""

    tolerance: float = Field(default=0.01, gt=0)
    strategy: Literal["linear", "sorted_index"] = "linear"
    reuse_transactions: bool = True


class TextReportConfig(BaseModel):
    """Configuration for the plain-text report."""

    title: str = "BANK STATEMENT VERIFICATION REPORT"
    filename_template: str = "report_extratos_{date}.txt"
    currency_symbol: str = "€"
    encoding: str = "utf-8"
    rule_width: int = Field(default=60, ge=10)


class OutputConfig(BaseModel):
    """Configuration for output."""

    report: TextReportConfig = Field(default_factory=TextReportConfig)


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    # Optional rotating log file, always written at DEBUG
    file: Optional[str] = None


class ReconConfig(BaseModel):
    """Main configuration model for reconciliation."""

    input: InputConfig = Field(default_factory=InputConfig)
    amounts: AmountsConfig = Field(default_factory=AmountsConfig)
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    config_file_path: Optional[str] = None


def get_default_config() -> dict[str, Any]:
    """Return the default configuration as a dictionary."""
    return {
        "input": {
            "statement": {
                "encoding": "iso-8859-1",
                "field_separator": ";",
                "header_labels": ["Date of movement", "Description", "Amount"],
                "date_field": 0,
                "description_field": 2,
                "amount_field": 3,
                "min_fields": 4,
            },
        },
        "amounts": {
            "currency_markers": ["EUR", "€"],
            "decimal_convention": "comma",
            "token_separator": ",",
        },
        "matching": {
            "tolerance": 0.01,
            "strategy": "linear",
            "reuse_transactions": True,
        },
        "output": {
            "report": {
                "title": "BANK STATEMENT VERIFICATION REPORT",
                "filename_template": "report_extratos_{date}.txt",
                "currency_symbol": "€",
                "encoding": "utf-8",
                "rule_width": 60,
            },
        },
        "logging": {
            "level": "WARNING",
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            "file": None,
        },
    }


def load_config(config_path: Optional[Path] = None) -> ReconConfig:
    """
    Load configuration from a YAML file or use defaults.

    Args:
        config_path: Path to YAML configuration file (optional)

    Returns:
        ReconConfig object with loaded or default settings

    Raises:
        ConfigurationError: If the file is not valid YAML or fails validation
    """
    config_dict = get_default_config()

    if config_path and config_path.exists():
        logger.info(f"Loading configuration from: {config_path}")
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                user_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

        if not isinstance(user_config, dict):
            raise ConfigurationError(
                f"Configuration root in {config_path} must be a mapping"
            )

        # Deep merge user config into defaults
        config_dict = _deep_merge(config_dict, user_config)
        config_dict["config_file_path"] = str(config_path)
    else:
        logger.info("Using default configuration")

    try:
        return ReconConfig(**config_dict)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def _deep_merge(base: dict, override: dict) -> dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Dictionary to merge on top

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def generate_default_config(output_path: Path) -> None:
    """
    Generate a default configuration file.

    Args:
        output_path: Path to write the configuration file
    """
    config_dict = get_default_config()

    yaml_content = """# Bank statement reconciliation configuration
# Generated configuration file - customize as needed
#
# amounts.decimal_convention: "comma" reads 1.234,56 as 1234.56 and
# misreads 1,234.56; switch to "period" for US-formatted exports.
# matching.reuse_transactions: false pairs each movement with at most one
# expected amount.

"""
    yaml_content += yaml.dump(
        config_dict, default_flow_style=False, sort_keys=False, allow_unicode=True
    )

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(yaml_content)

    logger.info(f"Generated configuration file: {output_path}")
