"""
Configuration loading and validation.

This module handles loading of YAML configuration files and
validates that the sections the scoring run relies on are usable.
"""

import logging
from pathlib import Path
from typing import Dict, Any, List

import yaml

logger = logging.getLogger(__name__)

WEIGHT_KEYS = ["intent", "industry", "interest", "complementarity", "embedding"]


def load_config(filepath: str) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        filepath: Path to the YAML configuration file

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If the file is empty
        yaml.YAMLError: If YAML is invalid
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {filepath}")

    logger.info(f"Loading configuration from {filepath}")
    with open(filepath, "r") as f:
        config = yaml.safe_load(f)

    if config is None:
        raise ValueError(f"Configuration file is empty: {filepath}")

    return config


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration and return list of warnings/errors.

    Args:
        config: Configuration dictionary

    Returns:
        List of warning/error messages (empty if valid)
    """
    issues = []

    for section in ["global", "data", "scoring"]:
        if section not in config:
            issues.append(f"Missing required section: {section}")

    if "data" in config and "participants" not in (config["data"] or {}):
        issues.append("Missing data.participants")

    scoring = config.get("scoring") or {}
    weights = scoring.get("weights") or {}
    for key, value in weights.items():
        if key not in WEIGHT_KEYS:
            issues.append(f"Unknown scoring weight: {key}")
        elif value is not None and value < 0:
            issues.append(f"Scoring weight {key} must be non-negative, got {value}")

    if weights and all(weights.get(k) is not None for k in WEIGHT_KEYS):
        if sum(weights[k] for k in WEIGHT_KEYS) == 0:
            issues.append("Scoring weights sum to zero")

    minimum_score = scoring.get("minimum_score")
    if minimum_score is not None and not 0 <= minimum_score <= 100:
        issues.append(f"scoring.minimum_score must be in [0, 100], got {minimum_score}")

    threshold = scoring.get("intent_confidence_threshold")
    if threshold is not None and not 0 <= threshold <= 100:
        issues.append(f"scoring.intent_confidence_threshold must be in [0, 100], got {threshold}")

    batch_size = (config.get("output") or {}).get("batch_size")
    if batch_size is not None and batch_size < 1:
        issues.append(f"output.batch_size must be at least 1, got {batch_size}")

    return issues


def get_config_value(config: Dict[str, Any], path: str, default: Any = None) -> Any:
    """
    Get a nested configuration value using dot notation.

    Args:
        config: Configuration dictionary
        path: Dot-separated path (e.g., "scoring.weights.intent")
        default: Default value if path doesn't exist

    Returns:
        Configuration value or default
    """
    keys = path.split(".")
    value = config
    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default
    return value
