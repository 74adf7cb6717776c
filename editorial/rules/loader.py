import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from editorial.rules.models import Rules

logger = logging.getLogger(__name__)


def default_rules() -> Rules:
    """Built-in rules used when no rules file is configured."""
    return Rules()


def load_rules(path: Path) -> Rules:
    """
    Load and validate the rules file.
    Raises FileNotFoundError if file missing.
    Raises ValueError if YAML or schema invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Rules file not found at: {path}")

    with open(path) as f:
        content = f.read()

    # Accept a bare YAML file or a document wrapping one ```yaml block
    lines = content.splitlines()
    yaml_lines = []
    in_block = False
    found_block = False

    for line in lines:
        s_line = line.strip()
        if s_line.startswith("```yaml"):
            in_block = True
            found_block = True
            continue
        if in_block and s_line.startswith("```"):
            break
        if in_block:
            yaml_lines.append(line)

    clean_content = "\n".join(yaml_lines) if found_block else content

    try:
        data = yaml.safe_load(clean_content) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in rules file: {e}") from e

    try:
        rules = Rules.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Rules validation failed:\n{e}") from e

    logger.info("Rules %s loaded from %s", rules.project.rules_version, path)
    return rules


def load_rules_or_default(path: Path) -> Rules:
    """Load rules from `path` if it exists, otherwise fall back to defaults."""
    if path.exists():
        return load_rules(path)
    logger.info("No rules file at %s, using defaults", path)
    return default_rules()
