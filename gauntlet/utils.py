"""Utility functions for file I/O and common operations."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

T = TypeVar('T', bound=BaseModel)
logger = logging.getLogger('gauntlet.utils')


def load_json(
    path: Path | str,
    schema: type[T] | None = None,
) -> Any | T:
    """
    Load JSON file with optional schema validation.

    Args:
        path: Path to JSON file (str or Path object)
        schema: Optional Pydantic model to validate against

    Returns:
        Parsed JSON (validated if schema provided)

    Raises:
        FileNotFoundError: If file doesn't exist
        json.JSONDecodeError: If JSON is malformed
        ValueError: If schema validation fails

    Example:
        from gauntlet.schemas import SeedsFile
        seeds = load_json('data/seeds_2025.json', schema=SeedsFile)
    """
    path = Path(path)

    logger.debug(f'Loading JSON from: {path}')

    if not path.exists():
        logger.error(f'File not found: {path}')
        raise FileNotFoundError(f'File not found: {path}')

    try:
        with open(path, encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f'Invalid JSON in {path}: {e.msg} at position {e.pos}')
        raise json.JSONDecodeError(f'Invalid JSON in {path}: {e.msg}', e.doc, e.pos) from e

    if schema:
        try:
            validated = schema(**data) if isinstance(data, dict) else schema(data)  # type: ignore[call-arg]
            logger.debug(f'Schema validation passed for: {path}')
            return validated
        except ValidationError as e:
            logger.error(f'Schema validation failed for {path}: {e}')
            raise ValueError(f'Schema validation failed for {path}:\n{e}') from e

    return data


def save_json(
    path: Path | str,
    data: Any,
    indent: int = 2,
    create_dirs: bool = True,
) -> None:
    """
    Save data as a JSON file, replacing any existing file atomically.

    The document is written to a temporary file in the same directory and
    renamed over the target, so readers see either the old file or the
    complete new one.

    Args:
        path: Path to write to (str or Path object)
        data: Data to serialize (must be JSON-serializable or Pydantic model)
        indent: Indentation level (default: 2 spaces)
        create_dirs: Create parent directories if they don't exist (default: True)

    Raises:
        TypeError: If data is not JSON-serializable
        OSError: If file cannot be written
    """
    path = Path(path)

    logger.debug(f'Saving JSON to: {path}')

    if create_dirs:
        path.parent.mkdir(parents=True, exist_ok=True)

    json_data = data.model_dump(by_alias=True) if isinstance(data, BaseModel) else data

    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f'.{path.name}.', suffix='.tmp')
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            json.dump(json_data, f, indent=indent, ensure_ascii=False)
        os.replace(tmp_name, path)
    except TypeError as e:
        os.unlink(tmp_name)
        logger.error(f'Data is not JSON-serializable: {e}')
        raise TypeError(f'Data is not JSON-serializable: {e}') from e
    except OSError as e:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        logger.error(f'Failed to write file {path}: {e}')
        raise

    logger.debug(f'Successfully saved JSON to: {path}')


def load_json_safe(
    path: Path | str,
    default: Any = None,
    schema: type[T] | None = None,
) -> Any | T:
    """
    Load JSON file with safe fallback to default value.

    Like load_json, but returns default value instead of raising
    exceptions for missing or invalid files.
    """
    try:
        return load_json(path, schema=schema)
    except (FileNotFoundError, json.JSONDecodeError, ValueError):
        return default


def slugify(name: str) -> str:
    """Lowercase a display name and join its words with dashes."""
    return '-'.join(str(name or '').strip().lower().split())
