"""
Property bag sources.

Loads flat ``name -> value`` mappings from:
1. Java-style ``.properties`` files
2. ``.env`` files
3. JSON objects (nested objects flatten to dotted keys)
4. Prefixed environment variables
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional

import orjson

from configbind.config import CONFIGURATION_FILE_ENV, LOG_LEVEL_ENV
from configbind.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ENV_PREFIX = "CONFIGBIND_"

# control variables sharing the default prefix; never bound as properties
_RESERVED_ENV_NAMES = frozenset({CONFIGURATION_FILE_ENV, LOG_LEVEL_ENV})

_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


class PropertiesFileLoader:
    """Loads configuration from ``key=value`` / ``key: value`` properties files."""

    @staticmethod
    def load_from_file(path: Path) -> Dict[str, str]:
        """
        Load key-value pairs from a properties file.

        Args:
            path: Path to the properties file

        Returns:
            Dictionary of properties in file order

        Raises:
            ConfigurationError: If the file cannot be read
        """
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:  # policy_guard: allow-silent-handler
            raise ConfigurationError.load_failed("properties file", str(path)) from exc
        return PropertiesFileLoader.parse(text)

    @staticmethod
    def parse(text: str) -> Dict[str, str]:
        values: Dict[str, str] = {}
        for logical_line in PropertiesFileLoader._logical_lines(text.splitlines()):
            key, value = PropertiesFileLoader._split_entry(logical_line)
            values[key] = value
        return values

    @staticmethod
    def _logical_lines(lines: List[str]) -> Iterator[str]:
        """Join continuation lines and drop blanks and comments."""
        pending: Optional[str] = None
        for raw in lines:
            line = raw.lstrip()
            if pending is None and (not line or line[0] in "#!"):
                continue
            if pending is not None:
                line = pending + line
            trailing = len(line) - len(line.rstrip("\\"))
            if trailing % 2 == 1:
                pending = line[:-1]
                continue
            pending = None
            yield line
        if pending:
            yield pending

    @staticmethod
    def _split_entry(line: str) -> tuple[str, str]:
        index = 0
        while index < len(line):
            char = line[index]
            if char == "\\":
                index += 2
                continue
            if char in "=:" or char.isspace():
                break
            index += 1
        key = line[:index]
        # whitespace may surround a single "=" or ":" separator
        rest = line[index:].lstrip()
        if rest[:1] in ("=", ":"):
            rest = rest[1:].lstrip()
        return PropertiesFileLoader._unescape(key), PropertiesFileLoader._unescape(rest)

    @staticmethod
    def _unescape(text: str) -> str:
        if "\\" not in text:
            return text
        out: List[str] = []
        index = 0
        while index < len(text):
            char = text[index]
            if char != "\\" or index + 1 >= len(text):
                out.append(char)
                index += 1
                continue
            nxt = text[index + 1]
            if nxt == "u" and index + 6 <= len(text):
                try:
                    out.append(chr(int(text[index + 2 : index + 6], 16)))
                except ValueError as exc:  # policy_guard: allow-silent-handler
                    raise ConfigurationError.invalid_format("unicode escape", text[index : index + 6], "\\uXXXX") from exc
                index += 6
                continue
            out.append(_ESCAPES.get(nxt, nxt))
            index += 2
        return "".join(out)


class DotenvLoader:
    """Loads configuration from .env-style files."""

    @staticmethod
    def load_from_file(path: Path) -> Dict[str, str]:
        """
        Load key-value pairs from a .env file.

        Raises:
            ConfigurationError: If file cannot be read
        """
        values: Dict[str, str] = {}
        try:
            for line in path.read_text(encoding="utf-8").splitlines():
                stripped = line.strip()
                if DotenvLoader._should_skip_line(stripped):
                    continue

                key, value = DotenvLoader._parse_env_line(stripped)
                if key:
                    values[key] = value

        except OSError as exc:  # policy_guard: allow-silent-handler
            raise ConfigurationError.load_failed("dotenv file", str(path)) from exc

        return values

    @staticmethod
    def _should_skip_line(line: str) -> bool:
        return not line or line.startswith("#") or "=" not in line

    @staticmethod
    def _parse_env_line(line: str) -> tuple[str, str]:
        key, raw_value = line.split("=", 1)
        key = key.strip()
        if key.startswith("export "):
            key = key[len("export ") :].strip()
        value = raw_value.strip().strip("'").strip('"')
        return key, value


class JsonPropertiesLoader:
    """Loads configuration from JSON objects, flattening nested objects with dots."""

    @staticmethod
    def load_from_file(path: Path) -> Dict[str, str]:
        """
        Load a JSON object as a flat property bag.

        Raises:
            ConfigurationError: If the file cannot be read, is not valid JSON,
                is not an object, or contains arrays
        """
        try:
            payload = orjson.loads(path.read_bytes())
        except OSError as exc:  # policy_guard: allow-silent-handler
            raise ConfigurationError.load_failed("JSON properties file", str(path)) from exc
        except orjson.JSONDecodeError as exc:  # policy_guard: allow-silent-handler
            raise ConfigurationError(f"Invalid JSON in properties file {path}") from exc

        if not isinstance(payload, dict):
            raise ConfigurationError(f"JSON properties file {path} must contain an object")

        flattened: Dict[str, str] = {}
        JsonPropertiesLoader._flatten(payload, "", flattened, path)
        return flattened

    @staticmethod
    def _flatten(payload: Mapping[str, Any], prefix: str, into: Dict[str, str], path: Path) -> None:
        for key, value in payload.items():
            name = f"{prefix}{key}"
            if isinstance(value, dict):
                JsonPropertiesLoader._flatten(value, f"{name}.", into, path)
            elif isinstance(value, list):
                raise ConfigurationError(f"JSON properties file {path} must map names to scalar values (problematic key: {name})")
            elif value is None:
                into[name] = ""
            elif isinstance(value, bool):
                into[name] = "true" if value else "false"
            else:
                into[name] = str(value)


_LOADERS_BY_SUFFIX = {
    ".properties": PropertiesFileLoader.load_from_file,
    ".env": DotenvLoader.load_from_file,
    ".json": JsonPropertiesLoader.load_from_file,
}


def load_property_file(path: Path | str) -> Dict[str, str]:
    """
    Load a property bag, picking the format from the file suffix.

    Files named ``.env`` load as dotenv; unknown suffixes load as properties.

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigurationError: If the file cannot be parsed
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise FileNotFoundError(f"Property file not found: {file_path}")

    suffix = ".env" if file_path.name == ".env" else file_path.suffix.lower()
    loader = _LOADERS_BY_SUFFIX.get(suffix, PropertiesFileLoader.load_from_file)
    values = loader(file_path)
    logger.debug("Loaded %d properties from %s", len(values), file_path)
    return values


def properties_from_env(prefix: str = ENV_PREFIX, environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """
    Collect environment variables starting with *prefix*.

    The prefix is stripped and ``__`` becomes ``.``, so
    ``CONFIGBIND_dataSource__user`` yields ``dataSource.user``. The
    package's own control variables (``CONFIGBIND_CONFIGURATION_FILE``,
    ``CONFIGBIND_LOG_LEVEL``) are skipped.
    """
    source = os.environ if environ is None else environ
    values: Dict[str, str] = {}
    for name, value in source.items():
        if name in _RESERVED_ENV_NAMES:
            continue
        if name.startswith(prefix) and len(name) > len(prefix):
            values[name[len(prefix) :].replace("__", ".")] = value
    return values


__all__ = [
    "DotenvLoader",
    "ENV_PREFIX",
    "JsonPropertiesLoader",
    "PropertiesFileLoader",
    "load_property_file",
    "properties_from_env",
]
