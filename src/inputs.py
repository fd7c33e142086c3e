"""Upload input parsing: CLI values with GitHub Actions INPUT_* fallback."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from constants import Constants

logger = logging.getLogger(__name__)


class InputError(Exception):
    """Raised when a required input is missing or malformed."""


@dataclass
class FileInput:
    """One entry of the files input: a local glob or an external URL."""
    platforms: List[str]
    path: Optional[str] = None
    url: Optional[bool] = None
    external_url: Optional[str] = None


@dataclass
class ActionInputs:
    """Everything needed to build and send one version upload."""
    api_token: str
    slug: str
    version: str
    channel: str
    files: List[FileInput]
    description: Optional[str] = None
    plugin_dependencies: Dict[str, Any] = field(default_factory=dict)
    platform_dependencies: Dict[str, List[str]] = field(default_factory=dict)


def _env_name(name: str) -> str:
    return "INPUT_" + name.replace(" ", "_").upper()


class InputParser:
    """Reads inputs from explicit values, then from INPUT_<NAME> variables.

    Args:
        values: Explicit values (e.g. from the command line); None or "" means unset.
        environ: Environment mapping, defaults to os.environ.
    """

    def __init__(self, values: Optional[Mapping[str, Any]] = None, environ: Optional[Mapping[str, str]] = None):
        self.values = dict(values or {})
        self.environ = os.environ if environ is None else environ

    def get_input(self, name: str, required: bool = False) -> Optional[str]:
        """Return the trimmed input value, or None when unset."""
        value = self.values.get(name)
        if value is None or value == "":
            value = self.environ.get(_env_name(name), "")
        value = str(value).strip()
        if not value:
            if required:
                raise InputError(f"Required input '{name}' is missing or empty")
            return None
        return value

    def parse_inputs(self) -> ActionInputs:
        """Parse and validate every upload input."""
        logger.debug("Parsing action inputs")
        inputs = ActionInputs(
            api_token=self.get_input("api_token", required=True),
            slug=self.get_input("slug", required=True),
            version=self.get_input("version", required=True),
            channel=self.get_input("channel", required=True),
            files=parse_files(self.get_input("files", required=True)),
            description=self.get_input("description"),
            plugin_dependencies=self._parse_plugin_dependencies(),
            platform_dependencies=self.parse_platform_dependencies(),
        )
        logger.debug("Successfully parsed all inputs")
        return inputs

    def parse_platform_dependencies(self) -> Dict[str, List[str]]:
        """Parse platform_dependencies; a bare string becomes a one-element list."""
        data = parse_json_input(self.get_input("platform_dependencies"), "platform_dependencies", {})
        if not isinstance(data, dict):
            raise InputError("platform_dependencies must be a JSON object")

        parsed: Dict[str, List[str]] = {}
        for platform, patterns in data.items():
            if isinstance(patterns, str):
                patterns = [patterns]
            if not isinstance(patterns, list) or not all(isinstance(p, str) for p in patterns):
                raise InputError(f"platform_dependencies['{platform}'] must be a list of strings")
            parsed[platform] = patterns
        return parsed

    def _parse_plugin_dependencies(self) -> Dict[str, Any]:
        data = parse_json_input(self.get_input("plugin_dependencies"), "plugin_dependencies", {})
        if not isinstance(data, dict):
            raise InputError("plugin_dependencies must be a JSON object")
        return data


def parse_json_input(raw: Optional[str], name: str, default: Any) -> Any:
    """Decode an optional JSON input, returning default when unset."""
    if not raw:
        return default
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise InputError(f"Failed to parse {name} as JSON: {exc}") from exc


def parse_files(raw: str) -> List[FileInput]:
    """Validate the files input.

    Each entry needs a platforms list of supported platforms and either a
    path glob or both url=true and externalUrl.
    """
    try:
        parsed = json.loads(raw)
    except ValueError as exc:
        raise InputError(f"Failed to parse files input: {exc}") from exc
    if not isinstance(parsed, list):
        raise InputError("Failed to parse files input: Files input must be an array")

    files = []
    for index, entry in enumerate(parsed):
        if not isinstance(entry, dict):
            raise InputError(f"File at index {index} must be an object")
        platforms = entry.get("platforms")
        if not isinstance(platforms, list):
            raise InputError(f"File at index {index} must have platforms array")
        for platform in platforms:
            if platform not in Constants.SUPPORTED_PLATFORMS:
                raise InputError(f"Invalid platform '{platform}' at file index {index}")

        file_input = FileInput(platforms=list(platforms))
        if isinstance(entry.get("path"), str):
            file_input.path = entry["path"]
        if isinstance(entry.get("url"), bool):
            file_input.url = entry["url"]
        if isinstance(entry.get("externalUrl"), str):
            file_input.external_url = entry["externalUrl"]

        if not file_input.path and not (file_input.url and file_input.external_url):
            raise InputError(
                f"File at index {index} must have either 'path' or both 'url' and 'externalUrl'"
            )
        files.append(file_input)
    return files
