"""Settings lookups and the format-on-save policy.

Settings are plain key lookups read on every call. The global store is
normally the process environment (populated from ``.env`` by the CLI);
project properties are usually a mapping supplied by the host.
"""

import os
import sys
from collections.abc import Mapping
from typing import Protocol, TextIO

from cppstyle.exceptions import ExecutableError
from cppstyle.formatter.process_runner import check_executable

CLANG_FORMAT_PATH = "CPPSTYLE_CLANG_FORMAT_PATH"
ENABLE_CLANGFORMAT_ON_SAVE = "CPPSTYLE_ENABLE_CLANGFORMAT_ON_SAVE"
PROJECT_SPECIFIC = "CPPSTYLE_PROJECT_SPECIFIC"
ENABLE_CLANGFORMAT = "CPPSTYLE_ENABLE_CLANGFORMAT"


class SettingsLookup(Protocol):
    def get(self, key: str) -> str | None: ...


class EnvSettings:
    """Reads settings from environment variables."""

    def get(self, key: str) -> str | None:
        return os.getenv(key)


class MappingSettings:
    """Reads settings from an in-memory mapping."""

    def __init__(self, values: Mapping[str, str] | None = None) -> None:
        self._values = dict(values or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)


def parse_bool(value: str | None) -> bool:
    """Only "true" (any case) is true; everything else, including None, is false."""
    return value is not None and value.lower() == "true"


def clang_format_path(settings: SettingsLookup) -> str | None:
    return settings.get(CLANG_FORMAT_PATH) or None


def format_on_save_enabled(
    global_settings: SettingsLookup,
    project_settings: SettingsLookup | None = None,
) -> bool:
    """Resolve the format-on-save toggle.

    A project that turns on project-specific settings decides on its own;
    a missing project value then means disabled. Otherwise the global
    setting applies.
    """
    if project_settings is not None and parse_bool(project_settings.get(PROJECT_SPECIFIC)):
        return parse_bool(project_settings.get(ENABLE_CLANGFORMAT))

    return parse_bool(global_settings.get(ENABLE_CLANGFORMAT_ON_SAVE))


def should_format_on_save(
    global_settings: SettingsLookup,
    project_settings: SettingsLookup | None = None,
    diagnostics: TextIO | None = None,
    executable_path: str | None = None,
) -> bool:
    """True when format-on-save is enabled and the executable is usable.

    executable_path overrides the configured clang-format path. Executable
    problems are reported to diagnostics (stderr by default).
    """
    if not format_on_save_enabled(global_settings, project_settings):
        return False

    sink = diagnostics if diagnostics is not None else sys.stderr
    path = executable_path or clang_format_path(global_settings)
    if path is None:
        print("clang-format command must be specified in preferences.", file=sink)
        return False

    try:
        check_executable(path)
    except ExecutableError as exc:
        print(str(exc), file=sink)
        return False

    return True
