"""clang-format discovery and invocation.

FormatPipeline lives in cppstyle.formatter.pipeline and is exported from
the top-level package.
"""

from cppstyle.formatter.config_resolver import (
    CONFIG_FILE_NAMES,
    ConfigResolver,
    resolve_config_file,
)
from cppstyle.formatter.process_runner import (
    ProcessRunner,
    build_command,
    check_executable,
)

__all__ = [
    "CONFIG_FILE_NAMES",
    "ConfigResolver",
    "ProcessRunner",
    "build_command",
    "check_executable",
    "resolve_config_file",
]
