"""Locate the clang-format configuration file for a source file."""

from pathlib import Path

CONFIG_FILE_NAMES = (".clang-format", "_clang-format")


def resolve_config_file(
    file_path: str,
    file_names: tuple[str, ...] = CONFIG_FILE_NAMES,
) -> str | None:
    """Search the file's ancestor directories for a clang-format config.

    The containing directory is checked first, then each parent up to the
    filesystem root. Within one directory the names are tried in order, so
    ``.clang-format`` is preferred over ``_clang-format``.

    Args:
        file_path: Path of the file being formatted.
        file_names: Config file names, in order of preference.

    Returns:
        Absolute path of the nearest config file, or None if there is none.
    """
    directory = Path(file_path).absolute().parent

    for candidate_dir in (directory, *directory.parents):
        for name in file_names:
            conf = candidate_dir / name
            if conf.exists():
                return str(conf)

    return None


class ConfigResolver:
    """Nearest-ancestor config lookup. Nothing is cached between calls."""

    def __init__(self, file_names: tuple[str, ...] = CONFIG_FILE_NAMES) -> None:
        self.file_names = file_names

    def resolve(self, file_path: str) -> str | None:
        return resolve_config_file(file_path, self.file_names)
