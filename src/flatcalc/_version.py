"""Version lookup for flatcalc."""

import tomllib
from importlib import metadata
from pathlib import Path

_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def get_version() -> str:
    """Return the installed distribution version.

    A source checkout that is not installed reads ``[project] version``
    from its pyproject.toml instead.
    """
    try:
        return metadata.version("flatcalc")
    except metadata.PackageNotFoundError:
        pass
    try:
        with open(_PYPROJECT, "rb") as f:
            return str(tomllib.load(f)["project"]["version"])
    except (OSError, tomllib.TOMLDecodeError, KeyError):
        return "0.0.0"
