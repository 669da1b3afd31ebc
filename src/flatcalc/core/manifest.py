import logging
import tomllib
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import TypeVar

from pydantic import ValidationError

from flatcalc.core.errors import ConfigError
from flatcalc.core.evaluator import Strategy
from flatcalc.core.notation import STANDARD, Notation, get_notation
from flatcalc.core.operators import DivisionMode

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "flatcalc.toml"

E = TypeVar("E", bound=StrEnum)

_SYMBOL_KEYS = ("add", "subtract", "multiply", "divide", "open", "close")


@dataclass
class EvaluationConfig:
    """Evaluation settings from the [evaluation] table."""

    division: DivisionMode = DivisionMode.TRUE
    strategy: Strategy = Strategy.SUBSTITUTION


@dataclass
class CalcConfig:
    """flatcalc.toml configuration.

    Examples in flatcalc.toml:

        [evaluation]
        division = "truncate"
        strategy = "stack"

        [notation]
        preset = "letters"
        # Per-symbol overrides on top of the preset
        add = "p"
    """

    evaluation: EvaluationConfig = field(default_factory=EvaluationConfig)
    notation: Notation = STANDARD
    path: Path | None = None  # File the config was read from, if any


def load_config(path: Path | None = None) -> CalcConfig:
    """
    Load configuration from a flatcalc.toml file.

    Args:
        path: Config file. Defaults to ./flatcalc.toml; when that default
            does not exist, built-in defaults are returned.

    Returns:
        CalcConfig

    Raises:
        ConfigError: If an explicit path is missing, the TOML is malformed,
            or a value is invalid.
    """
    if path is None:
        path = Path.cwd() / CONFIG_FILENAME
        if not path.exists():
            return CalcConfig()

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}") from None
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
    except OSError as e:
        # A directory or unreadable file
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    logger.debug("Loaded config from %s", path)
    config = parse_config(data)
    config.path = path
    return config


def parse_config(data: dict) -> CalcConfig:
    """Build a CalcConfig from already-parsed TOML data."""
    eval_data = _table(data, "evaluation")
    notation_data = _table(data, "notation")

    evaluation = EvaluationConfig(
        division=_choice(DivisionMode, eval_data.get("division", DivisionMode.TRUE), "division"),
        strategy=_choice(Strategy, eval_data.get("strategy", Strategy.SUBSTITUTION), "strategy"),
    )

    preset = notation_data.get("preset", STANDARD.name)
    if not isinstance(preset, str):
        raise ConfigError(f"Invalid preset {preset!r}; expected a string")
    notation = get_notation(preset)
    overrides = {key: notation_data[key] for key in _SYMBOL_KEYS if key in notation_data}
    if overrides:
        try:
            notation = Notation(**{**notation.model_dump(), **overrides, "name": "custom"})
        except ValidationError as e:
            raise ConfigError(f"Invalid [notation] symbols: {e}") from e

    return CalcConfig(evaluation=evaluation, notation=notation)


def _table(data: dict, key: str) -> dict:
    value = data.get(key, {})
    if not isinstance(value, dict):
        raise ConfigError(f"[{key}] must be a table, got {value!r}")
    return value


def _choice(enum_type: type[E], value: str, key: str) -> E:
    try:
        return enum_type(str(value).lower())
    except ValueError:
        choices = ", ".join(member.value for member in enum_type)
        raise ConfigError(f"Invalid {key} {value!r}; choose one of: {choices}") from None
