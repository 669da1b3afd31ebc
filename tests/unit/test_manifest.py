"""Tests for flatcalc.toml loading."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from flatcalc.core.errors import ConfigError
from flatcalc.core.evaluator import Strategy
from flatcalc.core.manifest import CalcConfig, load_config, parse_config
from flatcalc.core.notation import LETTERS, STANDARD
from flatcalc.core.operators import DivisionMode


class TestLoadConfig:
    def test_defaults_without_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        config = load_config()
        assert config == CalcConfig()
        assert config.notation == STANDARD
        assert config.evaluation.division == DivisionMode.TRUE
        assert config.evaluation.strategy == Strategy.SUBSTITUTION

    def test_reads_cwd_file(
        self, write_config: Callable[[str], Path], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = write_config('[evaluation]\ndivision = "truncate"\n')
        monkeypatch.chdir(path.parent)
        config = load_config()
        assert config.evaluation.division == DivisionMode.TRUNCATE
        assert config.path is not None
        assert config.path.name == "flatcalc.toml"

    def test_full_file(self, write_config: Callable[[str], Path]) -> None:
        path = write_config(
            """
[evaluation]
division = "truncate"
strategy = "stack"

[notation]
preset = "letters"
"""
        )
        config = load_config(path)
        assert config.evaluation.division == DivisionMode.TRUNCATE
        assert config.evaluation.strategy == Strategy.STACK
        assert config.notation == LETTERS
        assert config.path == path

    def test_explicit_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "nope.toml")

    def test_malformed_toml(self, write_config: Callable[[str], Path]) -> None:
        path = write_config("[evaluation\n")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(path)

    def test_directory_path(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Cannot read config file"):
            load_config(tmp_path)

    def test_cwd_directory_named_like_config(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "flatcalc.toml").mkdir()
        monkeypatch.chdir(tmp_path)
        with pytest.raises(ConfigError):
            load_config()

    def test_table_given_as_value(self, write_config: Callable[[str], Path]) -> None:
        path = write_config('evaluation = "truncate"\n')
        with pytest.raises(ConfigError, match="must be a table"):
            load_config(path)


class TestParseConfig:
    def test_empty(self) -> None:
        assert parse_config({}) == CalcConfig()

    def test_case_insensitive_values(self) -> None:
        config = parse_config({"evaluation": {"division": "TRUNCATE", "strategy": "Stack"}})
        assert config.evaluation.division == DivisionMode.TRUNCATE
        assert config.evaluation.strategy == Strategy.STACK

    def test_invalid_division(self) -> None:
        with pytest.raises(ConfigError, match="Invalid division 'floor'"):
            parse_config({"evaluation": {"division": "floor"}})

    def test_invalid_strategy(self) -> None:
        with pytest.raises(ConfigError, match="choose one of: substitution, stack"):
            parse_config({"evaluation": {"strategy": "magic"}})

    def test_unknown_preset(self) -> None:
        with pytest.raises(ConfigError):
            parse_config({"notation": {"preset": "roman"}})

    def test_symbol_overrides(self) -> None:
        config = parse_config({"notation": {"preset": "letters", "add": "p"}})
        assert config.notation.name == "custom"
        assert config.notation.add == "p"
        assert config.notation.subtract == "b"

    def test_clashing_override(self) -> None:
        with pytest.raises(ConfigError, match="Invalid \\[notation\\] symbols"):
            parse_config({"notation": {"add": "-"}})

    @pytest.mark.parametrize(
        "data",
        [
            {"evaluation": "truncate"},
            {"notation": "letters"},
            {"evaluation": ["division", "truncate"]},
        ],
    )
    def test_section_not_a_table(self, data: dict) -> None:
        with pytest.raises(ConfigError, match="must be a table"):
            parse_config(data)

    @pytest.mark.parametrize("preset", [1, True, ["letters"]])
    def test_preset_not_a_string(self, preset: object) -> None:
        with pytest.raises(ConfigError, match="Invalid preset"):
            parse_config({"notation": {"preset": preset}})

    def test_symbol_override_not_a_string(self) -> None:
        with pytest.raises(ConfigError, match="Invalid \\[notation\\] symbols"):
            parse_config({"notation": {"add": 1}})
