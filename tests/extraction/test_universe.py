"""Tests for the type universe."""

import pytest

from funcsift.exceptions import InvalidUniverseError
from funcsift.extraction.models import TypeStatus
from funcsift.extraction.universe import TypeUniverse, as_universe


class TestTypeStatus:
    """Absent and present-but-false are different answers."""

    def test_three_states(self, universe):
        types = TypeUniverse(universe)
        assert types.status("int") is TypeStatus.DESIRED
        assert types.status("float") is TypeStatus.UNDESIRED
        assert types.status("Unknown") is TypeStatus.UNKNOWN

    def test_empty_token_is_unknown(self, universe):
        assert TypeUniverse(universe).status("") is TypeStatus.UNKNOWN

    def test_mapping_behaviour(self, universe):
        types = TypeUniverse(universe)
        assert len(types) == 3
        assert types["float"] is False
        assert "String" in types
        assert types.desired == frozenset({"int", "String"})


class TestBuilding:
    def test_from_lists_desired_wins(self):
        types = TypeUniverse.from_lists(desired=["int"], undesired=["int", "float"])
        assert types.status("int") is TypeStatus.DESIRED
        assert types.status("float") is TypeStatus.UNDESIRED

    def test_merged_overrides(self, universe):
        types = TypeUniverse(universe).merged({"float": True, "long": False})
        assert types.status("float") is TypeStatus.DESIRED
        assert types.status("long") is TypeStatus.UNDESIRED
        assert types.status("int") is TypeStatus.DESIRED

    def test_as_universe_passthrough(self, universe):
        types = TypeUniverse(universe)
        assert as_universe(types) is types
        assert isinstance(as_universe(universe), TypeUniverse)


class TestFromToml:
    def test_types_table(self, tmp_path):
        path = tmp_path / "types.toml"
        path.write_text("[types]\nint = true\nfloat = false\n")
        types = TypeUniverse.from_toml(path)
        assert dict(types) == {"int": True, "float": False}

    def test_top_level_booleans(self, tmp_path):
        path = tmp_path / "types.toml"
        path.write_text('String = true\n"long" = false\n')
        types = TypeUniverse.from_toml(path)
        assert types.status("String") is TypeStatus.DESIRED
        assert types.status("long") is TypeStatus.UNDESIRED

    def test_non_boolean_value(self, tmp_path):
        path = tmp_path / "types.toml"
        path.write_text('[types]\nint = "yes"\n')
        with pytest.raises(InvalidUniverseError, match="Invalid type universe"):
            TypeUniverse.from_toml(path)

    def test_bad_toml(self, tmp_path):
        path = tmp_path / "types.toml"
        path.write_text("[types\nint = true\n")
        with pytest.raises(InvalidUniverseError):
            TypeUniverse.from_toml(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(InvalidUniverseError) as exc_info:
            TypeUniverse.from_toml(tmp_path / "nope.toml")
        assert "cannot read file" in exc_info.value.reason
