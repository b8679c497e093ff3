"""Tests for writing descriptors back to the definition format."""

import json

import pytest
import yaml

from chaincfg.config import dumps, flatten, load, loads, save, to_dict


@pytest.mark.unit
class TestToDict:
    def test_matches_parsed_definition(self, chain_file, chain_dict):
        assert to_dict(load(chain_file)) == chain_dict

    def test_key_order(self, chain_file):
        assert list(to_dict(load(chain_file))) == [
            "networks",
            "compilers",
            "contracts_directory",
            "contracts_build_directory",
            "migrations_directory",
        ]

    def test_disabled_optimizer_keeps_runs(self, chain_yaml):
        descriptor = loads(chain_yaml.replace("enabled: true", "enabled: false"))
        optimizer = to_dict(descriptor)["compilers"]["solc"]["settings"]["optimizer"]
        assert optimizer == {"enabled": False, "runs": 200}


@pytest.mark.unit
class TestRoundTrip:
    """load(serialize(d)) == d for the reference definition."""

    @pytest.mark.parametrize("fmt", ["yaml", "json"])
    def test_dumps_loads(self, chain_file, fmt):
        descriptor = load(chain_file)
        assert loads(dumps(descriptor, fmt), fmt=fmt) == descriptor

    @pytest.mark.parametrize("name", ["out.yaml", "out.yml", "out.json"])
    def test_save_load(self, chain_file, tmp_path, name):
        descriptor = load(chain_file)
        path = save(descriptor, tmp_path / name)
        assert load(path) == descriptor

    def test_wildcard_is_quoted_in_yaml(self, chain_file):
        text = dumps(load(chain_file))
        assert "network_id: '*'" in text
        assert yaml.safe_load(text)["networks"]["development"]["network_id"] == "*"

    def test_numeric_network_id_stays_string(self, chain_yaml):
        descriptor = loads(chain_yaml.replace('network_id: "*"', "network_id: 5777"))
        text = dumps(descriptor)
        assert yaml.safe_load(text)["networks"]["development"]["network_id"] == "5777"
        assert loads(text) == descriptor

    def test_save_json_is_valid_json(self, chain_file, tmp_path):
        path = save(load(chain_file), tmp_path / "chain.json")
        assert json.loads(path.read_text())["compilers"]["solc"]["version"] == "0.8.19"

    def test_unsupported_format(self, chain_file):
        with pytest.raises(ValueError, match="Unsupported format"):
            dumps(load(chain_file), fmt="toml")


@pytest.mark.unit
class TestFlatten:
    def test_flatten(self):
        assert flatten({"a": {"b": 1, "c": {"d": True}}, "e": "x"}) == [
            ("a.b", 1),
            ("a.c.d", True),
            ("e", "x"),
        ]
