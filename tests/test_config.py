# tests/test_config.py
from pathlib import Path
import pytest

from seeding.config import SeedSettings, load_settings, load_rpc_config, load_devchain_config
from seeding.errors import SeedConfigError
from seeding.networks import is_dev_network
from utils.config import load_cfg


def test_defaults_match_seed_constants():
    s = SeedSettings()
    assert (s.counters.salt, s.counters.nonce) == (729436712, 238947238)
    assert s.trader_index == 8
    assert s.output_path(Path("/repo")) == Path("/repo/build/seeds.json")


def test_absolute_output_dir_is_kept(tmp_path):
    s = load_settings({"seeding": {"output": {"dir": str(tmp_path), "file": "x.json"}}})
    assert s.output_path(Path("/elsewhere")) == tmp_path / "x.json"


def test_load_cfg_resolves_env_placeholders(tmp_path, monkeypatch):
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(
        "seeding:\n"
        "  trader_index: 4\n"
        "rpc:\n"
        "  url: ${SEEDS_TEST_RPC}\n"
        "  max_attempts: 5\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("SEEDS_TEST_RPC", "http://127.0.0.1:8545")

    cfg = load_cfg(str(cfg_file))
    assert load_settings(cfg).trader_index == 4
    rpc = load_rpc_config(cfg)
    assert rpc.url == "http://127.0.0.1:8545"
    assert rpc.max_attempts == 5
    assert load_devchain_config(cfg).num_accounts == 10


def test_missing_sections_fall_back_to_defaults():
    assert load_settings({}) == SeedSettings()
    assert load_rpc_config({}).url == ""


@pytest.mark.parametrize("section", [
    {"seeding": {"trader_index": -1}},
    {"seeding": {"counters": {"salt": "abc"}}},
    {"seeding": ["not", "a", "mapping"]},
])
def test_invalid_seeding_config_raises(section):
    with pytest.raises(SeedConfigError) as ei:
        load_settings(section)
    assert "seeding" in str(ei.value)


def test_invalid_rpc_config_raises():
    with pytest.raises(SeedConfigError):
        load_rpc_config({"rpc": {"max_attempts": 0}})


@pytest.mark.parametrize("network", ["development", "test", "develop", "dev", "docker", "coverage"])
def test_dev_networks(network):
    assert is_dev_network(network)


@pytest.mark.parametrize("network", ["mainnet", "kovan", "ropsten", "", "Development"])
def test_other_networks_are_not_dev(network):
    assert not is_dev_network(network)


def test_dev_network_list_can_be_overridden():
    assert is_dev_network("ganache", ["ganache"])
    assert not is_dev_network("development", ["ganache"])
