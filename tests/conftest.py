# tests/conftest.py
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import pytest

from seeding.config import SeedSettings, OutputConfig
from seeding.devchain import make_dev_accounts
from seeding.writer import FixtureWriter


@pytest.fixture
def accounts():
    return make_dev_accounts(10)


@pytest.fixture
def settings(tmp_path):
    return SeedSettings(output=OutputConfig(dir=str(tmp_path / "build"), file="seeds.json"))


@pytest.fixture
def writer(settings):
    return FixtureWriter(settings.output_path())
