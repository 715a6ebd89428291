# seeding/migration.py
from __future__ import annotations

from typing import Optional, Sequence

from seeding.config import SeedSettings
from seeding.models import Fixture
from seeding.networks import is_dev_network
from seeding.ports import Deployer, SeedToolkit
from seeding.seeder import PositionSeeder, OrderSeeder
from seeding.writer import FixtureWriter
from utils.logger import logger


class SeedMigration:
    """
    Seeds a development network with positions and orders and writes the fixture.

    Positions are seeded to completion before orders start. Orders do not read
    anything positions produce; the ordering is kept as-is.
    """

    def __init__(self,
                 toolkit: SeedToolkit,
                 settings: Optional[SeedSettings] = None,
                 writer: Optional[FixtureWriter] = None) -> None:
        self._toolkit = toolkit
        self._settings = settings or SeedSettings()
        self._writer = writer or FixtureWriter(self._settings.output_path())

    async def run(self, deployer: Deployer, network: str, accounts: Sequence[str]) -> Optional[Fixture]:
        if not is_dev_network(network, self._settings.dev_networks):
            logger.info(f"[SeedMigration] network={network} is not a development network, skipping seeds")
            return None

        await self._writer.prepare()

        positions = await PositionSeeder(self._toolkit, deployer, self._settings).run(accounts)
        orders = await OrderSeeder(self._toolkit).run(accounts)

        fixture = Fixture(positions=positions, orders=orders)
        await self._writer.write(fixture)
        return fixture


async def do_migration(deployer: Deployer,
                       network: str,
                       accounts: Sequence[str],
                       *,
                       toolkit: SeedToolkit,
                       settings: Optional[SeedSettings] = None,
                       writer: Optional[FixtureWriter] = None) -> Optional[Fixture]:
    """Migration entry point; returns the written fixture, or None when the network is skipped."""
    return await SeedMigration(toolkit, settings=settings, writer=writer).run(deployer, network, accounts)
