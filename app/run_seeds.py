# app/run_seeds.py
import asyncio, os, argparse
from pathlib import Path

from infra import RpcClient
from seeding.config import load_settings, load_rpc_config, load_devchain_config
from seeding.devchain import DevChain
from seeding.migration import do_migration
from seeding.writer import FixtureWriter
from utils import logger, load_cfg


def env_default(name: str, default=None):
    return os.getenv(name, default)


def build_parser():
    p = argparse.ArgumentParser("run-seeds")
    p.add_argument("--network",     default=env_default("SEEDS_NETWORK", "development"))
    p.add_argument("--config-path", default=env_default("SEEDS_CONFIG", None))
    p.add_argument("--rpc-url",     default=env_default("SEEDS_RPC_URL", None),
                   help="dev node to take accounts from (eth_accounts); defaults to generated accounts")
    p.add_argument("--out",         default=None, help="override the fixture output path")
    return p


async def resolve_accounts(cfg: dict, rpc_url: str | None, chain: DevChain) -> list[str]:
    rpc_cfg = load_rpc_config(cfg)
    if rpc_url:
        rpc_cfg = rpc_cfg.model_copy(update={"url": rpc_url})
    if not rpc_cfg.url:
        return chain.accounts
    async with RpcClient(rpc_cfg) as rpc:
        accounts = await rpc.accounts()
    logger.info(f"Fetched {len(accounts)} accounts from node")
    return accounts


async def main(argv=None):
    args = build_parser().parse_args(argv)

    cfg = load_cfg(args.config_path)
    settings = load_settings(cfg)
    chain = DevChain(num_accounts=load_devchain_config(cfg).num_accounts)

    accounts = await resolve_accounts(cfg, args.rpc_url, chain)
    writer = FixtureWriter(Path(args.out) if args.out else settings.output_path())

    fixture = await do_migration(chain, args.network, accounts,
                                 toolkit=chain, settings=settings, writer=writer)
    if fixture is None:
        logger.info(f"No seeds written for network={args.network}")
        return None
    logger.info(f"Seeds ready: {len(fixture.positions)} positions, {len(fixture.orders)} orders -> {writer.path}")
    return fixture


if __name__ == "__main__":
    asyncio.run(main())
