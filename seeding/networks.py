# seeding/networks.py
from typing import Iterable, Optional

from seeding.config import DEFAULT_DEV_NETWORKS


def is_dev_network(network: str, dev_networks: Optional[Iterable[str]] = None) -> bool:
    """True when seeding is allowed on `network` (a local, disposable chain)."""
    names = DEFAULT_DEV_NETWORKS if dev_networks is None else dev_networks
    return network in set(names)
