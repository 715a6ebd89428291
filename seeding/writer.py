# seeding/writer.py
from __future__ import annotations

import json
import os
from pathlib import Path

from seeding.models import Fixture
from utils.logger import logger

JSON_INDENT = 4


class FixtureWriter:
    """
    Persists a seeding fixture as pretty-printed UTF-8 JSON.

    The file is replaced wholesale: content goes to a sibling temp file first and
    is moved over the target, so a failed write leaves any previous file intact.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    async def prepare(self) -> Path:
        """Create the output directory if needed; safe to call repeatedly."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        return self.path.parent

    async def write(self, fixture: Fixture) -> Path:
        text = json.dumps(fixture.to_dict(), indent=JSON_INDENT, ensure_ascii=False)
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            with tmp.open("w", encoding="utf-8") as f:
                f.write(text)
            os.replace(tmp, self.path)
        finally:
            if tmp.exists():
                tmp.unlink()
        logger.info(f"[FixtureWriter] wrote {len(fixture.positions)} positions, "
                    f"{len(fixture.orders)} orders to {self.path}")
        return self.path
