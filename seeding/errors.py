# seeding/errors.py
class SeedingError(Exception):
    """Base seeding error."""
    def __init__(self, msg: str = ""):
        super().__init__(msg)
        self.msg = msg

    def __str__(self):
        return self.msg or self.__class__.__name__


class SeedConfigError(SeedingError):
    """Seeding configuration is missing or invalid."""

    def __init__(self, msg: str = "", **ctx):
        super().__init__(msg)
        self.ctx = ctx

    def __str__(self):
        base = super().__str__()
        if self.ctx:
            details = ", ".join(f"{k}={v}" for k, v in self.ctx.items())
            return f"{base} [{details}]"
        return base


class LedgerError(SeedingError):
    """Development ledger rejected a call."""


class UnknownPositionError(LedgerError):
    """No position is stored under the requested id."""
    def __init__(self, position_id: str):
        super().__init__(f"unknown position: {position_id}")
        self.position_id = position_id


class PositionExistsError(LedgerError):
    """A position with this id is already open (nonce reused by the same opener)."""
    def __init__(self, position_id: str):
        super().__init__(f"position already exists: {position_id}")
        self.position_id = position_id
