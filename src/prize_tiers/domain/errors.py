from dataclasses import dataclass


@dataclass(frozen=True)
class AllocationError:
    message: str


@dataclass(frozen=True)
class InvalidInput(AllocationError):
    field: str
    value: object


@dataclass(frozen=True)
class ZeroShareError(AllocationError):
    total_shares: float
