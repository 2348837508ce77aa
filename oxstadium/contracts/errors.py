"""Errors raised by the contract model, and the argument checks that raise them."""

from eth_utils import to_checksum_address

MAX_UINT256 = 2 ** 256 - 1


class Revert(Exception):
    """A contract call failed; the ledger is left as it was before the call."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


def require(condition: bool, reason: str):
    """Revert with `reason` unless `condition` holds"""
    if not condition:
        raise Revert(reason)


def uint256(value: int) -> int:
    require(
        isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= MAX_UINT256,
        "Value out of uint256 range",
    )
    return value


def to_address(value) -> str:
    """Checksum form of `value`; any casing of the same 20 bytes is the same account"""
    value = getattr(value, "address", value)
    try:
        return to_checksum_address(value)
    except (TypeError, ValueError):
        raise Revert(f"Invalid address: {value!r}")
