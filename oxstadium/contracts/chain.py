"""
In-memory ledger the contract model runs on.

Every state-changing call is executed as a transaction: the state of all
deployed contracts is snapshotted first and restored if the call raises, so
no partial change survives a failed call. Calls one contract makes into
another run inside the caller's transaction with the calling contract as
sender.
"""

import copy
import functools
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_utils import encode_hex, keccak, to_checksum_address

from .errors import Revert, to_address

logger = logging.getLogger(__name__)

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

DEFAULT_SIGNER_COUNT = 10

# Attributes every contract carries that are not part of its storage
_FIXED_ATTRIBUTES = ("chain", "address", "deployer", "deploy_transaction")


@dataclass
class Event:
    """A log emitted by a contract during a transaction"""
    name: str
    address: str
    args: Dict[str, Any]


@dataclass
class Receipt:
    """Result of a mined transaction"""
    transaction_hash: str
    sender: str
    to: Optional[str]
    block_number: int
    status: int = 1
    return_value: Any = None
    events: List[Event] = field(default_factory=list)

    def events_named(self, name: str) -> List[Event]:
        return [event for event in self.events if event.name == name]


def transaction(method: Callable) -> Callable:
    """Mark a contract method as state-changing.

    The wrapped method accepts an extra `sender` keyword; when it is omitted
    the contract's deployer sends the call.
    """
    @functools.wraps(method)
    def wrapper(self, *args, sender=None, **kwargs):
        return self.chain.execute(sender or self.deployer, self, method, args, kwargs)

    wrapper.is_transaction = True
    return wrapper


class Contract:
    """Base class for contracts deployed on a Chain.

    Subclasses put their set-up in `constructor`, which runs inside the
    deployment transaction with the deployer as `msg_sender`.
    """

    def __init__(self, chain: "Chain", address: str, deployer: str):
        self.chain = chain
        self.address = address
        self.deployer = deployer
        self.deploy_transaction: Optional[Receipt] = None

    def constructor(self, *args):
        pass

    @property
    def msg_sender(self) -> str:
        return self.chain.msg_sender

    def connect(self, account) -> "ContractHandle":
        """Return a handle that sends transactions from `account`"""
        return ContractHandle(self, to_address(account))

    def external(self, address: str) -> "ContractHandle":
        """Handle on another contract whose calls are sent by this one"""
        return self.chain.at(address).connect(self.address)

    def emit(self, name: str, **args):
        self.chain.record_event(Event(name, self.address, args))

    def storage(self) -> Dict[str, Any]:
        return {k: v for k, v in vars(self).items() if k not in _FIXED_ATTRIBUTES}

    def restore(self, state: Dict[str, Any]):
        for key in list(self.storage()):
            if key not in state:
                delattr(self, key)
        for key, value in state.items():
            setattr(self, key, value)


class ContractHandle:
    """A contract bound to a sender, like an ethers `contract.connect(signer)`"""

    def __init__(self, contract: Contract, sender: str):
        self._contract = contract
        self._sender = sender

    @property
    def address(self) -> str:
        return self._contract.address

    @property
    def sender(self) -> str:
        return self._sender

    def connect(self, account) -> "ContractHandle":
        return self._contract.connect(account)

    def __getattr__(self, name):
        attr = getattr(self._contract, name)
        if getattr(attr, "is_transaction", False):
            return functools.partial(attr, sender=self._sender)
        return attr

    def __repr__(self):
        return f"<{type(self._contract).__name__} at {self.address} as {self._sender}>"


class Chain:
    """Serialised, all-or-nothing ledger holding deployed contracts"""

    def __init__(self, signer_count: int = DEFAULT_SIGNER_COUNT):
        self.signers: List[LocalAccount] = [
            Account.from_key(keccak(text=f"oxstadium-signer-{i}")) for i in range(signer_count)
        ]
        self.contracts: Dict[str, Contract] = {}
        self.block_number = 0
        self.nonces: Dict[str, int] = {}
        self._senders: List[str] = []
        self._receipt: Optional[Receipt] = None

    @property
    def msg_sender(self) -> str:
        if not self._senders:
            raise RuntimeError("msg_sender is only available inside a transaction")
        return self._senders[-1]

    @property
    def in_transaction(self) -> bool:
        return self._receipt is not None

    def at(self, address: str) -> Contract:
        contract = self.contracts.get(to_address(address))
        if contract is None:
            raise Revert("function call to a non-contract account")
        return contract

    def deploy(self, factory: type, *args, sender=None) -> Contract:
        """Deploy `factory(*args)` and return it bound to its deployer"""
        deployer = to_address(sender) if sender else self.signers[0].address
        nonce = self.nonces.get(deployer, 0)
        address = to_checksum_address(keccak(bytes.fromhex(deployer[2:]) + nonce.to_bytes(32, "big"))[12:])
        contract = factory(self, address, deployer)
        self.contracts[address] = contract
        try:
            receipt = self.execute(deployer, contract, type(contract).constructor, args, {}, deployment=True)
        except Exception:
            del self.contracts[address]
            raise
        contract.deploy_transaction = receipt
        logger.info(f"Deployed {factory.__name__} at {address}")
        return contract

    def execute(self, sender: str, contract: Contract, method: Callable,
                args: tuple, kwargs: dict, deployment: bool = False) -> Any:
        """Run `method` on `contract` as `sender`.

        At top level this opens a transaction and returns its Receipt. When
        a transaction is already open (one contract calling another) the
        method runs inside it and its return value is returned directly.
        """
        sender = to_address(sender)
        if self.in_transaction:
            self._senders.append(sender)
            try:
                return method(contract, *args, **kwargs)
            finally:
                self._senders.pop()

        nonce = self.nonces.get(sender, 0)
        self.nonces[sender] = nonce + 1
        tx_hash = encode_hex(keccak(text=f"{sender}:{nonce}:{contract.address}:{method.__name__}"))
        snapshot = {address: copy.deepcopy(c.storage()) for address, c in self.contracts.items()}
        self._receipt = Receipt(
            transaction_hash=tx_hash,
            sender=sender,
            to=None if deployment else contract.address,
            block_number=self.block_number + 1,
        )
        self._senders.append(sender)
        try:
            self._receipt.return_value = method(contract, *args, **kwargs)
        except Exception as e:
            for address, state in snapshot.items():
                self.contracts[address].restore(state)
            logger.debug(f"Transaction {tx_hash} reverted: {e}")
            raise
        else:
            self.block_number += 1
            logger.debug(f"Transaction {tx_hash} mined in block {self.block_number}")
            return self._receipt
        finally:
            self._senders.pop()
            self._receipt = None

    def record_event(self, event: Event):
        if self._receipt is None:
            raise RuntimeError("Events can only be emitted inside a transaction")
        self._receipt.events.append(event)
