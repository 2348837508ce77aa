"""
Fungible token ledger with the standard approve/allowance mechanism.

Amounts are integers in the token's smallest unit (18 decimals).
"""

from typing import Dict, Tuple

from web3 import Web3

from .chain import ZERO_ADDRESS, Contract, transaction
from .errors import MAX_UINT256, require, to_address, uint256

TEST_TOKEN_SUPPLY = Web3.to_wei(10000, "ether")


class ERC20(Contract):

    def constructor(self, name: str, symbol: str):
        self._name = name
        self._symbol = symbol
        self._total_supply = 0
        self._balances: Dict[str, int] = {}
        self._allowances: Dict[Tuple[str, str], int] = {}

    def name(self) -> str:
        return self._name

    def symbol(self) -> str:
        return self._symbol

    def decimals(self) -> int:
        return 18

    def total_supply(self) -> int:
        return self._total_supply

    def balance_of(self, account: str) -> int:
        return self._balances.get(to_address(account), 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get((to_address(owner), to_address(spender)), 0)

    @transaction
    def transfer(self, to: str, amount: int) -> bool:
        self._transfer(self.msg_sender, to_address(to), amount)
        return True

    @transaction
    def approve(self, spender: str, amount: int) -> bool:
        self._approve(self.msg_sender, to_address(spender), amount)
        return True

    @transaction
    def transfer_from(self, owner: str, to: str, amount: int) -> bool:
        owner, to = to_address(owner), to_address(to)
        self._spend_allowance(owner, self.msg_sender, uint256(amount))
        self._transfer(owner, to, amount)
        return True

    def _transfer(self, sender: str, to: str, amount: int):
        uint256(amount)
        require(sender != ZERO_ADDRESS, "ERC20: transfer from the zero address")
        require(to != ZERO_ADDRESS, "ERC20: transfer to the zero address")
        balance = self.balance_of(sender)
        require(balance >= amount, "ERC20: transfer amount exceeds balance")
        self._balances[sender] = balance - amount
        self._balances[to] = self.balance_of(to) + amount
        self.emit("Transfer", sender=sender, to=to, value=amount)

    def _mint(self, account: str, amount: int):
        uint256(amount)
        require(account != ZERO_ADDRESS, "ERC20: mint to the zero address")
        self._total_supply += amount
        self._balances[account] = self.balance_of(account) + amount
        self.emit("Transfer", sender=ZERO_ADDRESS, to=account, value=amount)

    def _approve(self, owner: str, spender: str, amount: int):
        uint256(amount)
        require(owner != ZERO_ADDRESS, "ERC20: approve from the zero address")
        require(spender != ZERO_ADDRESS, "ERC20: approve to the zero address")
        self._allowances[(owner, spender)] = amount
        self.emit("Approval", owner=owner, spender=spender, value=amount)

    def _spend_allowance(self, owner: str, spender: str, amount: int):
        current = self.allowance(owner, spender)
        if current != MAX_UINT256:
            require(current >= amount, "ERC20: insufficient allowance")
            self._approve(owner, spender, current - amount)


class TestToken(ERC20):
    """TTK, the token stadiums are paid with in tests. The deployer receives the whole supply."""

    __test__ = False

    def constructor(self):
        super().constructor("TestToken", "TTK")
        self._mint(self.msg_sender, TEST_TOKEN_SUPPLY)
