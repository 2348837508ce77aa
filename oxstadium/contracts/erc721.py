"""Non-fungible token ledger with metadata"""

from typing import Dict, Tuple

from .chain import ZERO_ADDRESS, Contract, transaction
from .errors import require, to_address


class ERC721(Contract):

    def constructor(self, name: str, symbol: str):
        self._name = name
        self._symbol = symbol
        self._owners: Dict[int, str] = {}
        self._balances: Dict[str, int] = {}
        self._token_approvals: Dict[int, str] = {}
        self._operator_approvals: Dict[Tuple[str, str], bool] = {}

    def name(self) -> str:
        return self._name

    def symbol(self) -> str:
        return self._symbol

    def balance_of(self, owner: str) -> int:
        owner = to_address(owner)
        require(owner != ZERO_ADDRESS, "ERC721: balance query for the zero address")
        return self._balances.get(owner, 0)

    def owner_of(self, token_id: int) -> str:
        require(self._exists(token_id), "ERC721: owner query for nonexistent token")
        return self._owners[token_id]

    def token_uri(self, token_id: int) -> str:
        require(self._exists(token_id), "ERC721Metadata: URI query for nonexistent token")
        base_uri = self._base_uri()
        return f"{base_uri}{token_id}" if base_uri else ""

    def _base_uri(self) -> str:
        return ""

    def get_approved(self, token_id: int) -> str:
        require(self._exists(token_id), "ERC721: approved query for nonexistent token")
        return self._token_approvals.get(token_id, ZERO_ADDRESS)

    def is_approved_for_all(self, owner: str, operator: str) -> bool:
        return self._operator_approvals.get((to_address(owner), to_address(operator)), False)

    @transaction
    def approve(self, to: str, token_id: int):
        to = to_address(to)
        owner = self.owner_of(token_id)
        require(to != owner, "ERC721: approval to current owner")
        require(
            self.msg_sender == owner or self.is_approved_for_all(owner, self.msg_sender),
            "ERC721: approve caller is not owner nor approved for all",
        )
        self._approve(to, token_id)

    @transaction
    def set_approval_for_all(self, operator: str, approved: bool):
        operator = to_address(operator)
        require(operator != self.msg_sender, "ERC721: approve to caller")
        self._operator_approvals[(self.msg_sender, operator)] = approved
        self.emit("ApprovalForAll", owner=self.msg_sender, operator=operator, approved=approved)

    @transaction
    def transfer_from(self, sender: str, to: str, token_id: int):
        sender, to = to_address(sender), to_address(to)
        require(
            self._is_approved_or_owner(self.msg_sender, token_id),
            "ERC721: transfer caller is not owner nor approved",
        )
        self._transfer(sender, to, token_id)

    def _exists(self, token_id: int) -> bool:
        return token_id in self._owners

    def _is_approved_or_owner(self, spender: str, token_id: int) -> bool:
        require(self._exists(token_id), "ERC721: operator query for nonexistent token")
        owner = self._owners[token_id]
        return (
            spender == owner
            or self.get_approved(token_id) == spender
            or self.is_approved_for_all(owner, spender)
        )

    def _mint(self, to: str, token_id: int):
        to = to_address(to)
        require(to != ZERO_ADDRESS, "ERC721: mint to the zero address")
        require(not self._exists(token_id), "ERC721: token already minted")
        self._balances[to] = self._balances.get(to, 0) + 1
        self._owners[token_id] = to
        self.emit("Transfer", sender=ZERO_ADDRESS, to=to, token_id=token_id)

    def _transfer(self, sender: str, to: str, token_id: int):
        require(self.owner_of(token_id) == sender, "ERC721: transfer of token that is not own")
        require(to != ZERO_ADDRESS, "ERC721: transfer to the zero address")
        self._approve(ZERO_ADDRESS, token_id)
        self._balances[sender] -= 1
        self._balances[to] = self._balances.get(to, 0) + 1
        self._owners[token_id] = to
        self.emit("Transfer", sender=sender, to=to, token_id=token_id)

    def _approve(self, to: str, token_id: int):
        self._token_approvals[token_id] = to
        self.emit("Approval", owner=self._owners[token_id], approved=to, token_id=token_id)
