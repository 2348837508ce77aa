"""Single-owner access control"""

import functools
from typing import Callable

from .chain import ZERO_ADDRESS, Contract, transaction
from .errors import require, to_address


def only_owner(method: Callable) -> Callable:
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        self._check_owner()
        return method(self, *args, **kwargs)

    return wrapper


class Ownable(Contract):

    def constructor(self):
        self._owner = ZERO_ADDRESS
        self._transfer_ownership(self.msg_sender)

    def owner(self) -> str:
        return self._owner

    def _check_owner(self):
        require(self.owner() == self.msg_sender, "Ownable: caller is not the owner")

    @transaction
    @only_owner
    def renounce_ownership(self):
        self._transfer_ownership(ZERO_ADDRESS)

    @transaction
    @only_owner
    def transfer_ownership(self, new_owner: str):
        new_owner = to_address(new_owner)
        require(new_owner != ZERO_ADDRESS, "Ownable: new owner is the zero address")
        self._transfer_ownership(new_owner)

    def _transfer_ownership(self, new_owner: str):
        previous_owner = self._owner
        self._owner = new_owner
        self.emit("OwnershipTransferred", previous_owner=previous_owner, new_owner=new_owner)
