"""
OXStadium Contract
==================

Stadium NFTs in three types, each with its own supply cap and price. Buyers
approve this contract on the payment token and call `purchase`; the owner
can hand out a limited number of free "marketing" stadiums.
"""

import logging
from typing import Dict, List

from web3 import Web3

from .chain import transaction
from .erc721 import ERC721
from .errors import require, to_address, uint256
from .ownable import Ownable, only_owner

logger = logging.getLogger(__name__)

STADIUM_NAMES = ("Bronze", "Silver", "Gold")
STADIUM_QUANTITIES = (7500, 5000, 2500)
STADIUM_PRICES = tuple(Web3.to_wei(price, "ether") for price in ("0.6", "1.2", "1.9"))

MAX_PURCHASES_PER_ADDRESS = 10
MARKETING_STADIUMS = 100


class OXStadium(ERC721, Ownable):

    stadium_quantities = STADIUM_QUANTITIES

    def constructor(self, token_address: str, base_uri: str):
        ERC721.constructor(self, "OXStadium", "OXS")
        Ownable.constructor(self)
        self._token_address = to_address(token_address)
        self._base_uri_value = base_uri
        self._stadiums_left: List[int] = list(self.stadium_quantities)
        self._prices: List[int] = list(STADIUM_PRICES)
        self._stadium_types: Dict[int, int] = {}
        self._address_purchases: Dict[str, int] = {}
        self._max_purchases_per_address = MAX_PURCHASES_PER_ADDRESS
        self._marketing_stadiums = MARKETING_STADIUMS
        self._total_supply = 0

    # Queries

    def max_supply(self) -> int:
        return sum(self.stadium_quantities)

    def total_supply(self) -> int:
        return self._total_supply

    def stadiums_quantity(self, stadium_type: int) -> int:
        self._check_stadium_type(stadium_type)
        return self.stadium_quantities[stadium_type]

    def stadiums_left(self, stadium_type: int) -> int:
        self._check_stadium_type(stadium_type)
        return self._stadiums_left[stadium_type]

    def prices(self, stadium_type: int) -> int:
        self._check_stadium_type(stadium_type)
        return self._prices[stadium_type]

    def stadium_names(self, stadium_type: int) -> str:
        self._check_stadium_type(stadium_type)
        return STADIUM_NAMES[stadium_type]

    def token_address(self) -> str:
        return self._token_address

    def max_purchases_per_address(self) -> int:
        return self._max_purchases_per_address

    def address_purchases(self, account: str) -> int:
        return self._address_purchases.get(to_address(account), 0)

    def marketing_stadiums(self) -> int:
        return self._marketing_stadiums

    def get_stadium_type(self, token_id: int) -> int:
        self.owner_of(token_id)
        return self._stadium_types[token_id]

    def get_stadium_name_by_id(self, token_id: int) -> str:
        return STADIUM_NAMES[self.get_stadium_type(token_id)]

    def token_uri(self, token_id: int) -> str:
        return super().token_uri(token_id) + ".json"

    def _base_uri(self) -> str:
        return self._base_uri_value

    # Minting

    @transaction
    def purchase(self, stadium_type: int) -> int:
        """Buy one stadium of `stadium_type` at its current price"""
        buyer = self.msg_sender
        self._check_stadium_type(stadium_type)
        require(
            self.address_purchases(buyer) < self._max_purchases_per_address,
            "Max purchases reached",
        )
        require(self._stadiums_left[stadium_type] > 0, "No stadiums left")

        price = self._prices[stadium_type]
        self.external(self._token_address).transfer_from(buyer, self.address, price)

        self._address_purchases[buyer] = self.address_purchases(buyer) + 1
        token_id = self._mint_stadium(buyer, stadium_type)
        logger.debug(f"{buyer} purchased stadium {token_id} (type {stadium_type}) for {price}")
        return token_id

    @transaction
    @only_owner
    def marketing_mint(self, to: str, stadium_type: int) -> int:
        """Give a stadium away without payment; bounded by `marketing_stadiums`"""
        to = to_address(to)
        require(self._marketing_stadiums > 0, "No marketing stadiums left")
        self._check_stadium_type(stadium_type)
        require(self._stadiums_left[stadium_type] > 0, "No stadiums left")

        self._marketing_stadiums -= 1
        return self._mint_stadium(to, stadium_type)

    def _mint_stadium(self, to: str, stadium_type: int) -> int:
        self._stadiums_left[stadium_type] -= 1
        self._total_supply += 1
        token_id = self._total_supply
        self._stadium_types[token_id] = stadium_type
        self._mint(to, token_id)
        return token_id

    def _check_stadium_type(self, stadium_type: int):
        require(0 <= stadium_type < len(self.stadium_quantities), "Invalid stadium type")

    # Owner functions

    @transaction
    @only_owner
    def change_token_address(self, token_address: str):
        self._token_address = to_address(token_address)

    @transaction
    @only_owner
    def set_max_purchases_per_address(self, max_purchases: int):
        self._max_purchases_per_address = uint256(max_purchases)

    @transaction
    @only_owner
    def change_stadium_price(self, stadium_type: int, price: int):
        self._check_stadium_type(stadium_type)
        self._prices[stadium_type] = uint256(price)

    @transaction
    @only_owner
    def set_base_uri(self, base_uri: str):
        self._base_uri_value = base_uri

    @transaction
    @only_owner
    def withdraw(self) -> int:
        """Send the contract's whole token balance to the owner"""
        token = self.external(self._token_address)
        balance = token.balance_of(self.address)
        require(balance > 0, "There is no balance to withdraw")
        token.transfer(self.owner(), balance)
        logger.info(f"Withdrew {Web3.from_wei(balance, 'ether')} tokens to {self.owner()}")
        return balance
