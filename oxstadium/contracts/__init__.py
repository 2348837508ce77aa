"""
Stadium Contracts
=================

Behavioural model of the OXStadium contracts on an in-memory ledger:
- OXStadium: stadium NFTs purchasable with an ERC20 token
- TestToken: ERC20 token used to pay for stadiums in tests
- Chain: all-or-nothing ledger the contracts are deployed on
"""

from .chain import ZERO_ADDRESS, Chain, Contract, ContractHandle, Event, Receipt
from .erc20 import ERC20, TestToken
from .erc721 import ERC721
from .errors import Revert
from .ownable import Ownable
from .stadium import OXStadium

__all__ = [
    'Chain', 'Contract', 'ContractHandle', 'Event', 'Receipt', 'ZERO_ADDRESS',
    'ERC20', 'ERC721', 'Ownable', 'OXStadium', 'Revert', 'TestToken',
]
