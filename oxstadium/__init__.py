"""
OXStadium
=========

Stadium NFTs paid for with an ERC20 token.

Structure:
- contracts/: behavioural model of the OXStadium and TestToken contracts
  running on an in-memory ledger
- scripts/: deployment scripts for BNB Smart Chain mainnet and testnet
"""

__version__ = "1.0.0"
__author__ = "OXStadium Team"
