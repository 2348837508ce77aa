#!/usr/bin/env python3
"""
Deploy the OXStadium contract to BNB Smart Chain mainnet or testnet
"""

import argparse
import json
import logging
import sys
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from web3 import Web3
from web3.middleware import ExtraDataToPOAMiddleware

from .config import NETWORKS, ConfigError, DeploySettings, NetworkConfig, load_settings

logger = logging.getLogger(__name__)

# Balances are shown rounded down to 4 decimals
BALANCE_PRECISION = 10 ** 14


class DeploymentError(Exception):
    """The contract could not be deployed"""


@dataclass
class DeploymentResult:
    contract_address: str
    transaction_hash: str
    block_number: int
    deployer: str
    balance_before: int
    balance_after: int


def setup_logging(log_file: str = 'deploy.log'):
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler()
        ]
    )


def format_balance(wei: int, remainder: Optional[int] = None) -> str:
    """Format a wei amount in ether after subtracting `remainder`.

    `remainder` defaults to the part of `wei` below 4 decimals, which rounds
    the balance down. The post-deployment balance is shown with the remainder
    of the pre-deployment balance, so the two lines differ by exactly the
    amount spent.
    """
    if remainder is None:
        remainder = wei % BALANCE_PRECISION
    return str(Web3.from_wei(wei - remainder, 'ether'))


def connect(network: NetworkConfig) -> Web3:
    """Connect to the network's RPC endpoint and check we are on the expected chain"""
    w3 = Web3(Web3.HTTPProvider(network.rpc_url))
    # BSC is a proof-of-authority chain
    w3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)
    if not w3.is_connected():
        raise DeploymentError(f"Could not connect to RPC URL: {network.rpc_url}")
    logger.info(f"Connected to {network.name} at {network.rpc_url}")
    return w3


def load_artifact(path: str) -> Tuple[List[Any], str]:
    """Load the ABI and bytecode from a compiled contract artifact"""
    try:
        with open(path, 'r') as f:
            artifact = json.load(f)
    except FileNotFoundError:
        raise DeploymentError(f"Contract artifact not found at {path}, compile the contracts first")
    except json.JSONDecodeError as e:
        raise DeploymentError(f"Contract artifact at {path} is not valid JSON: {e}")

    try:
        return artifact['abi'], artifact['bytecode']
    except KeyError as e:
        raise DeploymentError(f"Contract artifact at {path} has no {e}")


def deploy_stadium(w3: Web3, settings: DeploySettings) -> DeploymentResult:
    """Deploy OXStadium with the network's token address and base URI"""
    network = settings.network
    chain_id = w3.eth.chain_id
    if chain_id != network.chain_id:
        raise DeploymentError(f"Connected to chain {chain_id}, expected {network.chain_id} for {network.name}")

    abi, bytecode = load_artifact(settings.artifact_path)
    deployer = w3.eth.account.from_key(settings.private_key)

    balance = w3.eth.get_balance(deployer.address)
    remainder = balance % BALANCE_PRECISION
    logger.info(f"Deploying contracts with the account: {deployer.address}")
    logger.info(f"Account balance: {format_balance(balance)}")

    stadiums = w3.eth.contract(abi=abi, bytecode=bytecode)
    tx = stadiums.constructor(
        Web3.to_checksum_address(network.token_address),
        network.base_uri,
    ).build_transaction({
        'from': deployer.address,
        'nonce': w3.eth.get_transaction_count(deployer.address),
        'gas': settings.gas,
        'gasPrice': w3.eth.gas_price,
        'chainId': network.chain_id,
    })

    signed_tx = w3.eth.account.sign_transaction(tx, settings.private_key)
    tx_hash = w3.eth.send_raw_transaction(signed_tx.raw_transaction)
    logger.info(f"Transaction sent: {Web3.to_hex(tx_hash)}")

    receipt = w3.eth.wait_for_transaction_receipt(tx_hash, timeout=settings.receipt_timeout)
    if receipt['status'] != 1:
        raise DeploymentError(f"Deployment transaction {Web3.to_hex(tx_hash)} failed")

    new_balance = w3.eth.get_balance(deployer.address)
    result = DeploymentResult(
        contract_address=receipt['contractAddress'],
        transaction_hash=Web3.to_hex(tx_hash),
        block_number=receipt['blockNumber'],
        deployer=deployer.address,
        balance_before=balance,
        balance_after=new_balance,
    )

    logger.info(f"Contract: {result.contract_address}")
    logger.info(f"Hash: {result.transaction_hash}")
    logger.info(f"New balance: {format_balance(new_balance, remainder)}")
    return result


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Deploy the OXStadium contract")
    parser.add_argument('--network', choices=sorted(NETWORKS), default='testnet')
    return parser.parse_args(argv)


def run(network_name: str) -> int:
    """Deploy to `network_name`; returns the process exit code"""
    try:
        settings = load_settings(network_name)
        w3 = connect(settings.network)
        deploy_stadium(w3, settings)
    except (ConfigError, DeploymentError) as e:
        logger.error(f"Deployment failed: {e}")
        return 1
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        return 1
    return 0


def main(argv: Optional[List[str]] = None):
    setup_logging()
    args = parse_args(argv)
    sys.exit(run(args.network))


if __name__ == "__main__":
    main()
