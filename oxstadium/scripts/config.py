"""
Network presets and environment configuration for deployments
"""

import os
from dataclasses import dataclass
from typing import Dict

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

DEFAULT_ARTIFACT_PATH = os.path.join("artifacts", "contracts", "OXStadium.sol", "OXStadium.json")


class ConfigError(Exception):
    """Missing or invalid deployment settings"""


@dataclass
class NetworkConfig:
    """Where to deploy and what to pass to the OXStadium constructor"""
    name: str
    rpc_url: str
    chain_id: int
    token_address: str
    base_uri: str


NETWORKS: Dict[str, NetworkConfig] = {
    "mainnet": NetworkConfig(
        name="mainnet",
        rpc_url="https://bsc-dataseed.binance.org/",
        chain_id=56,
        token_address="0xbb4CdB9CBd36B01bD1cBaEBF2De08d9173bc095c",
        base_uri="https://oxstadiums.s3.amazonaws.com/",
    ),
    "testnet": NetworkConfig(
        name="testnet",
        rpc_url="https://data-seed-prebsc-1-s1.binance.org:8545/",
        chain_id=97,
        token_address="0xDd946a5C1dA0C727D4b748270aE1b59aa5f8c8A8",
        base_uri="https://oxstadiums-test.s3.amazonaws.com/",
    ),
}


@dataclass
class DeploySettings:
    network: NetworkConfig
    private_key: str
    artifact_path: str
    gas: int
    receipt_timeout: int


def get_network(name: str) -> NetworkConfig:
    """Return the preset for `name`, with its RPC URL overridable via <NAME>_RPC_URL"""
    try:
        preset = NETWORKS[name]
    except KeyError:
        raise ConfigError(f"Unknown network '{name}', expected one of: {', '.join(NETWORKS)}")
    rpc_url = os.getenv(f"{name.upper()}_RPC_URL", preset.rpc_url)
    return NetworkConfig(
        name=preset.name,
        rpc_url=rpc_url,
        chain_id=preset.chain_id,
        token_address=preset.token_address,
        base_uri=preset.base_uri,
    )


def load_settings(network_name: str) -> DeploySettings:
    network = get_network(network_name)

    private_key = os.getenv("PRIVATE_KEY")
    if not private_key:
        raise ConfigError("PRIVATE_KEY not found in environment")

    try:
        gas = int(os.getenv("DEPLOY_GAS", "6000000"))
        receipt_timeout = int(os.getenv("RECEIPT_TIMEOUT", "300"))
    except ValueError as e:
        raise ConfigError(f"Invalid numeric setting: {e}")

    return DeploySettings(
        network=network,
        private_key=private_key,
        artifact_path=os.getenv("ARTIFACT_PATH", DEFAULT_ARTIFACT_PATH),
        gas=gas,
        receipt_timeout=receipt_timeout,
    )
