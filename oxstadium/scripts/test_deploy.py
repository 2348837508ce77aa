#!/usr/bin/env python3
"""
Tests for the OXStadium deployment script
Web3 is replaced with mocks; no network access is needed
"""

import json
import logging

import pytest
from hexbytes import HexBytes
from unittest.mock import MagicMock, patch
from web3 import Web3

from .config import DeploySettings, get_network
from .deploy import (
    DeploymentError,
    deploy_stadium,
    format_balance,
    load_artifact,
    parse_args,
    run,
)

DEPLOYER = "0x5B38Da6a701c568545dCfcB03FcB875f56beddC4"
CONTRACT = "0xd9145CCE52D386f254917e481eB44e9943F39138"
TX_HASH = HexBytes("0x" + "ab" * 32)
ABI = [{"type": "constructor", "inputs": []}]


@pytest.fixture
def artifact_path(tmp_path):
    path = tmp_path / "OXStadium.json"
    path.write_text(json.dumps({"abi": ABI, "bytecode": "0x6080"}))
    return str(path)


@pytest.fixture
def settings(artifact_path):
    return DeploySettings(
        network=get_network("testnet"),
        private_key="0x" + "11" * 32,
        artifact_path=artifact_path,
        gas=6000000,
        receipt_timeout=300,
    )


@pytest.fixture
def w3():
    """A Web3 mock on BSC testnet whose deployment succeeds"""
    w3 = MagicMock()
    w3.eth.chain_id = 97
    w3.eth.gas_price = 10 ** 10
    w3.eth.account.from_key.return_value.address = DEPLOYER
    w3.eth.get_balance.side_effect = [Web3.to_wei("1.23456789", "ether"), Web3.to_wei("1.2", "ether")]
    w3.eth.get_transaction_count.return_value = 7
    w3.eth.send_raw_transaction.return_value = TX_HASH
    w3.eth.wait_for_transaction_receipt.return_value = {
        "status": 1,
        "contractAddress": CONTRACT,
        "blockNumber": 42,
    }
    return w3


class TestFormatBalance:
    """Balances are rounded down to 4 decimals"""

    def test_rounds_down(self):
        assert format_balance(Web3.to_wei("1.23456789", "ether")) == "1.2345"

    def test_exact_value(self):
        assert format_balance(Web3.to_wei("9971.9", "ether")) == "9971.9"

    def test_dust_is_zero(self):
        assert format_balance(10 ** 13) == "0"

    def test_explicit_remainder(self):
        before = Web3.to_wei("1.23456789", "ether")
        after = Web3.to_wei("1.2", "ether")

        assert format_balance(after, before % 10 ** 14) == "1.19993211"


class TestLoadArtifact:
    """Reading compiled contract artifacts"""

    def test_load(self, artifact_path):
        abi, bytecode = load_artifact(artifact_path)

        assert abi == ABI
        assert bytecode == "0x6080"

    def test_missing_file(self, tmp_path):
        with pytest.raises(DeploymentError, match="compile the contracts first"):
            load_artifact(str(tmp_path / "missing.json"))

    def test_missing_bytecode(self, tmp_path):
        path = tmp_path / "OXStadium.json"
        path.write_text(json.dumps({"abi": ABI}))

        with pytest.raises(DeploymentError, match="bytecode"):
            load_artifact(str(path))

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "OXStadium.json"
        path.write_text("{not json")

        with pytest.raises(DeploymentError, match="not valid JSON"):
            load_artifact(str(path))


class TestDeployStadium:
    """Deployment flow against a mocked node"""

    def test_deploy(self, w3, settings, caplog):
        caplog.set_level(logging.INFO)

        result = deploy_stadium(w3, settings)

        assert result.contract_address == CONTRACT
        assert result.transaction_hash == "0x" + "ab" * 32
        assert result.block_number == 42
        assert result.deployer == DEPLOYER

        w3.eth.contract.assert_called_once_with(abi=ABI, bytecode="0x6080")
        w3.eth.contract.return_value.constructor.assert_called_once_with(
            Web3.to_checksum_address("0xDd946a5C1dA0C727D4b748270aE1b59aa5f8c8A8"),
            "https://oxstadiums-test.s3.amazonaws.com/",
        )
        tx_params = w3.eth.contract.return_value.constructor.return_value.build_transaction.call_args[0][0]
        assert tx_params["from"] == DEPLOYER
        assert tx_params["nonce"] == 7
        assert tx_params["gas"] == 6000000
        assert tx_params["chainId"] == 97
        w3.eth.wait_for_transaction_receipt.assert_called_once_with(TX_HASH, timeout=300)

        messages = [record.getMessage() for record in caplog.records]
        assert f"Deploying contracts with the account: {DEPLOYER}" in messages
        assert "Account balance: 1.2345" in messages
        assert f"Contract: {CONTRACT}" in messages
        assert f"Hash: 0x{'ab' * 32}" in messages
        assert "New balance: 1.19993211" in messages

    def test_wrong_chain(self, w3, settings):
        w3.eth.chain_id = 56

        with pytest.raises(DeploymentError, match="expected 97"):
            deploy_stadium(w3, settings)

        w3.eth.send_raw_transaction.assert_not_called()

    def test_failed_receipt(self, w3, settings):
        w3.eth.wait_for_transaction_receipt.return_value = {"status": 0, "contractAddress": None, "blockNumber": 42}

        with pytest.raises(DeploymentError, match="failed"):
            deploy_stadium(w3, settings)


class TestRun:
    """Command line entry point"""

    def test_default_network(self):
        assert parse_args([]).network == "testnet"
        assert parse_args(["--network", "mainnet"]).network == "mainnet"

    def test_unknown_network_rejected(self):
        with pytest.raises(SystemExit):
            parse_args(["--network", "ropsten"])

    def test_run_success(self, w3, settings):
        with patch("oxstadium.scripts.deploy.load_settings", return_value=settings), \
                patch("oxstadium.scripts.deploy.connect", return_value=w3) as mock_connect:
            assert run("testnet") == 0

        mock_connect.assert_called_once_with(settings.network)

    def test_run_missing_private_key(self, monkeypatch, caplog):
        monkeypatch.delenv("PRIVATE_KEY", raising=False)

        assert run("testnet") == 1
        assert "PRIVATE_KEY not found" in caplog.text

    def test_run_connection_failure(self, settings, caplog):
        with patch("oxstadium.scripts.deploy.load_settings", return_value=settings), \
                patch("oxstadium.scripts.deploy.connect", side_effect=DeploymentError("Could not connect")):
            assert run("testnet") == 1

        assert "Could not connect" in caplog.text


if __name__ == "__main__":
    pytest.main([__file__])
