"""Tests for environment-driven configuration."""

import unittest
from decimal import Decimal

from hexbytes import HexBytes

from exceptions import ConfigurationError
from settings import (
    DEFAULT_CHAIN_ID,
    DEFAULT_RPC_URL,
    INTERCHAIN_TOKEN_FACTORY_ADDRESS,
    format_units,
    load_interchain_config,
    load_network_config,
    parse_salt,
    parse_units,
)


class SettingsTests(unittest.TestCase):
    def test_defaults(self) -> None:
        config = load_interchain_config({})

        self.assertEqual(config.factory_address, INTERCHAIN_TOKEN_FACTORY_ADDRESS)
        self.assertEqual(config.token.symbol, "MIT")
        self.assertEqual(config.token.initial_supply, Decimal("1000000"))
        self.assertEqual((config.source_chain, config.destination_chain), ("Fantom", "Polygon"))
        self.assertEqual(config.gas_limit, 7_000_000)
        self.assertEqual(config.gas_api_url, "https://testnet.api.axelarscan.io")
        self.assertIsNone(config.salt)
        self.assertEqual(config.transfer_data, HexBytes(b""))

    def test_environment_overrides(self) -> None:
        config = load_interchain_config(
            {
                "TOKEN_NAME": "Other",
                "TOKEN_DECIMALS": "6",
                "GAS_MULTIPLIER": "1.5",
                "AXELAR_ENVIRONMENT": "mainnet",
                "DEPLOY_SALT": "0x" + "ab" * 32,
                "TRANSFER_AMOUNT": "2.5",
                "TRANSFER_DATA": "0xbeef",
            }
        )

        self.assertEqual(config.token.name, "Other")
        self.assertEqual(config.token.decimals, 6)
        self.assertEqual(config.gas_multiplier, 1.5)
        self.assertEqual(config.gas_api_url, "https://api.axelarscan.io")
        self.assertEqual(config.salt, HexBytes("0x" + "ab" * 32))
        self.assertEqual(config.transfer_amount, Decimal("2.5"))
        self.assertEqual(config.transfer_data, HexBytes("0xbeef"))

    def test_explicit_api_url_wins(self) -> None:
        config = load_interchain_config(
            {"AXELAR_ENVIRONMENT": "mainnet", "AXELAR_API_URL": "http://localhost:8080"}
        )
        self.assertEqual(config.gas_api_url, "http://localhost:8080")

    def test_invalid_values(self) -> None:
        bad_envs = (
            {"GAS_LIMIT": "lots"},
            {"TOKEN_DECIMALS": "300"},
            {"AXELAR_ENVIRONMENT": "devnet"},
            {"DEPLOY_SALT": "0x1234"},
            {"TRANSFER_AMOUNT": "-1"},
            {"TRANSFER_DATA": "0xzz"},
            {"GAS_MULTIPLIER": "nan"},
        )
        for env in bad_envs:
            with self.subTest(env=env):
                with self.assertRaises(ConfigurationError):
                    load_interchain_config(env)

    def test_network_config(self) -> None:
        with self.assertRaises(ConfigurationError):
            load_network_config({})

        network = load_network_config({"PRIVATE_KEY": "0x" + "11" * 32})
        self.assertEqual(network.rpc_url, DEFAULT_RPC_URL)
        self.assertEqual(network.chain_id, DEFAULT_CHAIN_ID)
        with self.assertRaises(ConfigurationError):
            load_network_config({"PRIVATE_KEY": "0x" + "11" * 32, "RPC_TIMEOUT": "inf"})

    def test_units(self) -> None:
        self.assertEqual(parse_units(Decimal("1000000"), 18), 10**24)
        self.assertEqual(parse_units(Decimal("0.000001"), 6), 1)
        with self.assertRaises(ConfigurationError):
            parse_units(Decimal("0.0000001"), 6)
        self.assertEqual(format_units(2500000, 6), "2.5")
        self.assertEqual(format_units(10**20, 18), "100")
        with self.assertRaises(ConfigurationError):
            parse_salt("not hex")


if __name__ == "__main__":
    unittest.main()
