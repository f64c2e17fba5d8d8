"""Configuration for the interchain token operations.

Values come from the process environment, after a local ``.env`` file has been
loaded with python-dotenv. Command-line flags may override individual fields.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Mapping, Optional

from dotenv import load_dotenv
from hexbytes import HexBytes

from exceptions import ConfigurationError
from gas_estimator import AXELAR_API_URLS


DEFAULT_RPC_URL = "https://rpc.ankr.com/fantom_testnet"
DEFAULT_CHAIN_ID = 4002
INTERCHAIN_TOKEN_SERVICE_ADDRESS = "0xB5FB4BE02232B1bBA4dC8f81dc24C26980dE9e3C"
INTERCHAIN_TOKEN_FACTORY_ADDRESS = "0x83a93500d23Fbc3e82B410aD07A6a9F7A0670D66"


@dataclass(frozen=True)
class NetworkConfig:
    """RPC endpoint and signing credential."""

    rpc_url: str
    chain_id: int
    private_key: str
    timeout: float = 30


@dataclass(frozen=True)
class TokenConfig:
    """Metadata of the token created by the deploy operation."""

    name: str = "My Interchain Token"
    symbol: str = "MIT"
    decimals: int = 18
    initial_supply: Decimal = Decimal("1000000")


@dataclass(frozen=True)
class InterchainConfig:
    """Contract addresses, chains and operation inputs."""

    service_address: str = INTERCHAIN_TOKEN_SERVICE_ADDRESS
    factory_address: str = INTERCHAIN_TOKEN_FACTORY_ADDRESS
    token: TokenConfig = TokenConfig()
    source_chain: str = "Fantom"
    destination_chain: str = "Polygon"
    gas_token: str = "FTM"
    gas_limit: int = 7_000_000
    gas_multiplier: float = 1.1
    gas_api_url: str = AXELAR_API_URLS["testnet"]
    salt: Optional[HexBytes] = None
    token_address: Optional[str] = None
    recipient: Optional[str] = None
    transfer_amount: Decimal = Decimal("100")
    transfer_data: HexBytes = HexBytes(b"")


def parse_salt(value: str) -> HexBytes:
    """Parse a 32-byte hex salt."""

    try:
        salt = HexBytes(value)
    except (ValueError, TypeError) as exc:
        raise ConfigurationError(f"Salt is not valid hex: {value!r}") from exc
    if len(salt) != 32:
        raise ConfigurationError(f"Salt must be 32 bytes, got {len(salt)}.")
    return salt


def parse_hex_data(value: str) -> HexBytes:
    try:
        return HexBytes(value or "0x")
    except (ValueError, TypeError) as exc:
        raise ConfigurationError(f"Call data is not valid hex: {value!r}") from exc


def parse_amount(value: str) -> Decimal:
    try:
        amount = Decimal(str(value))
    except InvalidOperation as exc:
        raise ConfigurationError(f"Invalid token amount: {value!r}") from exc
    if not amount.is_finite() or amount <= 0:
        raise ConfigurationError(f"Token amount must be positive, got {value!r}")
    return amount


def parse_units(amount: Decimal, decimals: int) -> int:
    """Scale a whole-token amount to the token's smallest unit."""

    scaled = Decimal(amount).scaleb(decimals)
    if scaled != scaled.to_integral_value():
        raise ConfigurationError(
            f"Amount {amount} has more precision than {decimals} decimals."
        )
    return int(scaled)


def format_units(amount: int, decimals: int) -> str:
    return f"{Decimal(amount).scaleb(-decimals).normalize():f}"


def _int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw in (None, ""):
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}") from exc


def _float(env: Mapping[str, str], key: str, default: float) -> float:
    raw = env.get(key)
    if raw in (None, ""):
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{key} must be a number, got {raw!r}") from exc
    if not math.isfinite(value):
        raise ConfigurationError(f"{key} must be finite, got {raw!r}")
    return value


def resolve_gas_api_url(env: Mapping[str, str]) -> str:
    explicit = env.get("AXELAR_API_URL")
    if explicit:
        return explicit
    environment = env.get("AXELAR_ENVIRONMENT", "testnet").lower()
    try:
        return AXELAR_API_URLS[environment]
    except KeyError as exc:
        raise ConfigurationError(
            f"Unknown AXELAR_ENVIRONMENT '{environment}'; "
            f"expected one of {sorted(AXELAR_API_URLS)}."
        ) from exc


def load_network_config(env: Optional[Mapping[str, str]] = None) -> NetworkConfig:
    """Read the RPC endpoint and signing key."""

    if env is None:
        load_dotenv()
        env = os.environ

    private_key = env.get("PRIVATE_KEY")
    if not private_key:
        raise ConfigurationError("PRIVATE_KEY is not set in the environment or .env file.")

    return NetworkConfig(
        rpc_url=env.get("RPC_URL") or DEFAULT_RPC_URL,
        chain_id=_int(env, "CHAIN_ID", DEFAULT_CHAIN_ID),
        private_key=private_key,
        timeout=_float(env, "RPC_TIMEOUT", 30),
    )


def load_interchain_config(env: Optional[Mapping[str, str]] = None) -> InterchainConfig:
    """Read contract addresses, token metadata and operation inputs."""

    if env is None:
        load_dotenv()
        env = os.environ

    defaults = InterchainConfig()
    token = TokenConfig(
        name=env.get("TOKEN_NAME") or defaults.token.name,
        symbol=env.get("TOKEN_SYMBOL") or defaults.token.symbol,
        decimals=_int(env, "TOKEN_DECIMALS", defaults.token.decimals),
        initial_supply=(
            parse_amount(env["TOKEN_INITIAL_SUPPLY"])
            if env.get("TOKEN_INITIAL_SUPPLY")
            else defaults.token.initial_supply
        ),
    )
    if not 0 <= token.decimals <= 255:
        raise ConfigurationError(f"TOKEN_DECIMALS out of range: {token.decimals}")

    return InterchainConfig(
        service_address=env.get("ITS_ADDRESS") or defaults.service_address,
        factory_address=env.get("ITS_FACTORY_ADDRESS") or defaults.factory_address,
        token=token,
        source_chain=env.get("SOURCE_CHAIN") or defaults.source_chain,
        destination_chain=env.get("DESTINATION_CHAIN") or defaults.destination_chain,
        gas_token=env.get("GAS_TOKEN") or defaults.gas_token,
        gas_limit=_int(env, "GAS_LIMIT", defaults.gas_limit),
        gas_multiplier=_float(env, "GAS_MULTIPLIER", defaults.gas_multiplier),
        gas_api_url=resolve_gas_api_url(env),
        salt=parse_salt(env["DEPLOY_SALT"]) if env.get("DEPLOY_SALT") else None,
        token_address=env.get("TOKEN_ADDRESS") or None,
        recipient=env.get("TRANSFER_RECIPIENT") or None,
        transfer_amount=(
            parse_amount(env["TRANSFER_AMOUNT"])
            if env.get("TRANSFER_AMOUNT")
            else defaults.transfer_amount
        ),
        transfer_data=parse_hex_data(env.get("TRANSFER_DATA", "0x")),
    )
