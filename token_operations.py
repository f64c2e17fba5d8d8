"""Deploy, remote-deploy and transfer interchain tokens."""

from __future__ import annotations

import asyncio
import logging
import secrets
from dataclasses import dataclass
from typing import Callable, Optional

from hexbytes import HexBytes
from web3 import Web3

from contract_proxy import ContractProxy, checksum
from exceptions import ConfigurationError
from gas_estimator import GasEstimator
from settings import InterchainConfig, format_units, parse_units


SALT_SIZE = 32


def random_salt() -> HexBytes:
    """Return a fresh salt from a cryptographically secure source."""

    return HexBytes(secrets.token_bytes(SALT_SIZE))


@dataclass(frozen=True)
class DeployReport:
    token_id: str
    token_address: str
    transaction_hash: str
    salt: str
    token_manager_address: str

    def render(self) -> str:
        return (
            f"Deployed Token ID: {self.token_id}\n"
            f"Token Address: {self.token_address}\n"
            f"Transaction Hash: {self.transaction_hash}\n"
            f"Salt: {self.salt}\n"
            f"Expected Token Manager Address: {self.token_manager_address}"
        )


@dataclass(frozen=True)
class RemoteDeployReport:
    transaction_hash: str
    destination_chain: str
    gas_fee: int

    def render(self) -> str:
        return (
            f"Remote deployment to {self.destination_chain} requested\n"
            f"Transaction Hash: {self.transaction_hash}\n"
            f"Gas Fee (wei): {self.gas_fee}"
        )


@dataclass(frozen=True)
class TransferReport:
    transaction_hash: str
    destination_chain: str
    recipient: str
    amount: str
    gas_fee: int

    def render(self) -> str:
        return (
            f"Transferred {self.amount} to {self.recipient} on {self.destination_chain}\n"
            f"Transfer Transaction Hash: {self.transaction_hash}\n"
            f"Gas Fee (wei): {self.gas_fee}"
        )


class TokenOperations:
    """The three interchain token operations over shared contract handles.

    ``token_contract`` builds the proxy for an already deployed token and is
    only used by :meth:`transfer`.
    """

    def __init__(
        self,
        config: InterchainConfig,
        factory: ContractProxy,
        service: ContractProxy,
        estimator: GasEstimator,
        signer_address: str,
        token_contract: Optional[Callable[[str], ContractProxy]] = None,
        salt_provider: Callable[[], HexBytes] = random_salt,
    ) -> None:
        self.config = config
        self.factory = factory
        self.service = service
        self.estimator = estimator
        self.signer_address = signer_address
        self._token_contract = token_contract
        self._salt_provider = salt_provider

    async def _estimate_gas_fee(self, destination_chain: str) -> int:
        return await self.estimator.estimate(
            self.config.source_chain,
            destination_chain,
            self.config.gas_token,
            self.config.gas_limit,
            self.config.gas_multiplier,
        )

    async def deploy(self) -> DeployReport:
        """Register and deploy a new interchain token on the source chain."""

        token = self.config.token
        salt = self._salt_provider()
        logging.info("Generated deploy salt %s", Web3.to_hex(salt))

        token_id = await self.factory.call(
            "interchainTokenId", self.signer_address, salt
        )
        token_address, token_manager_address = await asyncio.gather(
            self.service.call("interchainTokenAddress", token_id),
            self.service.call("tokenManagerAddress", token_id),
        )

        deploy_tx = await self.factory.transact(
            "deployInterchainToken",
            salt,
            token.name,
            token.symbol,
            token.decimals,
            parse_units(token.initial_supply, token.decimals),
            self.signer_address,
        )

        return DeployReport(
            token_id=Web3.to_hex(token_id),
            token_address=token_address,
            transaction_hash=deploy_tx.hash,
            salt=Web3.to_hex(salt),
            token_manager_address=token_manager_address,
        )

    async def deploy_remote(
        self,
        salt: Optional[HexBytes] = None,
        destination_chain: Optional[str] = None,
    ) -> RemoteDeployReport:
        """Request deployment of an existing token on ``destination_chain``.

        The salt must be the one used by a previous :meth:`deploy`; it is not
        checked against on-chain state.
        """

        salt = salt if salt is not None else self.config.salt
        if salt is None:
            raise ConfigurationError(
                "A deploy salt is required for remote deployment (DEPLOY_SALT or --salt)."
            )
        destination_chain = destination_chain or self.config.destination_chain

        gas_fee = await self._estimate_gas_fee(destination_chain)
        remote_tx = await self.factory.transact(
            "deployRemoteInterchainToken",
            self.config.source_chain,
            HexBytes(salt),
            self.signer_address,
            destination_chain,
            gas_fee,
            value=gas_fee,
        )

        return RemoteDeployReport(
            transaction_hash=remote_tx.hash,
            destination_chain=destination_chain,
            gas_fee=gas_fee,
        )

    async def transfer(
        self,
        destination_chain: Optional[str] = None,
        recipient: Optional[str] = None,
        amount=None,
        data: Optional[HexBytes] = None,
        token_address: Optional[str] = None,
    ) -> TransferReport:
        """Send tokens to ``recipient`` on ``destination_chain``."""

        destination_chain = destination_chain or self.config.destination_chain
        recipient = recipient or self.config.recipient
        amount = amount if amount is not None else self.config.transfer_amount
        data = data if data is not None else self.config.transfer_data
        token_address = token_address or self.config.token_address

        if not recipient:
            raise ConfigurationError(
                "A transfer recipient is required (TRANSFER_RECIPIENT or --recipient)."
            )
        if not token_address:
            raise ConfigurationError(
                "A token address is required for transfers (TOKEN_ADDRESS or --token-address)."
            )
        if self._token_contract is None:
            raise ConfigurationError("No token contract binding configured for transfers.")

        recipient = checksum(recipient)
        token = self._token_contract(token_address)
        decimals = await token.call("decimals")
        amount_units = parse_units(amount, decimals)
        if amount_units <= 0:
            raise ConfigurationError(f"Transfer amount must be positive, got {amount}")

        gas_fee = await self._estimate_gas_fee(destination_chain)
        transfer_tx = await token.transact(
            "interchainTransfer",
            destination_chain,
            HexBytes(recipient),
            amount_units,
            HexBytes(data),
            value=gas_fee,
        )

        return TransferReport(
            transaction_hash=transfer_tx.hash,
            destination_chain=destination_chain,
            recipient=recipient,
            amount=format_units(amount_units, decimals),
            gas_fee=gas_fee,
        )
