"""Async contract handles bound to a local signer."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import AsyncHTTPProvider, AsyncWeb3, Web3
from web3.middleware import ExtraDataToPOAMiddleware

from exceptions import ConfigurationError, RemoteCallError


@dataclass(frozen=True)
class SubmittedTransaction:
    """A broadcast transaction; no receipt is awaited."""

    hash: str


def checksum(address: str) -> str:
    """Return a checksum address."""

    if not address:
        raise ConfigurationError("Missing address while computing checksum.")
    try:
        return Web3.to_checksum_address(address)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid address: {address}") from exc


def connect_web3(rpc_url: str, timeout: float = 30) -> AsyncWeb3:
    """Create an async Web3 connection with POA-compatible middleware."""

    if not rpc_url:
        raise ConfigurationError("Missing RPC URL.")
    provider = AsyncHTTPProvider(rpc_url, request_kwargs={"timeout": timeout})
    w3 = AsyncWeb3(provider)
    w3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)
    return w3


async def verify_chain_id(w3: AsyncWeb3, expected_chain_id: int) -> None:
    """Ensure the RPC endpoint serves the configured chain."""

    try:
        chain_id = await w3.eth.chain_id
    except Exception as exc:
        raise RemoteCallError(f"Could not read chain id from RPC endpoint: {exc}") from exc
    if chain_id != expected_chain_id:
        raise ConfigurationError(
            f"RPC endpoint reports chain id {chain_id}, expected {expected_chain_id}."
        )


def load_signer(private_key: str) -> LocalAccount:
    """Build the local signing account from a hex private key."""

    if not private_key:
        raise ConfigurationError("PRIVATE_KEY is not set.")
    try:
        return Account.from_key(private_key)
    except (ValueError, TypeError) as exc:
        raise ConfigurationError("PRIVATE_KEY is not a valid private key.") from exc


class ContractProxy:
    """Invoke methods of one deployed contract through an async Web3 client.

    Read-only methods go through ``call`` and return the decoded result.
    State-changing methods go through ``transact``; the transaction is signed
    locally by ``signer`` and broadcast, and a :class:`SubmittedTransaction`
    is returned without waiting for inclusion.

    Every failure of the underlying client surfaces as :class:`RemoteCallError`.
    """

    def __init__(
        self, w3: AsyncWeb3, address: str, abi: list, signer: LocalAccount
    ) -> None:
        self._w3 = w3
        self.address = checksum(address)
        self.signer = signer
        self._methods = frozenset(
            entry["name"] for entry in abi if entry.get("type") == "function"
        )
        self._contract = w3.eth.contract(address=self.address, abi=abi)

    def _function(self, method: str, args: tuple) -> Any:
        if method not in self._methods:
            raise RemoteCallError(
                f"Contract {self.address} has no method '{method}' in its ABI."
            )
        return getattr(self._contract.functions, method)(*args)

    async def call(self, method: str, *args: Any) -> Any:
        function = self._function(method, args)
        try:
            return await function.call({"from": self.signer.address})
        except Exception as exc:
            raise RemoteCallError(
                f"Call to {method} on {self.address} failed: {exc}"
            ) from exc

    async def transact(
        self, method: str, *args: Any, value: int = 0
    ) -> SubmittedTransaction:
        function = self._function(method, args)
        sender = self.signer.address
        try:
            nonce = await self._w3.eth.get_transaction_count(sender, "pending")
            chain_id = await self._w3.eth.chain_id
            tx_payload = await function.build_transaction(
                {
                    "from": sender,
                    "nonce": nonce,
                    "value": value,
                    "chainId": chain_id,
                }
            )
            signed_tx = self.signer.sign_transaction(tx_payload)
            tx_hash = await self._w3.eth.send_raw_transaction(
                signed_tx.raw_transaction
            )
        except Exception as exc:
            raise RemoteCallError(
                f"Transaction {method} on {self.address} failed: {exc}"
            ) from exc

        submitted = SubmittedTransaction(hash=Web3.to_hex(tx_hash))
        logging.info("Submitted %s transaction %s", method, submitted.hash)
        return submitted


def bind_contract(
    w3: AsyncWeb3, address: Optional[str], abi: list, signer: LocalAccount
) -> ContractProxy:
    """Return a proxy for ``address``, failing early if it is not configured."""

    if not address:
        raise ConfigurationError("Contract address is not configured.")
    return ContractProxy(w3, address, abi, signer)
