"""Deploy and move Axelar interchain tokens from the command line."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from enum import Enum
from typing import Optional, Sequence

from dotenv import load_dotenv

from contract_proxy import (
    ContractProxy,
    bind_contract,
    connect_web3,
    load_signer,
    verify_chain_id,
)
from exceptions import InterchainTokenError, UnknownOperationError
from gas_estimator import GasEstimator
from interchain_abis import (
    INTERCHAIN_TOKEN_ABI,
    INTERCHAIN_TOKEN_FACTORY_ABI,
    INTERCHAIN_TOKEN_SERVICE_ABI,
)
from settings import (
    InterchainConfig,
    load_interchain_config,
    load_network_config,
    parse_amount,
    parse_hex_data,
    parse_salt,
)
from token_operations import TokenOperations


FUNCTION_NAME_ENV = "FUNCTION_NAME"


class Operation(Enum):
    DEPLOY = "Deploy"
    DEPLOY_REMOTE = "DeployRemote"
    TRANSFER = "Transfer"

    @classmethod
    def from_name(cls, name: Optional[str]) -> "Operation":
        """Resolve an operation from its enum name, display name or legacy alias."""

        if not name:
            raise UnknownOperationError("No operation given.")
        key = name.strip().replace("-", "_").lower()
        for alias, operation in _ALIASES.items():
            if alias.lower() == key:
                return operation
        for operation in cls:
            if key in (operation.name.lower(), operation.value.lower()):
                return operation
        raise UnknownOperationError(f"Unknown function: {name}")


_ALIASES = {
    "registerAndDeploy": Operation.DEPLOY,
    "deployToRemoteChain": Operation.DEPLOY_REMOTE,
    "transferTokens": Operation.TRANSFER,
}


async def dispatch(operation: Operation, operations: TokenOperations, **inputs):
    """Run exactly one operation and return its report."""

    if operation is Operation.DEPLOY:
        return await operations.deploy()
    if operation is Operation.DEPLOY_REMOTE:
        return await operations.deploy_remote(**inputs)
    if operation is Operation.TRANSFER:
        return await operations.transfer(**inputs)
    raise UnknownOperationError(f"Unknown function: {operation}")


def operation_inputs(operation: Operation, args: argparse.Namespace) -> dict:
    """Collect the CLI inputs relevant to ``operation``."""

    if operation is Operation.DEPLOY_REMOTE:
        return {
            "salt": parse_salt(args.salt) if args.salt else None,
            "destination_chain": args.destination_chain,
        }
    if operation is Operation.TRANSFER:
        return {
            "destination_chain": args.destination_chain,
            "recipient": args.recipient,
            "amount": parse_amount(args.amount) if args.amount else None,
            "data": parse_hex_data(args.data) if args.data is not None else None,
            "token_address": args.token_address,
        }
    return {}


async def run_operation(
    operation: Operation, config: InterchainConfig, inputs: dict
) -> str:
    """Wire the chain client, contracts and estimator, then run ``operation``."""

    network = load_network_config()
    signer = load_signer(network.private_key)
    w3 = connect_web3(network.rpc_url, timeout=network.timeout)
    try:
        await verify_chain_id(w3, network.chain_id)
        logging.info("Using signer %s on chain %s", signer.address, network.chain_id)

        def token_contract(address: str) -> ContractProxy:
            return bind_contract(w3, address, INTERCHAIN_TOKEN_ABI, signer)

        operations = TokenOperations(
            config=config,
            factory=bind_contract(
                w3, config.factory_address, INTERCHAIN_TOKEN_FACTORY_ABI, signer
            ),
            service=bind_contract(
                w3, config.service_address, INTERCHAIN_TOKEN_SERVICE_ABI, signer
            ),
            estimator=GasEstimator(config.gas_api_url, timeout=network.timeout),
            signer_address=signer.address,
            token_contract=token_contract,
        )
        report = await dispatch(operation, operations, **inputs)
    finally:
        await w3.provider.disconnect()
    return report.render()


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""

    parser = argparse.ArgumentParser(
        description=(
            "Deploy an interchain token, deploy it to a remote chain, or transfer it cross-chain."
        )
    )
    parser.add_argument(
        "operation",
        nargs="?",
        help=(
            "Deploy, DeployRemote or Transfer (legacy names registerAndDeploy, "
            f"deployToRemoteChain and transferTokens are accepted). Defaults to ${FUNCTION_NAME_ENV}."
        ),
    )
    parser.add_argument("--salt", help="Deploy salt used by DeployRemote.")
    parser.add_argument("--token-address", help="Interchain token used by Transfer.")
    parser.add_argument("--destination-chain", help="Axelar name of the destination chain.")
    parser.add_argument("--recipient", help="Recipient address on the destination chain.")
    parser.add_argument("--amount", help="Whole-token amount to transfer.")
    parser.add_argument("--data", help="Hex call data attached to the transfer.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity level (default: INFO)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point; returns the process exit status."""

    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s | %(levelname)s | %(message)s",
    )
    load_dotenv()

    try:
        operation = Operation.from_name(args.operation or os.environ.get(FUNCTION_NAME_ENV))
    except UnknownOperationError as exc:
        logging.error("%s", exc)
        return 1

    try:
        config = load_interchain_config()
        inputs = operation_inputs(operation, args)
        report = asyncio.run(run_operation(operation, config, inputs))
    except InterchainTokenError:
        logging.exception("%s aborted.", operation.value)
        return 1
    except Exception:
        logging.exception("Unexpected error during %s.", operation.value)
        return 1

    print(report)
    return 0


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
