"""Cross-chain gas fee estimation through the Axelarscan GMP API."""

from __future__ import annotations

import asyncio
import logging
import math
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

import requests

from exceptions import EstimationError


AXELAR_API_URLS = {
    "testnet": "https://testnet.api.axelarscan.io",
    "mainnet": "https://api.axelarscan.io",
}
ESTIMATE_GAS_FEE_PATH = "/gmp/estimateGasFee"
_FEE_KEYS = ("fee", "result", "data")


def _parse_fee(payload: Any) -> int:
    """Extract a positive integer fee from an API response body."""

    if isinstance(payload, dict):
        for key in _FEE_KEYS:
            if key in payload:
                return _parse_fee(payload[key])
        raise EstimationError(f"Gas fee missing from estimator response: {payload}")
    if isinstance(payload, bool) or not isinstance(payload, (int, float, str)):
        raise EstimationError(f"Unexpected estimator response: {payload!r}")

    try:
        fee = Decimal(str(payload))
    except InvalidOperation as exc:
        raise EstimationError(f"Estimator returned a non-numeric fee: {payload!r}") from exc
    if not fee.is_finite() or int(fee) <= 0:
        raise EstimationError(f"Estimator returned an invalid fee: {payload!r}")
    return int(fee)


class GasEstimator:
    """Estimate the native-currency fee for a cross-chain message."""

    def __init__(
        self,
        api_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 30,
    ) -> None:
        if not api_url:
            raise EstimationError("Gas estimation API URL is not configured.")
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    def _request(self, body: dict) -> Any:
        try:
            response = self._session.post(
                f"{self.api_url}{ESTIMATE_GAS_FEE_PATH}",
                json=body,
                headers={"accept": "application/json"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response.json()
        except requests.RequestException as exc:
            raise EstimationError(f"Gas estimation request failed: {exc}") from exc
        except ValueError as exc:
            raise EstimationError("Gas estimator returned invalid JSON.") from exc

    async def estimate(
        self,
        source_chain: str,
        destination_chain: str,
        token: str,
        gas_limit: int,
        multiplier: float,
    ) -> int:
        """Return the fee, in the source chain's smallest unit, for one message."""

        if isinstance(gas_limit, bool) or not isinstance(gas_limit, int) or gas_limit <= 0:
            raise EstimationError(f"Gas limit must be a positive integer, got {gas_limit!r}")
        if not math.isfinite(multiplier) or multiplier <= 0:
            raise EstimationError(f"Gas multiplier must be positive, got {multiplier!r}")

        body = {
            "sourceChain": source_chain,
            "destinationChain": destination_chain,
            "sourceTokenSymbol": token,
            "gasLimit": str(gas_limit),
            "gasMultiplier": multiplier,
        }
        payload = await asyncio.to_thread(self._request, body)
        fee = _parse_fee(payload)
        logging.info(
            "Estimated gas fee %s -> %s: %s (%s)",
            source_chain,
            destination_chain,
            fee,
            token,
        )
        return fee
