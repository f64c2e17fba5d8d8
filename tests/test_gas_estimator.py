"""Tests for the Axelarscan gas fee adapter."""

import unittest
from unittest import mock

import requests

from exceptions import EstimationError
from gas_estimator import AXELAR_API_URLS, GasEstimator


def _response(payload=None, error=None):
    response = mock.MagicMock()
    if error is not None:
        response.raise_for_status.side_effect = error
    response.json.return_value = payload
    return response


class GasEstimatorTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self.session = mock.MagicMock()
        self.estimator = GasEstimator(
            AXELAR_API_URLS["testnet"] + "/", session=self.session, timeout=5
        )

    async def _estimate(self):
        return await self.estimator.estimate("Fantom", "Polygon", "FTM", 7_000_000, 1.1)

    async def test_posts_single_request_and_parses_fee(self) -> None:
        self.session.post.return_value = _response("81373042580000000")

        fee = await self._estimate()

        self.assertEqual(fee, 81373042580000000)
        self.session.post.assert_called_once_with(
            "https://testnet.api.axelarscan.io/gmp/estimateGasFee",
            json={
                "sourceChain": "Fantom",
                "destinationChain": "Polygon",
                "sourceTokenSymbol": "FTM",
                "gasLimit": "7000000",
                "gasMultiplier": 1.1,
            },
            headers={"accept": "application/json"},
            timeout=5,
        )

    async def test_fee_nested_in_object(self) -> None:
        for payload in ({"fee": 42}, {"result": "42"}, {"data": {"fee": "42"}}):
            with self.subTest(payload=payload):
                self.session.post.return_value = _response(payload)
                self.assertEqual(await self._estimate(), 42)

    async def test_invalid_values_raise(self) -> None:
        for payload in ("abc", "0", "0.5", -5, None, True, [], {"message": "not found"}, "NaN"):
            with self.subTest(payload=payload):
                self.session.post.return_value = _response(payload)
                with self.assertRaises(EstimationError):
                    await self._estimate()

    async def test_transport_failures_raise(self) -> None:
        self.session.post.side_effect = requests.ConnectionError("unreachable")
        with self.assertRaises(EstimationError):
            await self._estimate()

        self.session.post.side_effect = None
        self.session.post.return_value = _response(error=requests.HTTPError("500"))
        with self.assertRaises(EstimationError):
            await self._estimate()

        response = _response()
        response.json.side_effect = ValueError("no JSON")
        self.session.post.return_value = response
        with self.assertRaises(EstimationError):
            await self._estimate()

    async def test_invalid_inputs_make_no_request(self) -> None:
        with self.assertRaises(EstimationError):
            await self.estimator.estimate("Fantom", "Polygon", "FTM", 0, 1.1)
        with self.assertRaises(EstimationError):
            await self.estimator.estimate("Fantom", "Polygon", "FTM", 7_000_000, 0)
        with self.assertRaises(EstimationError):
            await self.estimator.estimate("Fantom", "Polygon", "FTM", 7_000_000, float("nan"))
        self.session.post.assert_not_called()

    def test_requires_api_url(self) -> None:
        with self.assertRaises(EstimationError):
            GasEstimator("")


if __name__ == "__main__":
    unittest.main()
