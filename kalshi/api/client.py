"""Kalshi API client with request signing and portfolio helpers."""

from typing import Any, Optional, TYPE_CHECKING
import logging
import time

import requests

from .gate import TradingGate
from .errors import TransportError
from .signer import RequestSigner

if TYPE_CHECKING:
    from config import KalshiConfig


logger = logging.getLogger(__name__)


ORDER_SIDES = ("yes", "no")


class KalshiClient:
    """
    Main client for interacting with the Kalshi API.

    Every call is signed, sent once, and either returns the decoded body or
    raises. Failures are logged and re-raised; nothing is retried.
    """

    def __init__(
        self,
        config: "KalshiConfig",
        session: Optional[requests.Session] = None,
        signer: Optional[RequestSigner] = None,
        gate: Optional[TradingGate] = None,
    ):
        self.config = config
        self.base_url = config.base_url.rstrip("/")
        self.api_prefix = config.api_prefix
        self.signer = signer or RequestSigner(config.api_key_id, config.private_key_pem)
        self.gate = gate or TradingGate(config.trading_enabled)
        self.session = session or requests.Session()

        logger.info(f"Kalshi API initialized with API Key ID: {config.api_key_id[:8]}...")

    def _request(
        self,
        method: str,
        endpoint: str,
        params: Optional[dict] = None,
        data: Optional[dict] = None,
    ) -> Any:
        """Make an authenticated request to the API."""
        path = f"{self.api_prefix}{endpoint}"
        url = f"{self.base_url}{path}"
        headers = self.signer.headers(method, path)

        try:
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=data,
                headers=headers,
            )
            response.raise_for_status()
        except requests.HTTPError as e:
            detail = _response_detail(e.response)
            status = e.response.status_code if e.response is not None else None
            logger.error(f"{method} {path} failed ({status}): {detail}")
            raise TransportError(
                f"{method} {path} failed with status {status}",
                status_code=status,
                detail=detail,
            ) from e
        except requests.RequestException as e:
            logger.error(f"{method} {path} failed: {e}")
            raise TransportError(f"{method} {path} failed: {e}") from e

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"{method} {path} returned a non-JSON body")
            raise TransportError(
                f"{method} {path} returned invalid JSON",
                status_code=response.status_code,
                detail=response.text,
            ) from e

    def get(self, endpoint: str, params: Optional[dict] = None) -> Any:
        """Make a GET request."""
        return self._request("GET", endpoint, params=params)

    def post(self, endpoint: str, data: Optional[dict] = None) -> Any:
        """Make a POST request."""
        return self._request("POST", endpoint, data=data)

    def delete(self, endpoint: str, data: Optional[dict] = None) -> Any:
        """Make a DELETE request."""
        return self._request("DELETE", endpoint, data=data)

    def test_connection(self) -> bool:
        """Check credentials by fetching the account balance."""
        logger.info("Testing Kalshi API connection...")
        try:
            balance = self.get_balance()
        except Exception as e:
            logger.error(f"API connection failed: {e}")
            return False

        logger.info(f"API connection successful, balance: {balance}")
        return True

    # Market data

    def get_markets(
        self,
        limit: int = 1000,
        status: Optional[str] = "open",
        cursor: Optional[str] = None,
    ) -> dict:
        """Fetch one page of markets."""
        params = {"limit": limit}
        if status:
            params["status"] = status
        if cursor:
            params["cursor"] = cursor
        return self.get("/markets", params)

    def get_market(self, ticker: str) -> dict:
        """Fetch a single market by ticker."""
        return self.get(f"/markets/{ticker}")

    def get_orderbook(self, ticker: str, depth: int = 5) -> dict:
        """Fetch order book for a market."""
        return self.get(f"/markets/{ticker}/orderbook", {"depth": depth})

    # Portfolio

    def get_balance(self) -> dict:
        """Fetch account balance."""
        return self.get("/portfolio/balance")

    def create_order(self, order: dict) -> dict:
        """Submit an order payload as-is."""
        return self.post("/portfolio/orders", order)

    def get_orders(self, **params) -> dict:
        """List orders, passing filters through as query parameters."""
        return self.get("/portfolio/orders", params or None)

    def cancel_order(self, order_id: str) -> dict:
        """Cancel an order by id."""
        return self.delete(f"/portfolio/orders/{order_id}")

    def get_positions(self, **params) -> dict:
        """List positions, passing filters through as query parameters."""
        return self.get("/portfolio/positions", params or None)

    def buy_position(self, ticker: str, count: int, price: int, side: str = "yes") -> dict:
        """Place a limit buy order. Price is in cents."""
        self.gate.check("buy")
        order = build_limit_order("buy", ticker, count, price, side)
        logger.info(f"Creating BUY order for {count} contracts of {ticker} ({side}) at {price} cents")
        return self.create_order(order)

    def sell_position(self, ticker: str, count: int, price: int, side: str = "yes") -> dict:
        """Place a limit sell order. Price is in cents."""
        self.gate.check("sell")
        order = build_limit_order("sell", ticker, count, price, side)
        logger.info(f"Creating SELL order for {count} contracts of {ticker} ({side}) at {price} cents")
        return self.create_order(order)


def build_limit_order(
    action: str,
    ticker: str,
    count: int,
    price: int,
    side: str = "yes",
    now: Optional[float] = None,
) -> dict:
    """
    Build a limit order payload.

    The price goes on yes_price or no_price depending on side, and the
    client_order_id is derived from the current time in milliseconds.
    """
    if side not in ORDER_SIDES:
        raise ValueError(f"side must be one of {ORDER_SIDES}, got {side!r}")

    timestamp_ms = int((now if now is not None else time.time()) * 1000)
    return {
        "action": action,
        "client_order_id": f"{action}_{timestamp_ms}",
        "count": count,
        "side": side,
        "ticker": ticker,
        "type": "limit",
        f"{side}_price": price,
    }


def _response_detail(response: Optional[requests.Response]) -> Any:
    """Best-effort body of an error response."""
    if response is None:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text
