"""RSA-PSS request signing for the Kalshi API."""

import base64
import logging
import time
from typing import Callable, Optional

from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from .errors import AuthenticationError, ConfigurationError


logger = logging.getLogger(__name__)


class RequestSigner:
    """
    Builds the authentication headers for a single request.

    The signature is computed over: timestamp + method + path, where the
    timestamp is epoch milliseconds and the path includes the API prefix
    but not the query string.
    """

    def __init__(
        self,
        api_key_id: str,
        private_key_pem: str,
        clock: Optional[Callable[[], float]] = None,
    ):
        if not api_key_id:
            raise ConfigurationError("API key id is required")
        self.api_key_id = api_key_id
        self.private_key = self._load_private_key(private_key_pem)
        self.clock = clock or time.time

    @staticmethod
    def _load_private_key(pem_data: str):
        """Load RSA private key from PEM string."""
        if not pem_data:
            raise ConfigurationError("Private key is required")
        try:
            return serialization.load_pem_private_key(
                pem_data.encode(),
                password=None,
                backend=default_backend()
            )
        except (ValueError, TypeError) as e:
            raise ConfigurationError(f"Could not load private key: {e}") from e

    def timestamp(self) -> str:
        """Current epoch time in milliseconds, as a string."""
        return str(int(self.clock() * 1000))

    def sign(self, message: str) -> str:
        """Sign a message and return the base64 encoded signature."""
        if not isinstance(self.private_key, rsa.RSAPrivateKey):
            logger.error("Failed to create signature: key is not an RSA private key")
            raise AuthenticationError(
                f"Unsupported key type: {type(self.private_key).__name__}"
            )
        try:
            signature = self.private_key.sign(
                message.encode("utf-8"),
                padding.PSS(
                    mgf=padding.MGF1(hashes.SHA256()),
                    salt_length=padding.PSS.DIGEST_LENGTH,
                ),
                hashes.SHA256(),
            )
        except (ValueError, TypeError) as e:
            logger.error(f"Failed to create signature: {e}")
            raise AuthenticationError(f"Authentication failed: {e}") from e

        return base64.b64encode(signature).decode("utf-8")

    def headers(self, method: str, path: str) -> dict:
        """Get the signed header set for a request."""
        timestamp = self.timestamp()
        signature = self.sign(f"{timestamp}{method}{path}")

        return {
            "KALSHI-ACCESS-KEY": self.api_key_id,
            "KALSHI-ACCESS-SIGNATURE": signature,
            "KALSHI-ACCESS-TIMESTAMP": timestamp,
            "Content-Type": "application/json",
        }
