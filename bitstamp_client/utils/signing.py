"""
Request signing for authenticated Bitstamp endpoints.
"""
import hashlib
import hmac
import time
from threading import Lock
from typing import Any, Dict, Optional

from bitstamp_client.config import Credentials
from bitstamp_client.exceptions import MissingCredentialsError


def compute_signature(nonce: int, client_id: str, api_key: str, api_secret: str) -> str:
    """
    Compute the request signature.

    The message is ``nonce + client_id + api_key``; the signature is the
    uppercase hex HMAC-SHA256 of it keyed with the API secret.
    """
    message = f"{nonce}{client_id}{api_key}"
    digest = hmac.new(
        api_secret.encode("utf-8"),
        message.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()
    return digest.upper()


class Signer:
    """
    Builds signed request bodies.

    Nonces are the current time in milliseconds scaled by 10, bumped when
    needed so every nonce from one signer is strictly greater than the last.
    """

    NONCE_SCALE = 10

    def __init__(self, credentials: Credentials):
        self._credentials = credentials
        self._last_nonce = 0
        self._lock = Lock()

    @property
    def can_sign(self) -> bool:
        return self._credentials.is_complete

    def next_nonce(self) -> int:
        """Return a nonce strictly greater than any previously issued."""
        with self._lock:
            nonce = int(time.time() * 1000) * self.NONCE_SCALE
            if nonce <= self._last_nonce:
                nonce = self._last_nonce + 1
            self._last_nonce = nonce
            return nonce

    def sign(self, params: Optional[Dict[str, Any]] = None) -> Dict[str, str]:
        """
        Merge authentication fields into request parameters.

        Args:
            params: Caller parameters; they take precedence on key clashes

        Returns:
            Form body ``{key, signature, nonce, **params}`` with string values

        Raises:
            MissingCredentialsError: If key, secret or client ID is missing
        """
        credentials = self._credentials
        if not credentials.is_complete:
            raise MissingCredentialsError(credentials.missing)

        nonce = self.next_nonce()
        body: Dict[str, Any] = {
            "key": credentials.api_key,
            "signature": compute_signature(
                nonce,
                credentials.client_id,
                credentials.api_key,
                credentials.api_secret,
            ),
            "nonce": nonce,
        }
        body.update(params or {})
        return {name: str(value) for name, value in body.items()}
