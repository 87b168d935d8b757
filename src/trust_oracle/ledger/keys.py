"""OracleKey — the Ed25519 signing key of the attestation issuer.

The oracle signs every attestation it publishes. Public keys and signatures
are rendered in base58, the encoding used for account addresses on the
destination chain. :class:`OracleKeyStore` persists the key as JSON::

    {"publicKey": "<base58>", "secretKey": "<base64 32-byte seed>"}
"""
from __future__ import annotations

import base64
import json
import logging
from pathlib import Path

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
    PublicFormat,
)

logger = logging.getLogger(__name__)

_BASE58_ALPHABET: str = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"


def b58encode(data: bytes) -> str:
    """Encode *data* as base58, preserving leading zero bytes as ``1``."""
    n = int.from_bytes(data, "big")
    chars: list[str] = []
    while n > 0:
        n, remainder = divmod(n, 58)
        chars.append(_BASE58_ALPHABET[remainder])
    for byte in data:
        if byte != 0:
            break
        chars.append("1")
    return "".join(reversed(chars))


def b58decode(encoded: str) -> bytes:
    """Decode a base58 string produced by :func:`b58encode`.

    Raises
    ------
    ValueError
        If *encoded* contains a character outside the base58 alphabet.
    """
    n = 0
    for char in encoded:
        index = _BASE58_ALPHABET.find(char)
        if index < 0:
            raise ValueError(f"Invalid base58 character {char!r} in {encoded!r}")
        n = n * 58 + index
    body = n.to_bytes((n.bit_length() + 7) // 8, "big") if n > 0 else b""
    pad = len(encoded) - len(encoded.lstrip("1"))
    return b"\x00" * pad + body


class OracleKey:
    """An Ed25519 key pair used to sign published attestations.

    Example
    -------
    ::

        key = OracleKey.generate()
        signature = key.sign(b"payload")
        assert key.verify(signature, b"payload")
    """

    def __init__(self, private_key: Ed25519PrivateKey) -> None:
        self._private_key = private_key

    @classmethod
    def generate(cls) -> OracleKey:
        return cls(Ed25519PrivateKey.generate())

    @classmethod
    def from_secret_key(cls, secret_key: bytes) -> OracleKey:
        """Load a key from a 32-byte seed or a 64-byte seed+public-key blob.

        Raises
        ------
        ValueError
            If *secret_key* is neither 32 nor 64 bytes long.
        """
        if len(secret_key) not in (32, 64):
            raise ValueError(
                f"Oracle secret key must be 32 or 64 bytes, got {len(secret_key)}"
            )
        return cls(Ed25519PrivateKey.from_private_bytes(secret_key[:32]))

    @property
    def secret_key(self) -> bytes:
        """The raw 32-byte private seed."""
        return self._private_key.private_bytes(
            Encoding.Raw, PrivateFormat.Raw, NoEncryption()
        )

    @property
    def public_key_bytes(self) -> bytes:
        return self._private_key.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw)

    @property
    def public_key(self) -> str:
        """The public key as a base58 string."""
        return b58encode(self.public_key_bytes)

    def sign(self, data: bytes) -> bytes:
        """Return the 64-byte Ed25519 signature of *data*."""
        return self._private_key.sign(data)

    def verify(self, signature: bytes, data: bytes) -> bool:
        return verify_signature(self.public_key, signature, data)

    def __repr__(self) -> str:
        return f"OracleKey(public_key={self.public_key!r})"


def verify_signature(public_key: str, signature: bytes, data: bytes) -> bool:
    """Verify an Ed25519 *signature* over *data* against a base58 *public_key*."""
    key = Ed25519PublicKey.from_public_bytes(b58decode(public_key))
    try:
        key.verify(signature, data)
        return True
    except InvalidSignature:
        return False


class OracleKeyStore:
    """JSON-file persistence for the oracle key.

    Parameters
    ----------
    path:
        Location of the key file. Parent directories are created on save.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.exists()

    def load(self) -> OracleKey:
        """Read the key file.

        Raises
        ------
        FileNotFoundError
            If the key file does not exist.
        ValueError
            If the file is not valid JSON or the secret key is malformed.
        """
        data = json.loads(self._path.read_text(encoding="utf-8"))
        try:
            secret = base64.b64decode(data["secretKey"], validate=True)
        except (KeyError, TypeError) as exc:
            raise ValueError(f"Oracle key file {self._path} has no secretKey") from exc
        return OracleKey.from_secret_key(secret)

    def save(self, key: OracleKey) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "publicKey": key.public_key,
            "secretKey": base64.b64encode(key.secret_key).decode("ascii"),
        }
        self._path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def load_or_create(self) -> OracleKey:
        """Load the stored key, generating and saving a new one if absent."""
        if self.exists():
            key = self.load()
            logger.info("Oracle loaded: %s", key.public_key)
            return key
        key = OracleKey.generate()
        self.save(key)
        logger.info("New oracle generated: %s (saved to %s)", key.public_key, self._path)
        return key
