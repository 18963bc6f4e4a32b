"""Asymmetric key pair used to enroll a device and sign authentication challenges.

The enrollment flow only needs two things from the keys: the verification key
as a JSON Web Key to send to the server, and the signing key to hand back
inside the enrolled device. Any object satisfying the protocols below works;
`generate_key_pair` provides a P-256 implementation backed by `cryptography`.
"""

from __future__ import annotations

import base64
from typing import Any, Dict, Protocol, Tuple, runtime_checkable

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec


@runtime_checkable
class VerificationKey(Protocol):
    """Public half of the device key pair."""

    @property
    def jwk(self) -> Dict[str, Any]:
        ...

    def verify(self, signature: bytes, data: bytes) -> bool:
        ...


@runtime_checkable
class SigningKey(Protocol):
    """Private half of the device key pair. Never leaves the client."""

    def sign(self, data: bytes) -> bytes:
        ...

    def verification_key(self) -> VerificationKey:
        ...


def _b64url(value: int, length: int) -> str:
    return base64.urlsafe_b64encode(value.to_bytes(length, "big")).rstrip(b"=").decode("ascii")


class ECVerificationKey:
    """P-256 public key."""

    def __init__(self, public_key: ec.EllipticCurvePublicKey):
        self._public_key = public_key

    @property
    def jwk(self) -> Dict[str, Any]:
        numbers = self._public_key.public_numbers()
        return {
            "kty": "EC",
            "crv": "P-256",
            "use": "sig",
            "alg": "ES256",
            "x": _b64url(numbers.x, 32),
            "y": _b64url(numbers.y, 32),
        }

    def pem(self) -> bytes:
        return self._public_key.public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )

    def verify(self, signature: bytes, data: bytes) -> bool:
        try:
            self._public_key.verify(signature, data, ec.ECDSA(hashes.SHA256()))
        except InvalidSignature:
            return False
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ECVerificationKey):
            return NotImplemented
        return self.jwk == other.jwk

    def __hash__(self) -> int:
        return hash((self.jwk["x"], self.jwk["y"]))

    def __repr__(self) -> str:
        return f"<ECVerificationKey P-256 x={self.jwk['x'][:8]}...>"


class ECSigningKey:
    """P-256 private key. Its repr never includes key material."""

    def __init__(self, private_key: ec.EllipticCurvePrivateKey):
        self._private_key = private_key

    def sign(self, data: bytes) -> bytes:
        return self._private_key.sign(data, ec.ECDSA(hashes.SHA256()))

    def verification_key(self) -> ECVerificationKey:
        return ECVerificationKey(self._private_key.public_key())

    def __repr__(self) -> str:
        return "<ECSigningKey P-256>"


def generate_key_pair() -> Tuple[ECSigningKey, ECVerificationKey]:
    """Generate a fresh P-256 key pair for enrollment.

    Returns:
        Tuple of (signing_key, verification_key)
    """
    signing_key = ECSigningKey(ec.generate_private_key(ec.SECP256R1()))
    return signing_key, signing_key.verification_key()
