"""Device key pair handling."""

from .keys import ECSigningKey, ECVerificationKey, SigningKey, VerificationKey, generate_key_pair

__all__ = ["ECSigningKey", "ECVerificationKey", "SigningKey", "VerificationKey", "generate_key_pair"]
