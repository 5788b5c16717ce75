"""Sealed-box encryption of secret values.

GitHub requires secret values to be encrypted with the repository's
Curve25519 public key using libsodium sealed boxes. Every call generates a
fresh ephemeral key pair, so encrypting the same value twice gives
different ciphertexts.
"""

import base64
import binascii

from nacl.exceptions import CryptoError
from nacl.public import PublicKey, SealedBox

from github_secrets.exceptions import EncryptionError

_PUBLIC_KEY_BYTES = PublicKey.SIZE


def encrypt_secret(public_key: str, secret_value: str) -> str:
    """Encrypt a secret value for a repository.

    Args:
        public_key: Base64 encoded repository public key.
        secret_value: Plaintext secret value.

    Returns:
        Base64 encoded sealed-box ciphertext.

    Raises:
        EncryptionError: If the key is not valid base64, has the wrong
            length, or sealing fails.

    """
    try:
        key_bytes = base64.b64decode(public_key, validate=True)
    except (binascii.Error, ValueError) as err:
        raise EncryptionError(f"Failed to decode public key: {err}") from err

    if len(key_bytes) != _PUBLIC_KEY_BYTES:
        raise EncryptionError(
            f"Invalid public key length. Expected {_PUBLIC_KEY_BYTES} bytes, got {len(key_bytes)}"
        )

    try:
        sealed = SealedBox(PublicKey(key_bytes)).encrypt(secret_value.encode("utf-8"))
    except CryptoError as err:
        raise EncryptionError(f"Failed to encrypt secret: {err}") from err

    return base64.b64encode(sealed).decode("utf-8")
