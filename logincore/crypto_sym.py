# --------------------------------------------------------------
# File: crypto_sym.py
# Description: Primitivas AES-GCM para cifrado y descifrado autenticado de tokens.
# --------------------------------------------------------------
"""Rutinas de cifrado simétrico autenticado con clave fija de 128 bits."""

import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from logincore.errors import AuthenticationError, ConfigurationError

__all__ = [
    "KEY_SIZE",
    "NONCE_SIZE",
    "TAG_SIZE",
    "aes_gcm_decrypt",
    "aes_gcm_encrypt",
    "generate_key",
]

KEY_SIZE = 16  # AES-128
NONCE_SIZE = 12  # 96 bits, tamaño estándar de GCM
TAG_SIZE = 16

_AUTH_FAILED = "no se ha podido autenticar el token"


def _cipher(key: bytes) -> AESGCM:
    """Valida la clave y construye un AESGCM nuevo para esta llamada."""

    if not isinstance(key, (bytes, bytearray, memoryview)):
        raise ConfigurationError("la clave debe ser una secuencia de bytes")
    if len(key) != KEY_SIZE:
        raise ConfigurationError(
            f"la clave debe medir {KEY_SIZE} bytes (recibidos {len(key)})"
        )
    return AESGCM(bytes(key))


def generate_key() -> bytes:
    """Genera una clave aleatoria de 128 bits apta para ``aes_gcm_encrypt``."""

    return os.urandom(KEY_SIZE)


def aes_gcm_encrypt(key: bytes, plaintext: bytes) -> bytes:
    """Cifra y autentica datos con AES-GCM usando un nonce nuevo.

    Args:
        key (bytes): Clave simétrica de exactamente 128 bits.
        plaintext (bytes): Datos en claro; pueden estar vacíos.

    Returns:
        bytes: ``nonce || ciphertext || tag``.

    Raises:
        ConfigurationError: Si la clave no tiene la longitud requerida.

    """

    aes = _cipher(key)
    # SECURITY: el nonce sale del CSPRNG en cada llamada; nunca se reutiliza ni se cachea.
    nonce = os.urandom(NONCE_SIZE)
    return nonce + aes.encrypt(nonce, bytes(plaintext), None)


def aes_gcm_decrypt(key: bytes, blob: bytes) -> bytes:
    """Revierte ``aes_gcm_encrypt`` verificando la etiqueta de autenticación.

    Cualquier entrada, vacía, truncada o fabricada por un atacante, termina
    en ``AuthenticationError``; nunca se propaga un fallo interno de la
    primitiva.

    Args:
        key (bytes): Clave simétrica de exactamente 128 bits.
        blob (bytes): Nonce seguido de los datos sellados.

    Returns:
        bytes: Mensaje original en claro.

    Raises:
        ConfigurationError: Si la clave no tiene la longitud requerida.
        AuthenticationError: Si el blob no se autentica.

    """

    aes = _cipher(key)
    if len(blob) < NONCE_SIZE:
        raise AuthenticationError(_AUTH_FAILED)

    nonce = bytes(blob[:NONCE_SIZE])
    sealed = bytes(blob[NONCE_SIZE:])
    try:
        return aes.decrypt(nonce, sealed, None)
    except (InvalidTag, ValueError, OverflowError):
        raise AuthenticationError(_AUTH_FAILED) from None
