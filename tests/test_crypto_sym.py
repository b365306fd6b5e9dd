# --------------------------------------------------------------
# File: test_crypto_sym.py
# Description: Pruebas del cifrado y descifrado autenticado con AES-GCM.
# --------------------------------------------------------------

import os
import random
from concurrent.futures import ThreadPoolExecutor

import pytest

from logincore.crypto_sym import (
    KEY_SIZE,
    NONCE_SIZE,
    TAG_SIZE,
    aes_gcm_decrypt,
    aes_gcm_encrypt,
    generate_key,
)
from logincore.errors import AuthenticationError, ConfigurationError


@pytest.mark.parametrize("plaintext", [b"", b"abc123blah1", os.urandom(4096)])
def test_aes_gcm_roundtrip_ok(key, plaintext):
    """Comprueba que un cifrado con AES-GCM pueda revertirse correctamente.

    Returns:
        None: Las aserciones evalúan la igualdad entre claro y descifrado.
    """
    blob = aes_gcm_encrypt(key, plaintext)
    assert len(blob) == NONCE_SIZE + len(plaintext) + TAG_SIZE
    assert aes_gcm_decrypt(key, blob) == plaintext


def test_generate_key_length():
    assert len(generate_key()) == KEY_SIZE
    assert generate_key() != generate_key()


@pytest.mark.parametrize("bad_key", [b"", os.urandom(15), os.urandom(24), os.urandom(32)])
def test_wrong_key_length_is_configuration_error(bad_key):
    """Una clave que no mide 16 bytes es un error de configuración.

    Returns:
        None: Se espera ConfigurationError tanto al cifrar como al descifrar.
    """
    with pytest.raises(ConfigurationError):
        aes_gcm_encrypt(bad_key, b"x")
    with pytest.raises(ConfigurationError):
        aes_gcm_decrypt(bad_key, os.urandom(64))


def test_key_must_be_bytes():
    with pytest.raises(ConfigurationError):
        aes_gcm_encrypt("0123456789abcdef", b"x")


@pytest.mark.parametrize("length", range(NONCE_SIZE))
def test_truncated_blob_fails_safely(key, length):
    """Un blob más corto que el nonce falla sin cortar más allá del final.

    Returns:
        None: Se espera AuthenticationError para cada longitud.
    """
    with pytest.raises(AuthenticationError):
        aes_gcm_decrypt(key, os.urandom(length))


def test_blob_without_full_tag_fails(key):
    blob = aes_gcm_encrypt(key, b"")
    with pytest.raises(AuthenticationError):
        aes_gcm_decrypt(key, blob[: NONCE_SIZE + TAG_SIZE - 1])


def test_aes_gcm_detects_any_bit_flip(key):
    """Verifica que invertir cualquier bit del blob sea detectado.

    Returns:
        None: Cada variante alterada debe lanzar AuthenticationError.
    """
    blob = aes_gcm_encrypt(key, b"hola mundo")
    for index in range(len(blob)):
        for bit in range(8):
            tampered = bytearray(blob)
            tampered[index] ^= 1 << bit
            with pytest.raises(AuthenticationError):
                aes_gcm_decrypt(key, bytes(tampered))


def test_aes_gcm_wrong_key_fails(key):
    blob = aes_gcm_encrypt(key, b"msg")
    with pytest.raises(AuthenticationError):
        aes_gcm_decrypt(generate_key(), blob)


def test_failures_share_the_same_message(key):
    """Manipulación, clave errónea y truncado no se distinguen entre sí."""
    blob = aes_gcm_encrypt(key, b"msg")
    messages = set()
    for candidate_key, candidate in [
        (key, blob[:-1]),
        (generate_key(), blob),
        (key, blob[:3]),
        (key, b"\x00" * len(blob)),
    ]:
        with pytest.raises(AuthenticationError) as excinfo:
            aes_gcm_decrypt(candidate_key, candidate)
        messages.add(str(excinfo.value))
    assert len(messages) == 1


def test_aes_gcm_nonce_uniqueness(key):
    """Evalúa que los nonces aleatorios generados no se repitan.

    Returns:
        None: Las aserciones verifican la unicidad dentro del muestreo.
    """
    nonces = set()
    for _ in range(200):
        nonce = aes_gcm_encrypt(key, b"x")[:NONCE_SIZE]
        assert nonce not in nonces
        nonces.add(nonce)


def test_aes_gcm_decrypt_fuzz_concurrent(key):
    """Envía basura aleatoria desde varios hilos y comprueba que siempre falla.

    Returns:
        None: 4 hilos x 20000 entradas de 0 a 1024 bytes, ninguna se autentica.
    """
    runs_per_worker = 20000
    workers = 4
    max_len = 1024

    def worker(seed: int) -> int:
        rng = random.Random(seed)
        failures = 0
        for _ in range(runs_per_worker):
            blob = os.urandom(rng.randint(0, max_len))
            try:
                aes_gcm_decrypt(key, blob)
            except AuthenticationError:
                failures += 1
        return failures

    with ThreadPoolExecutor(max_workers=workers) as pool:
        results = list(pool.map(worker, range(workers)))

    assert results == [runs_per_worker] * workers
