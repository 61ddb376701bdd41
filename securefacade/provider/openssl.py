"""
OpenSSL Provider
================

Default provider, backed by the ``cryptography`` package (OpenSSL).

Cipher services:
    AES, AES/GCM/NoPadding   modes ECB CBC CTR CFB CFB8 OFB GCM
    DESede                   modes ECB CBC CFB CFB8 OFB
    Camellia                 modes ECB CBC CTR CFB CFB8 OFB
    Blowfish                 modes ECB CBC CFB OFB
    ChaCha20-Poly1305        AEAD, 12-byte nonce, tag appended
    RSA                      PKCS1Padding, OAEP[With<digest>AndMGF1]Padding

Message digest services:
    MD5, SHA-1, SHA-2 family, SHA3 family, BLAKE2b-512, BLAKE2s-256, SM3

Block ciphers default to ECB/PKCS5Padding, RSA to ECB/PKCS1Padding.
Primitives the linked OpenSSL does not support are not registered.

Security Notes:
    - SPIs drop their key reference once finalized
    - IVs generated for encryption come from the caller's randomness
      source (``secrets.SystemRandom`` when none is given)
"""

from __future__ import annotations

import functools
import random as _random
import re
from dataclasses import dataclass
from typing import Any, Callable, Final, Optional

import cryptography
from cryptography.exceptions import InvalidTag, UnsupportedAlgorithm
from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.decrepit.ciphers.algorithms import Blowfish, Camellia, TripleDES
from cryptography.hazmat.decrepit.ciphers.modes import CFB, CFB8, OFB
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives import padding as sym_padding
from cryptography.hazmat.primitives.asymmetric import padding as asym_padding
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.ciphers import Cipher, CipherAlgorithm, algorithms, modes
from cryptography.hazmat.primitives.ciphers.aead import ChaCha20Poly1305

from securefacade.provider.engine import DECRYPT_MODE, ENCRYPT_MODE
from securefacade.provider.exceptions import (
    AEADBadTagError,
    BadPaddingError,
    IllegalBlockSizeError,
    InvalidAlgorithmParameterError,
    InvalidKeyError,
    NoSuchAlgorithmError,
    NoSuchPaddingError,
)
from securefacade.provider.keys import (
    GCM_DEFAULT_IV_SIZE,
    GCM_DEFAULT_TAG_BITS,
    GCMParameterSpec,
    IvParameterSpec,
    OAEPParameterSpec,
    ParameterSpec,
    SecretKey,
)
from securefacade.provider.registry import CIPHER, MESSAGE_DIGEST, Provider
from securefacade.provider.spi import CipherSpi, DigestSpi

PROVIDER_NAME: Final[str] = "OpenSSL"

_BLOCK_MODES: Final[frozenset[str]] = frozenset({"ECB", "CBC", "CTR", "CFB", "CFB8", "OFB", "GCM"})
# Modes that cannot take a padding scheme.
_NO_PADDING_MODES: Final[frozenset[str]] = frozenset({"CTR", "GCM"})
# Modes that only work on whole blocks.
_ALIGNED_MODES: Final[frozenset[str]] = frozenset({"ECB", "CBC"})
_PADDINGS: Final[dict[str, bool]] = {
    "NOPADDING": False,
    "PKCS5PADDING": True,
    "PKCS7PADDING": True,
}
_GCM_TAG_BITS: Final[frozenset[int]] = frozenset({96, 104, 112, 120, 128})

_OAEP_DIGESTS: Final[dict[str, Callable[[], hashes.HashAlgorithm]]] = {
    "SHA-1": hashes.SHA1,
    "SHA1": hashes.SHA1,
    "SHA-224": hashes.SHA224,
    "SHA-256": hashes.SHA256,
    "SHA-384": hashes.SHA384,
    "SHA-512": hashes.SHA512,
}
_OAEP_PATTERN: Final[re.Pattern[str]] = re.compile(r"OAEPWITH(.+)ANDMGF1PADDING")


@dataclass(frozen=True, slots=True)
class BlockCipherSpec:
    """Static description of a block cipher primitive."""

    name: str
    key_algorithms: frozenset[str]
    key_sizes: frozenset[int]
    block_size: int
    factory: Callable[[bytes], CipherAlgorithm]
    modes: frozenset[str] = _BLOCK_MODES - {"GCM"}


AES_SPEC: Final = BlockCipherSpec(
    "AES", frozenset({"AES", "RIJNDAEL"}), frozenset({16, 24, 32}), 16, algorithms.AES, _BLOCK_MODES
)
DESEDE_SPEC: Final = BlockCipherSpec(
    "DESede", frozenset({"DESEDE", "TRIPLEDES"}), frozenset({16, 24}), 8, TripleDES,
    frozenset({"ECB", "CBC", "CFB", "CFB8", "OFB"}),
)
CAMELLIA_SPEC: Final = BlockCipherSpec(
    "Camellia", frozenset({"CAMELLIA"}), frozenset({16, 24, 32}), 16, Camellia
)
BLOWFISH_SPEC: Final = BlockCipherSpec(
    "Blowfish", frozenset({"BLOWFISH"}), frozenset(range(4, 57)), 8, Blowfish,
    frozenset({"ECB", "CBC", "CFB", "OFB"}),
)


def _context(algorithm: CipherAlgorithm, mode: modes.Mode, encrypt: bool) -> Any:
    """Build an encryptor or decryptor; backend gaps surface as NoSuchAlgorithmError."""
    try:
        cipher = Cipher(algorithm, mode)
        return cipher.encryptor() if encrypt else cipher.decryptor()
    except UnsupportedAlgorithm as exc:
        raise NoSuchAlgorithmError(str(exc)) from exc


class BlockCipherSpi(CipherSpi):
    """Block cipher engine for AES, DESede, Camellia and Blowfish."""

    __slots__ = ("_spec", "_mode", "_padded", "_opmode", "_key", "_iv", "_tag_bits")

    def __init__(self, spec: BlockCipherSpec, mode: str = "ECB", padding: str = "PKCS5Padding") -> None:
        self._spec = spec
        self._mode = "ECB"
        self._padded = True
        self._opmode = 0
        self._key: Optional[bytes] = None
        self._iv: Optional[bytes] = None
        self._tag_bits = 0
        self.engine_set_mode(mode)
        self.engine_set_padding(padding)

    def engine_set_mode(self, mode: str) -> None:
        wanted = mode.upper()
        if wanted not in _BLOCK_MODES:
            raise NoSuchAlgorithmError(f"Cipher mode: {mode} not found")
        if wanted not in self._spec.modes:
            raise NoSuchAlgorithmError(f"Cipher mode: {mode} not supported by {self._spec.name}")
        self._mode = wanted
        if wanted in _NO_PADDING_MODES:
            self._padded = False

    def engine_set_padding(self, padding: str) -> None:
        wanted = padding.upper()
        if wanted not in _PADDINGS:
            raise NoSuchPaddingError(f"Padding: {padding} not implemented")
        if _PADDINGS[wanted] and self._mode in _NO_PADDING_MODES:
            raise NoSuchPaddingError(f"{self._mode} mode must be used with NoPadding")
        self._padded = _PADDINGS[wanted]

    def engine_init(
        self,
        opmode: int,
        key: Any,
        params: Optional[ParameterSpec],
        random: _random.Random,
    ) -> None:
        key_bytes = self._check_key(key)
        self._iv, self._tag_bits = self._check_params(opmode, params, random)
        self._opmode = opmode
        self._key = key_bytes

    def _check_key(self, key: Any) -> bytes:
        spec = self._spec
        if not isinstance(key, SecretKey):
            raise InvalidKeyError(f"{spec.name} requires a secret key, got {type(key).__name__}")
        if key.algorithm.upper() not in spec.key_algorithms:
            raise InvalidKeyError(f"Wrong algorithm: {spec.name} required, got {key.algorithm}")
        if len(key.encoded) not in spec.key_sizes:
            raise InvalidKeyError(f"Invalid {spec.name} key length: {len(key.encoded)} bytes")
        return key.encoded

    def _check_params(
        self,
        opmode: int,
        params: Optional[ParameterSpec],
        random: _random.Random,
    ) -> tuple[Optional[bytes], int]:
        block = self._spec.block_size

        if self._mode == "ECB":
            if params is not None:
                raise InvalidAlgorithmParameterError("ECB mode cannot use IV")
            return None, 0

        if self._mode == "GCM":
            if params is None:
                if opmode == DECRYPT_MODE:
                    raise InvalidKeyError("Parameters missing")
                return random.randbytes(GCM_DEFAULT_IV_SIZE), GCM_DEFAULT_TAG_BITS
            if not isinstance(params, GCMParameterSpec):
                raise InvalidAlgorithmParameterError("Unsupported parameter: GCMParameterSpec required")
            if params.tag_length not in _GCM_TAG_BITS:
                raise InvalidAlgorithmParameterError(
                    f"Unsupported TLen value {params.tag_length}. Must be one of {sorted(_GCM_TAG_BITS)}"
                )
            if not 8 <= len(params.iv) <= 128:
                raise InvalidAlgorithmParameterError("GCM IV must be between 8 and 128 bytes long")
            return params.iv, params.tag_length

        if params is None:
            if opmode == DECRYPT_MODE:
                raise InvalidKeyError("Parameters missing")
            return random.randbytes(block), 0
        if not isinstance(params, IvParameterSpec):
            raise InvalidAlgorithmParameterError("Wrong parameter type: IV expected")
        if len(params.iv) != block:
            raise InvalidAlgorithmParameterError(f"Wrong IV length: must be {block} bytes long")
        return params.iv, 0

    def engine_get_parameters(self) -> Optional[ParameterSpec]:
        if self._iv is None:
            return None
        if self._mode == "GCM":
            return GCMParameterSpec(self._tag_bits, self._iv)
        return IvParameterSpec(self._iv)

    def _mode_object(self, tag: Optional[bytes] = None) -> modes.Mode:
        iv = self._iv or b""
        if self._mode == "ECB":
            return modes.ECB()
        if self._mode == "CBC":
            return modes.CBC(iv)
        if self._mode == "CTR":
            return modes.CTR(iv)
        if self._mode == "CFB":
            return CFB(iv)
        if self._mode == "CFB8":
            return CFB8(iv)
        if self._mode == "OFB":
            return OFB(iv)
        return modes.GCM(iv, tag, min_tag_length=self._tag_bits // 8)

    def engine_do_final(self, data: bytes) -> bytes:
        key, self._key = self._key, None
        if key is None:
            raise InvalidKeyError("Cipher not initialized")
        algorithm = self._spec.factory(key)
        if self._mode == "GCM":
            return self._do_final_gcm(algorithm, data)

        block = self._spec.block_size
        if self._opmode == ENCRYPT_MODE:
            if self._padded:
                padder = sym_padding.PKCS7(block * 8).padder()
                data = padder.update(data) + padder.finalize()
            elif self._mode in _ALIGNED_MODES and len(data) % block:
                raise IllegalBlockSizeError(f"Input length not multiple of {block} bytes")
            encryptor = _context(algorithm, self._mode_object(), encrypt=True)
            return encryptor.update(data) + encryptor.finalize()

        if (self._padded or self._mode in _ALIGNED_MODES) and len(data) % block:
            raise IllegalBlockSizeError(
                f"Input length must be multiple of {block} when decrypting with padded cipher"
            )
        decryptor = _context(algorithm, self._mode_object(), encrypt=False)
        plain = decryptor.update(data) + decryptor.finalize()
        if not self._padded or not plain:
            return plain
        unpadder = sym_padding.PKCS7(block * 8).unpadder()
        try:
            return unpadder.update(plain) + unpadder.finalize()
        except ValueError as exc:
            raise BadPaddingError("Given final block not properly padded") from exc

    def _do_final_gcm(self, algorithm: CipherAlgorithm, data: bytes) -> bytes:
        tag_size = self._tag_bits // 8
        if self._opmode == ENCRYPT_MODE:
            encryptor = _context(algorithm, self._mode_object(), encrypt=True)
            ciphertext = encryptor.update(data) + encryptor.finalize()
            return ciphertext + encryptor.tag[:tag_size]

        if len(data) < tag_size:
            raise AEADBadTagError(f"Input data too short to contain an expected tag length of {tag_size} bytes")
        ciphertext, tag = data[: len(data) - tag_size], data[len(data) - tag_size :]
        decryptor = _context(algorithm, self._mode_object(tag), encrypt=False)
        try:
            return decryptor.update(ciphertext) + decryptor.finalize()
        except InvalidTag as exc:
            raise AEADBadTagError("Tag mismatch") from exc


class ChaCha20Poly1305Spi(CipherSpi):
    """ChaCha20-Poly1305 AEAD engine; output is ciphertext followed by the tag."""

    KEY_SIZE: Final[int] = 32
    NONCE_SIZE: Final[int] = 12
    TAG_SIZE: Final[int] = 16

    __slots__ = ("_opmode", "_key", "_nonce")

    def __init__(self) -> None:
        self._opmode = 0
        self._key: Optional[bytes] = None
        self._nonce: Optional[bytes] = None

    def engine_set_mode(self, mode: str) -> None:
        if mode.upper() != "NONE":
            raise NoSuchAlgorithmError(f"Mode must be None for ChaCha20-Poly1305, got {mode}")

    def engine_set_padding(self, padding: str) -> None:
        if padding.upper() != "NOPADDING":
            raise NoSuchPaddingError(f"Padding must be NoPadding for ChaCha20-Poly1305, got {padding}")

    def engine_init(
        self,
        opmode: int,
        key: Any,
        params: Optional[ParameterSpec],
        random: _random.Random,
    ) -> None:
        if not isinstance(key, SecretKey) or key.algorithm.upper() not in ("CHACHA20", "CHACHA20-POLY1305"):
            raise InvalidKeyError("ChaCha20-Poly1305 requires a ChaCha20 secret key")
        if len(key.encoded) != self.KEY_SIZE:
            raise InvalidKeyError(f"Key length must be {self.KEY_SIZE} bytes")
        if params is None:
            if opmode == DECRYPT_MODE:
                raise InvalidKeyError("Parameters missing")
            nonce = random.randbytes(self.NONCE_SIZE)
        elif not isinstance(params, IvParameterSpec):
            raise InvalidAlgorithmParameterError("ChaCha20-Poly1305 expects an IvParameterSpec")
        elif len(params.iv) != self.NONCE_SIZE:
            raise InvalidAlgorithmParameterError(f"Nonce must be {self.NONCE_SIZE} bytes long")
        else:
            nonce = params.iv
        self._opmode = opmode
        self._key = key.encoded
        self._nonce = nonce

    def engine_get_parameters(self) -> Optional[ParameterSpec]:
        return IvParameterSpec(self._nonce) if self._nonce is not None else None

    def engine_do_final(self, data: bytes) -> bytes:
        key, self._key = self._key, None
        if key is None or self._nonce is None:
            raise InvalidKeyError("Cipher not initialized")
        aead = ChaCha20Poly1305(key)
        if self._opmode == ENCRYPT_MODE:
            return aead.encrypt(self._nonce, data, None)
        if len(data) < self.TAG_SIZE:
            raise AEADBadTagError(f"Input data too short to contain an expected tag length of {self.TAG_SIZE} bytes")
        try:
            return aead.decrypt(self._nonce, data, None)
        except InvalidTag as exc:
            raise AEADBadTagError("Tag mismatch") from exc


class RSACipherSpi(CipherSpi):
    """
    RSA engine.

    Encryption takes a public key, decryption a private key. OAEP
    variants name their hash in the padding; MGF1 uses SHA-1 unless an
    ``OAEPParameterSpec`` says otherwise.
    """

    __slots__ = ("_oaep_digest", "_opmode", "_key", "_oaep")

    def __init__(self) -> None:
        self._oaep_digest: Optional[str] = None
        self._opmode = 0
        self._key: Optional[Any] = None
        self._oaep: Optional[OAEPParameterSpec] = None

    def engine_set_mode(self, mode: str) -> None:
        if mode.upper() not in ("ECB", "NONE"):
            raise NoSuchAlgorithmError(f"Unsupported mode {mode}")

    def engine_set_padding(self, padding: str) -> None:
        wanted = padding.upper()
        if wanted == "PKCS1PADDING":
            self._oaep_digest = None
            return
        if wanted == "OAEPPADDING":
            self._oaep_digest = "SHA-1"
            return
        match = _OAEP_PATTERN.fullmatch(wanted)
        if match is None or match.group(1) not in _OAEP_DIGESTS:
            raise NoSuchPaddingError(f"Unsupported padding {padding}")
        self._oaep_digest = match.group(1)

    def engine_init(
        self,
        opmode: int,
        key: Any,
        params: Optional[ParameterSpec],
        random: _random.Random,
    ) -> None:
        if opmode == ENCRYPT_MODE and not isinstance(key, rsa.RSAPublicKey):
            raise InvalidKeyError("RSA encryption requires an RSA public key")
        if opmode == DECRYPT_MODE and not isinstance(key, rsa.RSAPrivateKey):
            raise InvalidKeyError("RSA decryption requires an RSA private key")

        if self._oaep_digest is None:
            if params is not None:
                raise InvalidAlgorithmParameterError("Parameters not supported with PKCS1Padding")
            self._oaep = None
        elif params is None:
            self._oaep = OAEPParameterSpec(digest=self._oaep_digest)
        elif not isinstance(params, OAEPParameterSpec):
            raise InvalidAlgorithmParameterError("Wrong parameter type: OAEP parameters expected")
        else:
            for name in (params.digest, params.mgf_digest):
                if name.upper() not in _OAEP_DIGESTS:
                    raise InvalidAlgorithmParameterError(f"Unsupported OAEP digest {name}")
            self._oaep = params
        self._opmode = opmode
        self._key = key

    def engine_get_parameters(self) -> Optional[ParameterSpec]:
        return self._oaep

    def _padding(self) -> asym_padding.AsymmetricPadding:
        if self._oaep is None:
            return asym_padding.PKCS1v15()
        return asym_padding.OAEP(
            mgf=asym_padding.MGF1(_OAEP_DIGESTS[self._oaep.mgf_digest.upper()]()),
            algorithm=_OAEP_DIGESTS[self._oaep.digest.upper()](),
            label=self._oaep.label,
        )

    def _max_input(self, modulus_bytes: int) -> int:
        if self._oaep is None:
            return modulus_bytes - 11
        digest_size = _OAEP_DIGESTS[self._oaep.digest.upper()]().digest_size
        return modulus_bytes - 2 * digest_size - 2

    def engine_do_final(self, data: bytes) -> bytes:
        key, self._key = self._key, None
        if key is None:
            raise InvalidKeyError("Cipher not initialized")
        modulus_bytes = (key.key_size + 7) // 8

        if self._opmode == ENCRYPT_MODE:
            limit = self._max_input(modulus_bytes)
            if len(data) > limit:
                raise IllegalBlockSizeError(f"Data must not be longer than {limit} bytes")
            try:
                return key.encrypt(data, self._padding())
            except ValueError as exc:
                raise IllegalBlockSizeError(str(exc)) from exc

        if len(data) > modulus_bytes:
            raise IllegalBlockSizeError(f"Data must not be longer than {modulus_bytes} bytes")
        try:
            return key.decrypt(data, self._padding())
        except ValueError as exc:
            raise BadPaddingError("Decryption error") from exc


class HashSpi(DigestSpi):
    """Message digest engine over ``cryptography.hazmat.primitives.hashes``."""

    __slots__ = ("_hash", "_size")

    def __init__(self, factory: Callable[[], hashes.HashAlgorithm]) -> None:
        algorithm = factory()
        self._hash = hashes.Hash(algorithm)
        self._size = algorithm.digest_size

    @property
    def digest_length(self) -> int:
        return self._size

    def engine_update(self, data: bytes) -> None:
        self._hash.update(data)

    def engine_digest(self) -> bytes:
        return self._hash.finalize()


_DIGESTS: Final[list[tuple[str, Callable[[], hashes.HashAlgorithm], tuple[str, ...]]]] = [
    ("MD5", hashes.MD5, ()),
    ("SHA-1", hashes.SHA1, ("SHA", "SHA1")),
    ("SHA-224", hashes.SHA224, ("SHA224",)),
    ("SHA-256", hashes.SHA256, ("SHA256",)),
    ("SHA-384", hashes.SHA384, ("SHA384",)),
    ("SHA-512", hashes.SHA512, ("SHA512",)),
    ("SHA-512/224", hashes.SHA512_224, ("SHA512/224",)),
    ("SHA-512/256", hashes.SHA512_256, ("SHA512/256",)),
    ("SHA3-224", hashes.SHA3_224, ()),
    ("SHA3-256", hashes.SHA3_256, ()),
    ("SHA3-384", hashes.SHA3_384, ()),
    ("SHA3-512", hashes.SHA3_512, ()),
    ("BLAKE2b-512", functools.partial(hashes.BLAKE2b, 64), ()),
    ("BLAKE2s-256", functools.partial(hashes.BLAKE2s, 32), ()),
    ("SM3", hashes.SM3, ()),
]


def _block_cipher_supported(spec: BlockCipherSpec) -> bool:
    key_size = max(size for size in spec.key_sizes if size <= 32)
    probe = spec.factory(bytes(key_size))
    return default_backend().cipher_supported(probe, modes.CBC(bytes(spec.block_size)))


def _chacha20_poly1305_supported() -> bool:
    try:
        ChaCha20Poly1305(bytes(ChaCha20Poly1305Spi.KEY_SIZE))
    except UnsupportedAlgorithm:
        return False
    return True


class OpenSSLProvider(Provider):
    """Provider exposing the primitives of the ``cryptography`` package."""

    def __init__(self) -> None:
        super().__init__(
            PROVIDER_NAME,
            version=cryptography.__version__,
            info="Ciphers and message digests from the cryptography package (OpenSSL)",
        )
        self._register_ciphers()
        self._register_digests()

    def _register_ciphers(self) -> None:
        self.put_service(CIPHER, "AES", functools.partial(BlockCipherSpi, AES_SPEC), ("Rijndael",))
        self.put_service(
            CIPHER,
            "AES/GCM/NoPadding",
            functools.partial(BlockCipherSpi, AES_SPEC, "GCM", "NoPadding"),
        )
        for spec, aliases in ((DESEDE_SPEC, ("TripleDES",)), (CAMELLIA_SPEC, ()), (BLOWFISH_SPEC, ())):
            if _block_cipher_supported(spec):
                self.put_service(CIPHER, spec.name, functools.partial(BlockCipherSpi, spec), aliases)
        if _chacha20_poly1305_supported():
            self.put_service(CIPHER, "ChaCha20-Poly1305", ChaCha20Poly1305Spi)
        self.put_service(CIPHER, "RSA", RSACipherSpi)

    def _register_digests(self) -> None:
        backend = default_backend()
        for name, factory, aliases in _DIGESTS:
            if backend.hash_supported(factory()):
                self.put_service(MESSAGE_DIGEST, name, functools.partial(HashSpi, factory), aliases)
