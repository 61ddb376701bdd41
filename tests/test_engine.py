"""Tests for transformation resolution and engine lifecycle."""

import pytest

from securefacade.provider.engine import (
    DECRYPT_MODE,
    ENCRYPT_MODE,
    CipherEngine,
    DigestEngine,
    EngineState,
    split_transformation,
)
from securefacade.provider.exceptions import (
    EngineStateError,
    InvalidAlgorithmParameterError,
    InvalidKeyError,
    NoSuchAlgorithmError,
    NoSuchPaddingError,
)
from securefacade.provider.keys import IvParameterSpec, SecretKey
from securefacade.provider.openssl import (
    AES_SPEC,
    BLOWFISH_SPEC,
    CAMELLIA_SPEC,
    DESEDE_SPEC,
    BlockCipherSpi,
)


class TestSplitTransformation:
    """Parsing of ALG and ALG/MODE/PADDING names."""

    def test_algorithm_only(self):
        assert split_transformation("AES") == ("AES", None, None)

    def test_full_form(self):
        assert split_transformation("AES/CBC/PKCS5Padding") == ("AES", "CBC", "PKCS5Padding")

    def test_missing_mode(self):
        assert split_transformation("AES//NoPadding") == ("AES", None, "NoPadding")

    @pytest.mark.parametrize("bad", ["", "AES/CBC", "/CBC/NoPadding", "AES//", "A/B/C/D"])
    def test_malformed(self, bad):
        with pytest.raises(NoSuchAlgorithmError):
            split_transformation(bad)


class TestCipherEngine:
    """Resolution, state machine and key dropping."""

    def test_resolution_is_case_insensitive(self, registry):
        engine = CipherEngine.get_instance("aes/cbc/pkcs5padding", registry)

        assert engine.provider == "OpenSSL"
        assert engine.state is EngineState.FRESH

    def test_unknown_algorithm(self, registry):
        with pytest.raises(NoSuchAlgorithmError):
            CipherEngine.get_instance("NOPE/NOPE/NoPadding", registry)

    def test_unknown_mode(self, registry):
        with pytest.raises(NoSuchAlgorithmError):
            CipherEngine.get_instance("AES/XTS/NoPadding", registry)

    def test_unknown_padding(self, registry):
        with pytest.raises(NoSuchPaddingError):
            CipherEngine.get_instance("AES/CBC/ISO10126Padding", registry)

    def test_gcm_rejects_padding(self, registry):
        with pytest.raises(NoSuchPaddingError):
            CipherEngine.get_instance("AES/GCM/PKCS5Padding", registry)

    def test_do_final_requires_init(self, registry):
        engine = CipherEngine.get_instance("AES", registry)

        with pytest.raises(EngineStateError):
            engine.do_final(b"data")

    def test_single_shot(self, registry, aes_key):
        engine = CipherEngine.get_instance("AES/ECB/PKCS5Padding", registry)
        engine.init(ENCRYPT_MODE, aes_key)
        engine.do_final(b"data")

        assert engine.state is EngineState.FINALIZED
        with pytest.raises(EngineStateError):
            engine.do_final(b"data")
        with pytest.raises(EngineStateError):
            engine.init(ENCRYPT_MODE, aes_key)

    def test_invalid_opmode(self, registry, aes_key):
        engine = CipherEngine.get_instance("AES", registry)

        with pytest.raises(ValueError):
            engine.init(3, aes_key)

    def test_generated_iv_reported(self, registry, aes_key):
        engine = CipherEngine.get_instance("AES/CBC/PKCS5Padding", registry)
        engine.init(ENCRYPT_MODE, aes_key)

        params = engine.get_parameters()
        assert isinstance(params, IvParameterSpec)
        assert len(params.iv) == 16

    def test_cbc_decrypt_without_iv(self, registry, aes_key):
        engine = CipherEngine.get_instance("AES/CBC/PKCS5Padding", registry)

        with pytest.raises(InvalidKeyError):
            engine.init(DECRYPT_MODE, aes_key)

    def test_ecb_rejects_iv(self, registry, aes_key):
        engine = CipherEngine.get_instance("AES/ECB/NoPadding", registry)

        with pytest.raises(InvalidAlgorithmParameterError):
            engine.init(ENCRYPT_MODE, aes_key, IvParameterSpec(bytes(16)))

    def test_wrong_key_algorithm(self, registry):
        engine = CipherEngine.get_instance("AES", registry)

        with pytest.raises(InvalidKeyError):
            engine.init(ENCRYPT_MODE, SecretKey("DESede", bytes(24)))


class TestDigestEngine:
    """Single-shot digest lifecycle."""

    def test_digest_once(self, registry):
        engine = DigestEngine.get_instance("SHA-256", registry)

        assert engine.digest_length == 32
        assert len(engine.digest(b"abc")) == 32
        assert engine.state is EngineState.FINALIZED
        with pytest.raises(EngineStateError):
            engine.digest(b"abc")


class TestBlockCipherModes:
    """Per-cipher mode sets."""

    def test_blowfish_mode_set(self):
        spi = BlockCipherSpi(BLOWFISH_SPEC)

        for mode in ("ECB", "CBC", "CFB", "OFB"):
            spi.engine_set_mode(mode)
        for mode in ("CFB8", "CTR", "GCM"):
            with pytest.raises(NoSuchAlgorithmError):
                spi.engine_set_mode(mode)

    def test_gcm_only_for_aes(self):
        assert "GCM" in AES_SPEC.modes
        assert "GCM" not in CAMELLIA_SPEC.modes
        with pytest.raises(NoSuchAlgorithmError):
            BlockCipherSpi(DESEDE_SPEC, "GCM", "NoPadding")
