"""Tests for the CipherResult and DigestResult value objects."""

import random

import pytest

from securefacade import (
    Algorithmic,
    CipherResult,
    DigestResult,
    Direction,
    InitParameters,
    InvalidArgumentError,
    IvParameterSpec,
    KeyMaterial,
)
from securefacade.crypt.material import InitStrategy, KeyKind


class TestCipherResult:
    """Equality, copying and validation of cipher results."""

    def test_fields(self):
        result = CipherResult(b"\x01\x02", Direction.ENCRYPT, "AES")

        assert result.bytes == b"\x01\x02"
        assert result.direction is Direction.ENCRYPT
        assert result.algorithm == "AES"
        assert result.parameters is None

    def test_input_is_copied(self):
        buffer = bytearray(b"abc")
        result = CipherResult(buffer, Direction.DECRYPT, "AES")
        buffer[0] = 0

        assert result.bytes == b"abc"
        assert isinstance(result.bytes, bytes)

    def test_equality_over_algorithm_and_bytes(self):
        first = CipherResult(b"x", Direction.ENCRYPT, "AES", IvParameterSpec(bytes(16)))
        second = CipherResult(b"x", Direction.DECRYPT, "AES")

        assert first == second
        assert hash(first) == hash(second)

    @pytest.mark.parametrize("other", [
        CipherResult(b"y", Direction.ENCRYPT, "AES"),
        CipherResult(b"x", Direction.ENCRYPT, "DESede"),
    ])
    def test_inequality(self, other):
        assert CipherResult(b"x", Direction.ENCRYPT, "AES") != other

    def test_immutable(self):
        result = CipherResult(b"x", Direction.ENCRYPT, "AES")

        with pytest.raises(AttributeError):
            result.bytes = b"y"

    @pytest.mark.parametrize("args,which", [
        ((None, Direction.ENCRYPT, "AES"), "bytes"),
        ((b"x", None, "AES"), "direction"),
        ((b"x", Direction.ENCRYPT, None), "algorithm"),
    ])
    def test_none_rejected(self, args, which):
        with pytest.raises(InvalidArgumentError) as excinfo:
            CipherResult(*args)
        assert excinfo.value.which == which

    def test_direction_type_checked(self):
        with pytest.raises(TypeError):
            CipherResult(b"x", 1, "AES")

    def test_repr_hides_bytes(self):
        text = repr(CipherResult(b"secret-output", Direction.ENCRYPT, "AES"))

        assert "secret-output" not in text
        assert "length=13" in text


class TestDigestResult:
    """Equality and helpers of digest results."""

    def test_fields(self):
        result = DigestResult("ALGO", b"\x31")

        assert result.algorithm == "ALGO"
        assert result.bytes == b"\x31"
        assert result.digest_length == 1
        assert result.hexdigest() == "31"

    def test_none_rejected(self):
        with pytest.raises(InvalidArgumentError):
            DigestResult(None, b"\x31")
        with pytest.raises(InvalidArgumentError):
            DigestResult("ALGO", None)

    def test_equality(self):
        assert DigestResult("ALGO", b"\x31") == DigestResult("ALGO", bytearray(b"\x31"))
        assert DigestResult("ALGO", b"\x31") != DigestResult("OTHER", b"\x31")
        assert DigestResult("ALGO", b"\x31") != DigestResult("ALGO", b"\x32")
        assert DigestResult("ALGO", b"\x31") != b"\x31"

    def test_hashable(self):
        assert len({DigestResult("ALGO", b"\x31"), DigestResult("ALGO", b"\x31")}) == 1

    def test_no_ordering(self):
        with pytest.raises(TypeError):
            DigestResult("ALGO", b"\x31") < DigestResult("ALGO", b"\x32")


class TestCallVariants:
    """Key material and init parameter tagging."""

    def test_key_material_kinds(self, aes_key, certificate):
        assert KeyMaterial.of_key(aes_key).kind is KeyKind.KEY
        assert KeyMaterial.of_certificate(certificate).kind is KeyKind.CERTIFICATE

    def test_key_material_none(self):
        with pytest.raises(InvalidArgumentError) as excinfo:
            KeyMaterial.of_certificate(None)
        assert excinfo.value.which == "certificate"

    def test_key_material_repr_hides_key(self, aes_key):
        assert "SecretKey" in repr(KeyMaterial.of_key(aes_key))
        assert aes_key.encoded.hex() not in repr(KeyMaterial.of_key(aes_key))

    def test_init_strategies(self):
        params = IvParameterSpec(bytes(16))
        source = random.Random(0)

        assert InitParameters.none().strategy is InitStrategy.NONE
        assert InitParameters.with_params(params).strategy is InitStrategy.PARAMS
        assert InitParameters.with_random(source).strategy is InitStrategy.RANDOM
        assert InitParameters.with_params_and_random(params, source).strategy is InitStrategy.PARAMS_AND_RANDOM

    def test_init_none_rejected(self):
        with pytest.raises(InvalidArgumentError):
            InitParameters.with_params(None)
        with pytest.raises(InvalidArgumentError):
            InitParameters.with_random(None)

    def test_results_report_algorithm(self):
        assert isinstance(CipherResult(b"x", Direction.ENCRYPT, "AES"), Algorithmic)
        assert isinstance(DigestResult("SHA-256", b"x"), Algorithmic)
