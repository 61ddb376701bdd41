"""Tests for the provider registry and the OpenSSL provider."""

import hashlib

import pytest

from securefacade.provider.engine import DigestEngine
from securefacade.provider.exceptions import NoSuchAlgorithmError
from securefacade.provider.registry import (
    CIPHER,
    MESSAGE_DIGEST,
    Provider,
    ProviderRegistry,
    default_registry,
    reset_default_registry,
)
from securefacade.provider.spi import DigestSpi


class ConstantDigestSpi(DigestSpi):
    """Digest that always answers with the same four bytes."""

    @property
    def digest_length(self):
        return 4

    def engine_update(self, data):
        pass

    def engine_digest(self):
        return b"\x00\x01\x02\x03"


def _constant_provider(name="Constant"):
    provider = Provider(name, info="Test digests")
    provider.put_service(MESSAGE_DIGEST, "sha-256", ConstantDigestSpi, ("CONST",))
    return provider


class TestProvider:
    """Service registration and lookup on a single provider."""

    def test_empty_name_rejected(self):
        with pytest.raises(ValueError):
            Provider("")

    def test_lookup_is_case_insensitive(self):
        provider = _constant_provider()

        assert provider.get_service(MESSAGE_DIGEST, "SHA-256") is not None
        assert provider.get_service(MESSAGE_DIGEST, "const") is not None
        assert provider.get_service(CIPHER, "SHA-256") is None

    def test_service_carries_provider_name(self):
        service = _constant_provider("Mine").get_service(MESSAGE_DIGEST, "sha-256")

        assert service.provider_name == "Mine"
        assert isinstance(service.new_instance(), ConstantDigestSpi)

    def test_put_service_replaces_same_name(self):
        provider = _constant_provider()
        provider.put_service(MESSAGE_DIGEST, "SHA-256", ConstantDigestSpi)

        assert len(provider.services(MESSAGE_DIGEST)) == 1
        assert provider.get_service(MESSAGE_DIGEST, "CONST") is None

    def test_replacing_service_keeps_alias_owned_by_another(self):
        provider = Provider("Shared")
        first = provider.put_service(MESSAGE_DIGEST, "FIRST", ConstantDigestSpi, ("COMMON",))
        provider.put_service(MESSAGE_DIGEST, "SECOND", ConstantDigestSpi, ("COMMON",))

        provider.put_service(MESSAGE_DIGEST, "SECOND", ConstantDigestSpi)

        assert provider.get_service(MESSAGE_DIGEST, "COMMON") is first


class TestProviderRegistry:
    """Provider ordering and cross-provider lookups."""

    def test_insert_at_front_takes_preference(self, registry):
        position = registry.insert_provider_at(_constant_provider(), 1)

        assert position == 1
        service = registry.find_service(MESSAGE_DIGEST, "SHA-256")
        assert service.provider_name == "Constant"
        assert len(registry.find_services(MESSAGE_DIGEST, "SHA-256")) == 2

    def test_duplicate_provider_name_rejected(self, registry):
        assert registry.add_provider(_constant_provider()) == 2
        assert registry.add_provider(_constant_provider()) == -1
        assert len(registry) == 2

    def test_remove_provider(self, registry):
        registry.add_provider(_constant_provider())

        assert registry.remove_provider("Constant") is True
        assert registry.remove_provider("Constant") is False
        assert [p.name for p in registry] == ["OpenSSL"]

    def test_algorithms_deduplicated_across_providers(self, registry):
        registry.insert_provider_at(_constant_provider(), 1)

        names = registry.get_algorithms(MESSAGE_DIGEST)
        assert names[0] == "sha-256"
        assert "SHA-256" not in names

    def test_algorithms_with_duplicates(self, registry):
        registry.insert_provider_at(_constant_provider(), 1)

        names = registry.get_algorithms(MESSAGE_DIGEST, deduplicate=False)
        assert "sha-256" in names
        assert "SHA-256" in names

    def test_default_registry_is_shared(self):
        reset_default_registry()
        first = default_registry()

        assert default_registry() is first
        assert first.get_provider("OpenSSL") is not None


class TestOpenSSLProvider:
    """Services registered by the default provider."""

    def test_core_ciphers_registered(self, registry):
        names = registry.get_algorithms(CIPHER)

        for expected in ("AES", "AES/GCM/NoPadding", "RSA"):
            assert expected in names

    def test_aliases_resolve(self, registry):
        assert registry.find_service(CIPHER, "Rijndael").algorithm == "AES"
        assert registry.find_service(MESSAGE_DIGEST, "SHA").algorithm == "SHA-1"
        assert registry.find_service(MESSAGE_DIGEST, "sha256").algorithm == "SHA-256"

    @pytest.mark.parametrize("name,reference", [
        ("MD5", "md5"),
        ("SHA-1", "sha1"),
        ("SHA-256", "sha256"),
        ("SHA-512", "sha512"),
        ("SHA3-256", "sha3_256"),
    ])
    def test_digests_match_hashlib(self, registry, name, reference):
        engine = DigestEngine.get_instance(name, registry)

        assert engine.digest(b"abc") == hashlib.new(reference, b"abc").digest()

    def test_unknown_digest(self, registry):
        with pytest.raises(NoSuchAlgorithmError):
            DigestEngine.get_instance("NOPE", registry)
