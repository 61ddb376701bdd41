"""Tests for the shared manager behavior."""

import pytest

from securefacade import (
    AlgorithmNotAvailableError,
    CipherManager,
    CipherProcessor,
    DigestManager,
    DigestUnavailableError,
    FacadeConfig,
    InvalidArgumentError,
    SecurityManager,
)
from securefacade.core.config import CatalogConfig
from securefacade.provider.keys import SecretKey
from securefacade.provider.registry import MESSAGE_DIGEST, Provider, ProviderRegistry

from tests.test_registry import ConstantDigestSpi


class TestSecurityManager:
    """Discovery snapshot, factories and shared instances."""

    def test_algorithms_returns_copy(self, registry):
        manager = CipherManager(registry)
        names = manager.algorithms()
        names.clear()

        assert manager.algorithms()
        assert "AES" in manager.algorithms()

    def test_catalog_is_a_snapshot(self, registry):
        manager = DigestManager(registry)
        before = manager.algorithms()

        provider = Provider("Late")
        provider.put_service(MESSAGE_DIGEST, "LATE-HASH", ConstantDigestSpi)
        registry.add_provider(provider)

        assert manager.algorithms() == before
        assert "LATE-HASH" in DigestManager(registry).algorithms()

    def test_deduplication_can_be_disabled(self, registry):
        provider = Provider("Shadow")
        provider.put_service(MESSAGE_DIGEST, "SHA-256", ConstantDigestSpi)
        registry.add_provider(provider)
        config = FacadeConfig(catalog=CatalogConfig(deduplicate=False))

        assert DigestManager(registry).algorithms().count("SHA-256") == 1
        assert DigestManager(registry, config).algorithms().count("SHA-256") == 2

    def test_processor_none_rejected(self, registry):
        with pytest.raises(InvalidArgumentError) as excinfo:
            CipherManager(registry).processor(None)
        assert excinfo.value.which == "name"

    def test_processor_type_checked(self, registry):
        with pytest.raises(TypeError):
            CipherManager(registry).processor(42)

    def test_processors_are_fresh(self, registry):
        manager = CipherManager(registry)
        first = manager.processor("AES")

        assert isinstance(first, CipherProcessor)
        assert first is not manager.processor("AES")

    def test_shared_instances(self):
        assert CipherManager.shared() is CipherManager.shared()
        assert DigestManager.shared() is DigestManager.shared()
        assert CipherManager.shared() is not DigestManager.shared()

    def test_reset_shared(self):
        first = DigestManager.shared()
        DigestManager.reset_shared()

        assert DigestManager.shared() is not first

    def test_for_kind(self, registry):
        assert isinstance(SecurityManager.for_kind("Cipher", registry), CipherManager)
        assert isinstance(SecurityManager.for_kind("MessageDigest", registry), DigestManager)

    def test_for_kind_unknown(self):
        with pytest.raises(ValueError) as excinfo:
            SecurityManager.for_kind("Signature")
        assert type(excinfo.value) is ValueError
        assert "Signature" in str(excinfo.value)

    def test_for_kind_none(self):
        with pytest.raises(InvalidArgumentError):
            SecurityManager.for_kind(None)

    def test_base_is_abstract(self, registry):
        with pytest.raises(TypeError):
            SecurityManager("Cipher", registry)


class TestEmptyRegistry:
    """A registry without providers is used as given, not replaced."""

    def test_no_algorithms(self):
        assert DigestManager(ProviderRegistry()).algorithms() == []
        assert CipherManager(ProviderRegistry()).algorithms() == []

    def test_digest_unavailable(self):
        with pytest.raises(DigestUnavailableError):
            DigestManager(ProviderRegistry()).processor("SHA-256")

    def test_cipher_unavailable(self):
        processor = CipherManager(ProviderRegistry()).processor("AES")

        with pytest.raises(AlgorithmNotAvailableError):
            processor.encrypt(SecretKey("AES", bytes(16)), b"data")

    def test_registry_emptied_after_use(self, registry):
        registry.remove_provider("OpenSSL")

        assert len(registry) == 0
        assert DigestManager(registry).registry is registry
        assert DigestManager(registry).algorithms() == []
