"""Shared fixtures: keys, certificates and clean process-wide state."""

import datetime
import os

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.x509.oid import NameOID

from securefacade.core.config import FacadeConfig
from securefacade.core.manager import SecurityManager
from securefacade.provider.keys import SecretKey
from securefacade.provider.registry import ProviderRegistry
from securefacade.provider.openssl import OpenSSLProvider


@pytest.fixture(autouse=True)
def clean_state(monkeypatch):
    """Start every test without environment overrides or shared instances."""
    for name in list(os.environ):
        if name.startswith("SECUREFACADE_"):
            monkeypatch.delenv(name)
    FacadeConfig.reset_instance()
    SecurityManager.reset_shared()
    yield
    FacadeConfig.reset_instance()
    SecurityManager.reset_shared()


@pytest.fixture
def registry():
    """Private registry holding only the OpenSSL provider."""
    return ProviderRegistry([OpenSSLProvider()])


@pytest.fixture
def aes_key():
    return SecretKey("AES", bytes(range(16)))


@pytest.fixture
def aes256_key():
    return SecretKey("AES", bytes(range(32)))


@pytest.fixture(scope="session")
def rsa_private_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def rsa_public_key(rsa_private_key):
    return rsa_private_key.public_key()


def _self_signed(private_key, key_usage=None):
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "securefacade test")])
    now = datetime.datetime.now(datetime.timezone.utc)
    builder = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(private_key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - datetime.timedelta(days=1))
        .not_valid_after(now + datetime.timedelta(days=30))
    )
    if key_usage is not None:
        builder = builder.add_extension(key_usage, critical=True)
    return builder.sign(private_key, hashes.SHA256())


def _key_usage(data_encipherment):
    return x509.KeyUsage(
        digital_signature=True,
        content_commitment=False,
        key_encipherment=True,
        data_encipherment=data_encipherment,
        key_agreement=False,
        key_cert_sign=False,
        crl_sign=False,
        encipher_only=False,
        decipher_only=False,
    )


@pytest.fixture(scope="session")
def certificate(rsa_private_key):
    """Certificate without a KeyUsage extension."""
    return _self_signed(rsa_private_key)


@pytest.fixture(scope="session")
def encipherment_certificate(rsa_private_key):
    """Certificate whose critical KeyUsage allows data encipherment."""
    return _self_signed(rsa_private_key, _key_usage(data_encipherment=True))


@pytest.fixture(scope="session")
def signing_only_certificate(rsa_private_key):
    """Certificate whose critical KeyUsage forbids data encipherment."""
    return _self_signed(rsa_private_key, _key_usage(data_encipherment=False))
