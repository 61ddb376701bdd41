"""Provider registry, engines and the default OpenSSL provider."""

from securefacade.provider.engine import (
    DECRYPT_MODE,
    ENCRYPT_MODE,
    CipherEngine,
    DigestEngine,
    EngineState,
)
from securefacade.provider.keys import (
    GCMParameterSpec,
    IvParameterSpec,
    OAEPParameterSpec,
    SecretKey,
)
from securefacade.provider.registry import (
    CIPHER,
    MESSAGE_DIGEST,
    Provider,
    ProviderRegistry,
    Service,
    default_registry,
    reset_default_registry,
)

__all__ = [
    "CIPHER",
    "MESSAGE_DIGEST",
    "ENCRYPT_MODE",
    "DECRYPT_MODE",
    "CipherEngine",
    "DigestEngine",
    "EngineState",
    "Provider",
    "ProviderRegistry",
    "Service",
    "default_registry",
    "reset_default_registry",
    "SecretKey",
    "IvParameterSpec",
    "GCMParameterSpec",
    "OAEPParameterSpec",
]
