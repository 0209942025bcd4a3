"""Storefront settings loaded from environment variables."""
import os
from dataclasses import dataclass

from storefront.errors import ERROR_UNKNOWN_STORAGE_BACKEND

STORAGE_BACKENDS = ("memory", "file", "redis")

DEFAULT_CART_STORAGE_NAME = "cart-storage"


def _get_env(*keys: str, default: str | None = None) -> str | None:
    for key in keys:
        value = os.environ.get(key)
        if value is not None and value.strip() != "":
            return value.strip()
    return default


@dataclass(frozen=True)
class Settings:
    cart_storage_name: str
    cart_storage_backend: str
    cart_storage_dir: str
    upstash_redis_rest_url: str
    upstash_redis_rest_token: str
    currency: str


def load_settings() -> Settings:
    """
    Build settings from the current environment.

    Raises:
        ValueError: If CART_STORAGE_BACKEND names an unknown backend
    """
    backend = (_get_env("CART_STORAGE_BACKEND", default="memory") or "memory").lower()
    if backend not in STORAGE_BACKENDS:
        raise ValueError(f"{ERROR_UNKNOWN_STORAGE_BACKEND}: {backend}")

    return Settings(
        cart_storage_name=_get_env("CART_STORAGE_NAME", default=DEFAULT_CART_STORAGE_NAME) or DEFAULT_CART_STORAGE_NAME,
        cart_storage_backend=backend,
        cart_storage_dir=_get_env("CART_STORAGE_DIR", default=os.path.join(".", "data")) or "data",
        upstash_redis_rest_url=_get_env("UPSTASH_REDIS_REST_URL", default="") or "",
        upstash_redis_rest_token=_get_env("UPSTASH_REDIS_REST_TOKEN", default="") or "",
        currency=_get_env("CURRENCY", default="USD") or "USD",
    )
