"""Application configuration helpers."""

from __future__ import annotations

from .env import env_flag, env_int, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .messenger import (
    THREAD_AVATAR_UPLOAD,
    CollectionConfig,
    MessengerConfig,
    get_messenger_config,
)
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config
from .webhooks import WebhookConfig, get_webhook_config

__all__ = [
    "THREAD_AVATAR_UPLOAD",
    "CollectionConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "MessengerConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "WebhookConfig",
    "configure_logging",
    "env_flag",
    "env_int",
    "get_database_config",
    "get_messenger_config",
    "get_storage_config",
    "get_webhook_config",
    "require_env_var",
    "require_env_vars",
]
