#!/usr/bin/env python3
"""Configuration for the PAS SDK

Configuration hierarchy:
- client_config: Tenant URL, token and transport options
- logging_config: Logging configuration

Values come from the process environment; an optional env file
(PAS_ENV_FILE, default .env) fills in anything not already set.
"""
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from .client_config import ClientConfig
from .logging_config import LoggingConfig

load_dotenv(os.getenv("PAS_ENV_FILE", ".env"), override=False)


@dataclass
class SDKConfig:
    """All SDK settings"""
    client: ClientConfig = field(default_factory=ClientConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls) -> 'SDKConfig':
        return cls(client=ClientConfig.from_env(), logging=LoggingConfig.from_env())


# Create global settings instance
settings = SDKConfig.from_env()

def get_settings() -> SDKConfig:
    """Get global settings instance"""
    return settings

def reload_settings() -> SDKConfig:
    """Reload settings from environment"""
    global settings
    settings = SDKConfig.from_env()
    return settings

__all__ = [
    'SDKConfig',
    'ClientConfig',
    'LoggingConfig',
    'get_settings',
    'reload_settings',
    'settings',
]
