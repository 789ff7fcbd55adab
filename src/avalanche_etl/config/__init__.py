"""
Configuration helpers for the avalanche ETL.
"""

from .models import ConfigError, EtlConfig, load_config
from .settings import Secrets, get_secrets

__all__ = ["ConfigError", "EtlConfig", "load_config", "Secrets", "get_secrets"]
