#!/usr/bin/env python3
"""PAS client configuration"""
import os
from dataclasses import dataclass

def _bool(val: str) -> bool:
    return val.lower() == "true"

def _float(val: str, default: float) -> float:
    try:
        return float(val) if val else default
    except ValueError:
        return default


@dataclass
class ClientConfig:
    """Tenant connection settings"""
    url: str = ""
    # Pre-issued OAuth/DMC bearer token
    token: str = ""
    source_header: str = "pas-sdk"
    timeout: float = 30.0
    # On-prem deployments with self-signed certificates
    skip_cert_verify: bool = False

    @classmethod
    def from_env(cls) -> 'ClientConfig':
        """Load client config from environment variables"""
        return cls(
            url=os.getenv("PAS_URL", ""),
            token=os.getenv("PAS_TOKEN", ""),
            source_header=os.getenv("PAS_SOURCE_HEADER", "pas-sdk"),
            timeout=_float(os.getenv("PAS_TIMEOUT", "30"), 30.0),
            skip_cert_verify=_bool(os.getenv("PAS_SKIP_CERT_VERIFY", "false")),
        )
