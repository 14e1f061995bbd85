"""
Utilities Package
RPC connection and deployment errors
"""

from .rpc_manager import RPCManager
from .errors import (
    DeploymentError,
    ConfigurationError,
    RPCConnectionError,
    SignerUnavailableError,
    ArtifactNotFoundError,
    ContractNotDeployableError,
    DeploymentFailedError
)

__all__ = [
    'RPCManager',
    'DeploymentError',
    'ConfigurationError',
    'RPCConnectionError',
    'SignerUnavailableError',
    'ArtifactNotFoundError',
    'ContractNotDeployableError',
    'DeploymentFailedError'
]
