"""
Deployment Errors
Every failure the deployer raises itself is a DeploymentError
"""


class DeploymentError(Exception):
    """Base error for a failed deployment"""


class ConfigurationError(DeploymentError):
    """Invalid value in the environment / .env"""


class RPCConnectionError(DeploymentError):
    """JSON-RPC endpoint unreachable"""


class SignerUnavailableError(DeploymentError):
    """No account is available to sign the deployment"""


class ArtifactNotFoundError(DeploymentError):
    """No (or more than one) build artifact for a contract name"""


class ContractNotDeployableError(DeploymentError):
    """Artifact has no bytecode (abstract contract or interface)"""


class DeploymentFailedError(DeploymentError):
    """Deployment transaction was mined but reverted"""

    def __init__(self, message: str, tx_hash: str = None):
        super().__init__(message)
        self.tx_hash = tx_hash
