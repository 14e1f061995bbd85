"""
Deployment Configuration
Settings loaded from the environment / .env file
"""

import os
from typing import Optional
from dotenv import load_dotenv

from utils.errors import ConfigurationError

load_dotenv()


DEFAULT_RPC_URL = "http://127.0.0.1:8545"
DEFAULT_SOLC_VERSION = "0.8.20"
DEFAULT_RECEIPT_TIMEOUT = 300


def _get_int(name: str, default: Optional[int] = None) -> Optional[int]:
    """Read an integer variable, None when unset"""
    value = os.getenv(name)

    if value is None or value.strip() == "":
        return default

    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")


def _get_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)

    if value is None:
        return default

    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class DeployConfig:
    """
    Deployment settings

    Network and credentials are supplied by the execution environment;
    nothing here is passed on the command line.
    """

    def __init__(
        self,
        rpc_url: str = DEFAULT_RPC_URL,
        private_key: Optional[str] = None,
        chain_id: Optional[int] = None,
        artifacts_dir: str = "artifacts",
        contracts_dir: str = "contracts",
        solc_version: str = DEFAULT_SOLC_VERSION,
        gas_limit: Optional[int] = None,
        receipt_timeout: int = DEFAULT_RECEIPT_TIMEOUT,
        poa_chain: bool = False
    ):
        self.rpc_url = rpc_url
        self.private_key = private_key
        self.chain_id = chain_id
        self.artifacts_dir = artifacts_dir
        self.contracts_dir = contracts_dir
        self.solc_version = solc_version
        self.gas_limit = gas_limit
        self.receipt_timeout = receipt_timeout
        self.poa_chain = poa_chain

    @classmethod
    def from_env(cls) -> 'DeployConfig':
        """
        Build configuration from environment variables

        Raises:
            ConfigurationError: an integer variable does not parse
        """
        return cls(
            rpc_url=os.getenv('RPC_URL', DEFAULT_RPC_URL),
            private_key=os.getenv('DEPLOYER_PRIVATE_KEY') or None,
            chain_id=_get_int('CHAIN_ID'),
            artifacts_dir=os.getenv('ARTIFACTS_DIR', 'artifacts'),
            contracts_dir=os.getenv('CONTRACTS_DIR', 'contracts'),
            solc_version=os.getenv('SOLC_VERSION', DEFAULT_SOLC_VERSION),
            gas_limit=_get_int('DEPLOY_GAS_LIMIT'),
            receipt_timeout=_get_int('RECEIPT_TIMEOUT', DEFAULT_RECEIPT_TIMEOUT),
            poa_chain=_get_bool('POA_CHAIN')
        )

    def __repr__(self) -> str:
        # Never print the key
        return (
            f"DeployConfig(rpc_url={self.rpc_url!r}, "
            f"local_signer={self.private_key is not None}, "
            f"chain_id={self.chain_id}, artifacts_dir={self.artifacts_dir!r})"
        )
