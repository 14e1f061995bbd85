"""
Contract Deployer Package
Handles deployment orchestration, configuration, and signers
"""

from .deploy_engine import Deployer
from .config import DeployConfig
from .wallet_manager import WalletManager, Signer

__all__ = ['Deployer', 'DeployConfig', 'WalletManager', 'Signer']
