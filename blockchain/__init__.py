"""
Blockchain Interaction Package
Handles contract factory resolution, compilation, and transaction building
"""

from .contract_manager import ContractManager
from .contract_factory import ContractFactory, DeployedContract
from .transaction_builder import TransactionBuilder
from .compiler import SolidityCompiler

__all__ = [
    'ContractManager',
    'ContractFactory',
    'DeployedContract',
    'TransactionBuilder',
    'SolidityCompiler'
]
