"""
Contract Manager
Resolves contract factories by contract name
"""

import json
from pathlib import Path
from typing import Dict, Optional
from web3 import Web3
from loguru import logger

from utils.errors import ArtifactNotFoundError, ContractNotDeployableError
from .compiler import SolidityCompiler
from .contract_factory import ContractFactory
from .transaction_builder import TransactionBuilder


class ContractManager:
    """
    Looks up compiled contracts and hands out ContractFactory instances

    Lookup order:
    1. Hardhat artifact <artifacts_dir>/**/<name>.json
    2. Solidity source <contracts_dir>/<name>.sol, compiled with solcx
    """

    def __init__(
        self,
        w3: Web3,
        wallet_manager,
        artifacts_dir: str = "artifacts",
        contracts_dir: str = "contracts",
        compiler: Optional[SolidityCompiler] = None,
        tx_builder: Optional[TransactionBuilder] = None,
        receipt_timeout: int = 300
    ):
        """
        Initialize Contract Manager

        Args:
            w3: Web3 instance
            wallet_manager: Wallet manager for signing
            artifacts_dir: Hardhat artifacts root
            contracts_dir: Solidity sources root
            compiler: Compiler used when no artifact exists
            tx_builder: Transaction builder for deployments
            receipt_timeout: Seconds to wait for a deployment receipt
        """
        self.w3 = w3
        self.wallet_manager = wallet_manager
        self.artifacts_dir = Path(artifacts_dir)
        self.contracts_dir = Path(contracts_dir)
        self.compiler = compiler
        self.tx_builder = tx_builder or TransactionBuilder(w3)
        self.receipt_timeout = receipt_timeout

        self._artifacts: Dict[str, Dict] = {}

    def _find_artifact_path(self, name: str) -> Optional[Path]:
        """Find <name>.json under the artifacts root"""
        if not self.artifacts_dir.is_dir():
            return None

        matches = sorted(self.artifacts_dir.rglob(f"{name}.json"))

        if len(matches) > 1:
            found = ", ".join(str(p) for p in matches)
            raise ArtifactNotFoundError(
                f"Multiple artifacts for {name}: {found}. Use a unique contract name"
            )

        return matches[0] if matches else None

    def load_artifact(self, name: str) -> Dict:
        """
        Load ABI and bytecode for a contract

        Args:
            name: Contract name

        Returns:
            {'abi': [...], 'bytecode': '0x...'}
        """
        if name in self._artifacts:
            return self._artifacts[name]

        artifact_path = self._find_artifact_path(name)

        if artifact_path is not None:
            logger.debug(f"Loading artifact {artifact_path}")

            with open(artifact_path, 'r') as f:
                contract_json = json.load(f)

            if 'abi' not in contract_json or 'bytecode' not in contract_json:
                raise ArtifactNotFoundError(f"Artifact {artifact_path} has no abi/bytecode")

            artifact = {'abi': contract_json['abi'], 'bytecode': contract_json['bytecode']}
        else:
            source_path = self.contracts_dir / f"{name}.sol"

            if not source_path.is_file() or self.compiler is None:
                raise ArtifactNotFoundError(
                    f"Contract artifact not found for {name} in {self.artifacts_dir} "
                    f"(run 'npx hardhat compile' first)"
                )

            artifact = self.compiler.compile(source_path, name)

        if artifact['bytecode'] in ('', '0x'):
            raise ContractNotDeployableError(
                f"{name} is abstract or an interface and can't be deployed"
            )

        self._artifacts[name] = artifact
        return artifact

    async def get_contract_factory(self, name: str, signer) -> ContractFactory:
        """
        Resolve a contract factory by name

        Args:
            name: Contract name
            signer: Signer deployments are sent from

        Returns:
            ContractFactory bound to the signer
        """
        artifact = self.load_artifact(name)

        return ContractFactory(
            self.w3,
            name,
            artifact['abi'],
            artifact['bytecode'],
            signer,
            self.wallet_manager,
            self.tx_builder,
            receipt_timeout=self.receipt_timeout
        )
