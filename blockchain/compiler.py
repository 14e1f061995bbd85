"""
Solidity Compiler
Compiles a contract source when no build artifact exists
"""

from pathlib import Path
from typing import Dict
from solcx import compile_standard, install_solc
from loguru import logger

from utils.errors import ArtifactNotFoundError


class SolidityCompiler:
    """Thin py-solc-x wrapper returning {'abi', 'bytecode'}"""

    def __init__(self, solc_version: str):
        self.solc_version = solc_version
        self._installed = False

    def _ensure_installed(self):
        if not self._installed:
            install_solc(self.solc_version)
            self._installed = True

    def compile(self, source_path: Path, contract_name: str) -> Dict:
        """
        Compile a single Solidity file

        Args:
            source_path: Path to the .sol file
            contract_name: Contract to extract from the output

        Returns:
            {'abi': [...], 'bytecode': '0x...'}
        """
        logger.info(f"Compiling {source_path} with solc {self.solc_version}")

        self._ensure_installed()

        source_key = source_path.name
        compiled = compile_standard(
            {
                "language": "Solidity",
                "sources": {source_key: {"content": source_path.read_text()}},
                "settings": {
                    "outputSelection": {"*": {"*": ["abi", "evm.bytecode"]}}
                },
            },
            solc_version=self.solc_version,
            base_path=str(source_path.parent),
            allow_paths=[str(source_path.parent)]
        )

        contracts = compiled.get("contracts", {}).get(source_key, {})

        if contract_name not in contracts:
            raise ArtifactNotFoundError(
                f"Contract {contract_name} not found in compiler output for {source_path}"
            )

        contract_interface = contracts[contract_name]
        bytecode = contract_interface["evm"]["bytecode"]["object"]

        return {
            "abi": contract_interface["abi"],
            "bytecode": bytecode if bytecode.startswith("0x") else "0x" + bytecode
        }
