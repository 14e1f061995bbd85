"""
Deploy Engine
Orchestrates one contract deployment and reports the result
"""

import sys
from typing import Optional, Tuple
from loguru import logger
from web3 import Web3

from blockchain.compiler import SolidityCompiler
from blockchain.contract_factory import DeployedContract
from blockchain.contract_manager import ContractManager
from blockchain.transaction_builder import TransactionBuilder
from utils.rpc_manager import RPCManager

from .config import DeployConfig
from .wallet_manager import Signer, WalletManager


CONTRACT_NAME = "CatDAOContract"
CONTRACT_LABEL = "CatDAO"

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


class Deployer:
    """
    Single deployment run

    connect -> signer -> factory -> deploy -> print address
    Any error ends the run with exit code 1; nothing is retried.
    """

    def __init__(
        self,
        config: Optional[DeployConfig] = None,
        w3: Optional[Web3] = None,
        wallet_manager=None,
        contract_manager=None,
        contract_name: str = CONTRACT_NAME
    ):
        """
        Initialize Deployer

        Collaborators left as None are created from the configuration
        when the run starts.

        Args:
            config: Deployment settings (None = read environment)
            w3: Web3 instance
            wallet_manager: Signer provider
            contract_manager: Contract factory resolver
            contract_name: Contract to deploy
        """
        self.config = config
        self.w3 = w3
        self.wallet_manager = wallet_manager
        self.contract_manager = contract_manager
        self.contract_name = contract_name

    def _setup(self):
        """Create missing collaborators from the configuration"""
        if self.config is None:
            self.config = DeployConfig.from_env()

        logger.debug(f"Using {self.config!r}")

        if self.w3 is None:
            self.w3 = RPCManager(self.config.rpc_url, self.config.poa_chain).connect()

        if self.wallet_manager is None:
            self.wallet_manager = WalletManager(self.w3, self.config.private_key)

        if self.contract_manager is None:
            self.contract_manager = ContractManager(
                self.w3,
                self.wallet_manager,
                artifacts_dir=self.config.artifacts_dir,
                contracts_dir=self.config.contracts_dir,
                compiler=SolidityCompiler(self.config.solc_version),
                tx_builder=TransactionBuilder(
                    self.w3,
                    chain_id=self.config.chain_id,
                    gas_limit=self.config.gas_limit
                ),
                receipt_timeout=self.config.receipt_timeout
            )

    async def deploy(self) -> Tuple[Signer, DeployedContract]:
        """
        Deploy the contract once

        Returns:
            (deploying signer, deployed contract)
        """
        self._setup()

        signers = await self.wallet_manager.get_signers()
        deployer = signers[0]

        logger.info(f"Deploying from: {deployer.address}")
        logger.info(f"Account balance: {self.wallet_manager.get_balance(deployer.address)} ETH")

        factory = await self.contract_manager.get_contract_factory(self.contract_name, deployer)

        logger.info(f"Deploying {self.contract_name}...")
        deployed = await factory.deploy()

        logger.info(f"Confirmed in block {deployed.block_number}, gas used {deployed.gas_used}")

        return deployer, deployed

    async def run(self) -> int:
        """
        Run the deployment and report it

        Returns:
            Exit code (0 = deployed, 1 = any error)
        """
        try:
            deployer, deployed = await self.deploy()
        except Exception as e:
            logger.opt(exception=e).error(f"Deployment of {self.contract_name} failed")
            print(e, file=sys.stderr)
            return EXIT_FAILURE

        print(f"Deploying contracts with the account: {deployer.address}")
        print(f"{CONTRACT_LABEL} Contract Address: {deployed.address}")

        return EXIT_SUCCESS
