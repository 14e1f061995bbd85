"""
Contract Factory
Deploys a compiled contract and wraps the result
"""

from typing import Dict, List
from web3 import Web3
from loguru import logger

from utils.errors import DeploymentFailedError


class DeployedContract:
    """
    Result of a confirmed deployment

    address is taken verbatim from the receipt's contractAddress.
    """

    def __init__(self, name: str, address: str, transaction_hash: str, receipt, contract=None):
        self.name = name
        self.address = address
        self.transaction_hash = transaction_hash
        self.receipt = receipt
        self.contract = contract

    @property
    def block_number(self) -> int:
        return self.receipt['blockNumber']

    @property
    def gas_used(self) -> int:
        return self.receipt['gasUsed']

    def __repr__(self) -> str:
        return f"DeployedContract({self.name} at {self.address})"


class ContractFactory:
    """
    Named handle producing deployable contract instances
    """

    def __init__(
        self,
        w3: Web3,
        name: str,
        abi: List[Dict],
        bytecode: str,
        signer,
        wallet_manager,
        tx_builder,
        receipt_timeout: int = 300
    ):
        """
        Initialize Contract Factory

        Args:
            w3: Web3 instance
            name: Contract name
            abi: Contract ABI
            bytecode: Creation bytecode (0x hex)
            signer: Signer the deployment is sent from
            wallet_manager: Wallet manager for local signing
            tx_builder: TransactionBuilder
            receipt_timeout: Seconds to wait for the receipt
        """
        self.w3 = w3
        self.name = name
        self.abi = abi
        self.bytecode = bytecode
        self.signer = signer
        self.wallet_manager = wallet_manager
        self.tx_builder = tx_builder
        self.receipt_timeout = receipt_timeout

    async def deploy(self, *constructor_args) -> DeployedContract:
        """
        Submit the deployment and wait for confirmation

        Args:
            constructor_args: Constructor arguments

        Returns:
            DeployedContract
        """
        Contract = self.w3.eth.contract(abi=self.abi, bytecode=self.bytecode)
        constructor = Contract.constructor(*constructor_args)

        if self.signer.is_local:
            transaction = self.tx_builder.build_deploy_transaction(constructor, self.signer.address)

            logger.info(f"Estimated deployment cost: {self.tx_builder.estimate_cost(transaction)} ETH")

            signed_tx = self.wallet_manager.sign_transaction(transaction, self.signer)
            tx_hash = self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)
        else:
            # Node signs for its own account
            tx_hash = constructor.transact(self.tx_builder.transact_params(self.signer.address))

        tx_hash_hex = self.w3.to_hex(tx_hash)
        logger.info(f"Transaction sent: {tx_hash_hex}")
        logger.info("Waiting for confirmation...")

        receipt = self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=self.receipt_timeout)

        if receipt['status'] != 1:
            raise DeploymentFailedError(
                f"Deployment of {self.name} reverted (transaction {tx_hash_hex})",
                tx_hash=tx_hash_hex
            )

        contract_address = receipt['contractAddress']

        logger.success(f"✅ {self.name} deployed at {contract_address}")
        logger.debug(f"Block: {receipt['blockNumber']}, gas used: {receipt['gasUsed']}")

        return DeployedContract(
            name=self.name,
            address=contract_address,
            transaction_hash=tx_hash_hex,
            receipt=receipt,
            contract=self.w3.eth.contract(address=contract_address, abi=self.abi)
        )
