"""
Wallet Manager
Provides the signing accounts used for deployment
"""

from typing import Dict, List, Optional
from decimal import Decimal
from web3 import Web3
from eth_account import Account
from eth_account.signers.local import LocalAccount
from loguru import logger

from utils.errors import SignerUnavailableError


class Signer:
    """
    Account able to authorize a deployment

    With a local account the transaction is signed here, otherwise the
    node signs for its own managed (unlocked) account.
    """

    def __init__(self, address: str, account: Optional[LocalAccount] = None):
        self.address = Web3.to_checksum_address(address)
        self.account = account

    @property
    def is_local(self) -> bool:
        return self.account is not None

    def __repr__(self) -> str:
        kind = 'local' if self.is_local else 'node'
        return f"Signer({self.address}, {kind})"


class WalletManager:
    """
    Signer provider

    - DEPLOYER_PRIVATE_KEY set: one local signer
    - Otherwise: the node's accounts (Hardhat / Anvil / Ganache dev nodes)
    """

    def __init__(self, w3: Web3, private_key: Optional[str] = None):
        """
        Initialize wallet manager

        Args:
            w3: Web3 instance
            private_key: Deployer private key (None = use node accounts)
        """
        self.w3 = w3
        self.private_key = private_key

    async def get_signers(self) -> List[Signer]:
        """
        Get available signers, first one is the deployer

        Returns:
            List of signers (never empty)
        """
        if self.private_key:
            account = Account.from_key(self.private_key)
            return [Signer(account.address, account)]

        accounts = self.w3.eth.accounts

        if not accounts:
            raise SignerUnavailableError(
                "No signer available: set DEPLOYER_PRIVATE_KEY or use a node with unlocked accounts"
            )

        logger.debug(f"Node provides {len(accounts)} accounts")
        return [Signer(address) for address in accounts]

    def get_balance(self, address: str) -> Decimal:
        """
        Get native balance

        Args:
            address: Account address

        Returns:
            Balance in ether
        """
        balance_wei = self.w3.eth.get_balance(address)
        return Decimal(str(self.w3.from_wei(balance_wei, 'ether')))

    def sign_transaction(self, transaction: Dict, signer: Signer):
        """
        Sign a transaction with the signer's local account

        Args:
            transaction: Transaction dict
            signer: Local signer

        Returns:
            Signed transaction
        """
        if not signer.is_local:
            raise SignerUnavailableError(f"{signer.address} is node-managed and cannot sign locally")

        try:
            return signer.account.sign_transaction(transaction)
        except Exception as e:
            logger.error(f"Error signing transaction: {e}")
            raise
