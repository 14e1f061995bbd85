"""
Transaction Builder
Constructs contract-creation transactions
"""

from typing import Dict, Optional
from decimal import Decimal
from web3 import Web3
from loguru import logger


GAS_BUFFER = 1.2  # 20% over the estimate


class TransactionBuilder:
    """
    Builds deployment transactions

    Fee fields follow the chain: EIP-1559 when the latest block has a base
    fee, legacy gasPrice otherwise.
    """

    def __init__(
        self,
        w3: Web3,
        chain_id: Optional[int] = None,
        gas_limit: Optional[int] = None
    ):
        """
        Initialize Transaction Builder

        Args:
            w3: Web3 instance
            chain_id: Chain id override (None = ask the node)
            gas_limit: Fixed gas limit (None = estimate)
        """
        self.w3 = w3
        self.chain_id = chain_id
        self.gas_limit = gas_limit

    def transact_params(self, sender: str) -> Dict:
        """
        Params for a node-signed transaction

        Only the configured overrides are set, the node fills in the rest.

        Args:
            sender: Node-managed deployer address

        Returns:
            Transaction params for constructor.transact()
        """
        params = {'from': sender}

        if self.gas_limit is not None:
            params['gas'] = self.gas_limit

        if self.chain_id is not None:
            params['chainId'] = self.chain_id

        return params

    def get_nonce(self, sender: str) -> int:
        """Next nonce including pending transactions"""
        return self.w3.eth.get_transaction_count(sender, 'pending')

    def get_fee_fields(self) -> Dict:
        """
        Fee fields for the current network

        Returns:
            {'maxFeePerGas', 'maxPriorityFeePerGas'} or {'gasPrice'}
        """
        latest = self.w3.eth.get_block('latest')
        base_fee = latest.get('baseFeePerGas')

        if base_fee is None:
            return {'gasPrice': self.w3.eth.gas_price}

        tip = self.w3.eth.max_priority_fee

        return {
            'maxFeePerGas': 2 * base_fee + tip,
            'maxPriorityFeePerGas': tip
        }

    def build_deploy_transaction(self, constructor, sender: str) -> Dict:
        """
        Build contract-creation transaction

        Args:
            constructor: web3 ContractConstructor (factory.constructor(*args))
            sender: Deployer address

        Returns:
            Unsigned transaction dict
        """
        if self.gas_limit is not None:
            gas_limit = self.gas_limit
        else:
            gas_estimate = constructor.estimate_gas({'from': sender})
            gas_limit = int(gas_estimate * GAS_BUFFER)

        tx_params = {
            'from': sender,
            'nonce': self.get_nonce(sender),
            'gas': gas_limit,
            'chainId': self.chain_id if self.chain_id is not None else self.w3.eth.chain_id
        }
        tx_params.update(self.get_fee_fields())

        transaction = constructor.build_transaction(tx_params)

        logger.info(f"Gas limit: {gas_limit}")
        logger.debug(f"Deployment transaction: nonce={tx_params['nonce']} chainId={tx_params['chainId']}")

        return transaction

    def estimate_cost(self, transaction: Dict) -> Decimal:
        """
        Worst-case cost of a transaction

        Args:
            transaction: Transaction dict with gas and fee fields

        Returns:
            Cost in ether
        """
        price = transaction.get('maxFeePerGas', transaction.get('gasPrice', 0))
        cost_wei = transaction['gas'] * price
        return Decimal(str(self.w3.from_wei(cost_wei, 'ether')))
