"""
RPC Manager
Creates the Web3 connection used for the deployment
"""

from typing import Optional
from web3 import Web3
from web3.middleware import ExtraDataToPOAMiddleware
from loguru import logger

from .errors import RPCConnectionError


class RPCManager:
    """
    Single-endpoint RPC connection

    The endpoint and POA flag come from DeployConfig.
    """
    
    def __init__(self, rpc_url: str, poa_chain: bool = False):
        """
        Initialize RPC Manager
        
        Args:
            rpc_url: JSON-RPC HTTP endpoint
            poa_chain: Inject extra-data POA middleware (Clique/BSC/Polygon)
        """
        self.rpc_url = rpc_url
        self.poa_chain = poa_chain
        self.w3: Optional[Web3] = None
    
    def connect(self) -> Web3:
        """
        Create Web3 instance and test the connection
        
        Returns:
            Connected Web3 instance
        """
        if self.w3 is not None:
            return self.w3
        
        w3 = Web3(Web3.HTTPProvider(self.rpc_url))
        
        if self.poa_chain:
            w3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)
            logger.debug("POA middleware injected")
        
        if not w3.is_connected():
            raise RPCConnectionError(f"Failed to connect to network at {self.rpc_url}")
        
        logger.info(f"Connected to {self.rpc_url} (chain id {w3.eth.chain_id})")
        self.w3 = w3
        return w3
    