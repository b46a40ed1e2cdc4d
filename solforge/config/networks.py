from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Network:
    id: str
    name: str
    chain_id: int
    block_explorer: str
    is_testnet: bool = False


NETWORKS = [
    Network("ethereum", "Ethereum Mainnet", 1, "https://etherscan.io"),
    Network("ethereum-sepolia", "Sepolia Testnet", 11155111, "https://sepolia.etherscan.io", True),
    Network("bsc", "BNB Smart Chain", 56, "https://bscscan.com"),
    Network("bsc-testnet", "BNB Smart Chain Testnet", 97, "https://testnet.bscscan.com", True),
    Network("polygon", "Polygon", 137, "https://polygonscan.com"),
    Network("polygon-amoy", "Polygon Amoy", 80002, "https://amoy.polygonscan.com", True),
    Network("arbitrum", "Arbitrum One", 42161, "https://arbiscan.io"),
    Network("arbitrum-sepolia", "Arbitrum Sepolia", 421614, "https://sepolia.arbiscan.io", True),
    Network("optimism", "Optimism", 10, "https://optimistic.etherscan.io"),
    Network("optimism-sepolia", "Optimism Sepolia", 11155420, "https://sepolia-optimism.etherscan.io", True),
    Network("avalanche", "Avalanche C-Chain", 43114, "https://snowtrace.io"),
    Network("avalanche-fuji", "Avalanche Fuji", 43113, "https://testnet.snowtrace.io", True),
]


def get_network(chain_id: int) -> Optional[Network]:
    return next((network for network in NETWORKS if network.chain_id == chain_id), None)
