from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from .common import ChainSlug, MissingMappingError, coerce_member

TABLE_NAME = "RPC key"

# Names of the environment variables holding each network's RPC url.
RPC_KEYS: Mapping[ChainSlug, str] = MappingProxyType(
    {
        ChainSlug.AEVO: "AEVO_RPC",
        ChainSlug.ARBITRUM: "ARBITRUM_RPC",
        ChainSlug.LYRA: "LYRA_RPC",
        ChainSlug.OPTIMISM: "OPTIMISM_RPC",
        ChainSlug.BSC: "BSC_RPC",
        ChainSlug.POLYGON_MAINNET: "POLYGON_RPC",
        ChainSlug.MAINNET: "ETHEREUM_RPC",
        ChainSlug.PARALLEL: "PARALLEL_RPC",
        ChainSlug.HOOK: "HOOK_RPC",
        ChainSlug.MANTLE: "MANTLE_RPC",
        ChainSlug.REYA: "REYA_RPC",
        ChainSlug.ARBITRUM_SEPOLIA: "ARBITRUM_SEPOLIA_RPC",
        ChainSlug.OPTIMISM_SEPOLIA: "OPTIMISM_SEPOLIA_RPC",
        ChainSlug.SEPOLIA: "SEPOLIA_RPC",
        ChainSlug.POLYGON_MUMBAI: "POLYGON_MUMBAI_RPC",
        ChainSlug.ARBITRUM_GOERLI: "ARB_GOERLI_RPC",
        ChainSlug.AEVO_TESTNET: "AEVO_TESTNET_RPC",
        ChainSlug.LYRA_TESTNET: "LYRA_TESTNET_RPC",
        ChainSlug.OPTIMISM_GOERLI: "OPTIMISM_GOERLI_RPC",
        ChainSlug.BSC_TESTNET: "BSC_TESTNET_RPC",
        ChainSlug.GOERLI: "GOERLI_RPC",
        ChainSlug.XAI_TESTNET: "XAI_TESTNET_RPC",
        ChainSlug.SX_NETWORK_TESTNET: "SX_NETWORK_TESTNET_RPC",
        ChainSlug.SX_NETWORK: "SX_NETWORK_RPC",
        ChainSlug.MODE_TESTNET: "MODE_TESTNET_RPC",
        ChainSlug.VICTION_TESTNET: "VICTION_TESTNET_RPC",
        ChainSlug.BASE: "BASE_RPC",
        ChainSlug.MODE: "MODE_RPC",
        ChainSlug.ANCIENT8_TESTNET: "ANCIENT8_TESTNET_RPC",
        ChainSlug.ANCIENT8_TESTNET2: "ANCIENT8_TESTNET2_RPC",
        ChainSlug.HOOK_TESTNET: "HOOK_TESTNET_RPC",
        ChainSlug.REYA_CRONOS: "REYA_CRONOS_RPC",
        ChainSlug.SYNDR_SEPOLIA_L3: "SYNDR_SEPOLIA_L3_RPC",
        ChainSlug.POLYNOMIAL_TESTNET: "POLYNOMIAL_TESTNET_RPC",
        ChainSlug.CDK_TESTNET: "CDK_TESTNET_RPC",
    }
)


def get_rpc_key(chain: ChainSlug | int | str) -> str:
    """Name of the environment variable with the RPC url of `chain`.

    `chain` may be a `ChainSlug`, a chain id or a slug name."""
    slug = coerce_member(ChainSlug, chain, TABLE_NAME)
    try:
        return RPC_KEYS[slug]
    except KeyError:
        raise MissingMappingError(TABLE_NAME, slug) from None
