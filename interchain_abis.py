"""Minimal ABI fragments for the Interchain Token Service contracts."""

INTERCHAIN_TOKEN_FACTORY_ABI = [
    {
        "inputs": [
            {"internalType": "address", "name": "deployer", "type": "address"},
            {"internalType": "bytes32", "name": "salt", "type": "bytes32"},
        ],
        "name": "interchainTokenId",
        "outputs": [{"internalType": "bytes32", "name": "tokenId", "type": "bytes32"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [
            {"internalType": "bytes32", "name": "salt", "type": "bytes32"},
            {"internalType": "string", "name": "name", "type": "string"},
            {"internalType": "string", "name": "symbol", "type": "string"},
            {"internalType": "uint8", "name": "decimals", "type": "uint8"},
            {"internalType": "uint256", "name": "initialSupply", "type": "uint256"},
            {"internalType": "address", "name": "minter", "type": "address"},
        ],
        "name": "deployInterchainToken",
        "outputs": [{"internalType": "bytes32", "name": "tokenId", "type": "bytes32"}],
        "stateMutability": "payable",
        "type": "function",
    },
    {
        "inputs": [
            {"internalType": "string", "name": "originalChainName", "type": "string"},
            {"internalType": "bytes32", "name": "salt", "type": "bytes32"},
            {"internalType": "address", "name": "minter", "type": "address"},
            {"internalType": "string", "name": "destinationChain", "type": "string"},
            {"internalType": "uint256", "name": "gasValue", "type": "uint256"},
        ],
        "name": "deployRemoteInterchainToken",
        "outputs": [{"internalType": "bytes32", "name": "tokenId", "type": "bytes32"}],
        "stateMutability": "payable",
        "type": "function",
    },
]


INTERCHAIN_TOKEN_SERVICE_ABI = [
    {
        "inputs": [{"internalType": "bytes32", "name": "tokenId", "type": "bytes32"}],
        "name": "interchainTokenAddress",
        "outputs": [
            {"internalType": "address", "name": "tokenAddress", "type": "address"}
        ],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [{"internalType": "bytes32", "name": "tokenId", "type": "bytes32"}],
        "name": "tokenManagerAddress",
        "outputs": [
            {
                "internalType": "address",
                "name": "tokenManagerAddress_",
                "type": "address",
            }
        ],
        "stateMutability": "view",
        "type": "function",
    },
]


INTERCHAIN_TOKEN_ABI = [
    {
        "inputs": [
            {"internalType": "string", "name": "destinationChain", "type": "string"},
            {"internalType": "bytes", "name": "recipient", "type": "bytes"},
            {"internalType": "uint256", "name": "amount", "type": "uint256"},
            {"internalType": "bytes", "name": "metadata", "type": "bytes"},
        ],
        "name": "interchainTransfer",
        "outputs": [],
        "stateMutability": "payable",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "decimals",
        "outputs": [{"internalType": "uint8", "name": "", "type": "uint8"}],
        "stateMutability": "view",
        "type": "function",
    },
]
