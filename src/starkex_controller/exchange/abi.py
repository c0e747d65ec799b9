"""StarkExchange contract methods used by the controller.

Only signatures are needed: call data is the 4-byte selector followed by
the ABI-encoded arguments.
"""

STARK_EXCHANGE_METHODS: dict[str, list[str]] = {
    "register": ["uint256", "bytes"],
    "deposit": ["uint256", "uint256", "uint256"],
    "depositCancel": ["uint256", "uint256"],
    "depositReclaim": ["uint256", "uint256"],
    "withdraw": ["uint256"],
    "fullWithdrawalRequest": ["uint256"],
    "freezeRequest": ["uint256"],
    "verifyEscape": ["uint256[]"],
    "escape": ["uint256", "uint256", "uint256", "uint256"],
}


def method_signature(method: str) -> str:
    """Canonical signature, e.g. "deposit(uint256,uint256,uint256)"."""
    return f"{method}({','.join(STARK_EXCHANGE_METHODS[method])})"
