"""Keys, token accounts, pool models, account layouts and swap instruction builders."""

__version__ = "1.0.0"

__all__ = [
    "errors",
    "fees",
    "graph",
    "instructions",
    "pools",
    "pubkey",
    "state",
    "token",
]