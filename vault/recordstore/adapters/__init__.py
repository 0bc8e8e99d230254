from .inmemory import InMemoryVaultStore

__all__ = ["InMemoryVaultStore"]
