"""
Reward Vault.

Encrypted reward account inventory and distribution engine.
"""

__version__ = "0.1.0"
