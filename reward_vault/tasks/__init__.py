"""Periodic jobs."""

from reward_vault.tasks.expiry_sweep_task import run_expiry_sweep

__all__ = ["run_expiry_sweep"]
