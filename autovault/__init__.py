"""
AutoVault

A simulated yield-bearing vault with a timer-driven compounding engine,
durable state snapshots, and an on-chain balance lookup client.
"""

__version__ = "1.0.0"
