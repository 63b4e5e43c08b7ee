"""Application composition layer for the dashboard.

Modules here own runtime settings, the session guard, one-shot timer
bookkeeping and the lazy wiring of adapters into use cases.
"""
