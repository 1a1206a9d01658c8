"""Utility modules for SvcHound.

Modules:
    console: Rich console output
    helpers: General helper functions
    logging: Logging configuration
    network: Reachability probing
"""
