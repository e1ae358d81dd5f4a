"""Domain layer — the NSID engine.

This layer depends only on the standard library. It performs no I/O and
no logging, and must never import from services, output, commands, or config.
"""
