"""
Source tree of the arena combat engine.

This directory holds the engine's top-level packages: core utilities, item
records, character stat derivation, status effects and combat resolution.
"""
