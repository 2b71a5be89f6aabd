"""Core interfaces.

Structural contracts (Protocol) implemented by the adapters, so the core
depends on abstractions rather than concrete file formats.
"""
