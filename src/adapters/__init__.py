"""Driving adapters (CLIs, consumers, user interfaces)."""

__all__: list[str] = []
