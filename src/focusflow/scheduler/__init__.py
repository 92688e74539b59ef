"""Periodic jobs driven by the asyncio loop."""
