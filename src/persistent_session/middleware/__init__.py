"""Framework adapters for persistent sessions."""
