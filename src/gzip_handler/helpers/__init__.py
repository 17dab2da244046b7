"""Helpers for request negotiation and content sniffing."""
