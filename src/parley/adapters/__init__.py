"""Adapters binding the messenger ports to concrete infrastructure."""
