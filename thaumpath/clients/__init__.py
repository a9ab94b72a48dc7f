"""Clients that retrieve a player's research snapshot."""
