"""Shiritori domain services: word filter, registry, session and dispatch.

This package contains the game logic that Socket.IO handlers and HTTP
routes call into, keeping transport concerns separated from the rules.
"""
