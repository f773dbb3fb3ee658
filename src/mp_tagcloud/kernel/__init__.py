"""Kernel – errors and tagging primitives shared by every layer."""
