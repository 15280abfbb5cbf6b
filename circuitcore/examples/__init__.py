"""Runnable example circuits (python -m circuitcore.examples.<name>)."""
