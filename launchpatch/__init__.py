"""
launchpatch - pre-launch middleware for game launch requests.

Registers platform- and hardware-gated workarounds at startup and applies
them to every launch request right before the game process is spawned.
"""

__version__ = "0.1.0"
