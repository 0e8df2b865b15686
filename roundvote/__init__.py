"""Round-based election service: phases, candidate and voter registries, tally."""
__version__ = "0.1.0"
