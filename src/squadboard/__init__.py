"""SquadBoard: a looking-for-teammates board API."""

__version__ = "0.1.0"
