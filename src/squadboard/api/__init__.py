"""HTTP API for SquadBoard."""
