"""Configuration, errors and security primitives."""
