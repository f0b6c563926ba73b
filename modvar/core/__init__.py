"""Configuration, logging, errors, randomness and hex codec."""
