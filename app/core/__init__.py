"""Configuration, logging and security."""
