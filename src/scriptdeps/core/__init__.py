"""Core utilities shared across scriptdeps (configuration)."""
