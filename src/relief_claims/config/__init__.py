"""Configuration for relief_claims."""
