"""Configuration property models."""
