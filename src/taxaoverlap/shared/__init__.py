"""Shared building blocks: errors, logging, constants and domain models."""
