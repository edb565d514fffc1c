"""Shared kernel: logging utilities used across layers."""
