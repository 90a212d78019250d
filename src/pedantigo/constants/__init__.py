"""Constant tables shared across pedantigo subsystems."""
