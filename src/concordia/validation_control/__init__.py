"""Validation controller exports."""

from .validation_controller import ALL_KINDS, ValidationController, default_controller

__all__ = ["ALL_KINDS", "ValidationController", "default_controller"]
