"""Schema-definition validation exports."""

from .definition_validator import build_schema_tree, check_root_constraints

__all__ = ["build_schema_tree", "check_root_constraints"]
