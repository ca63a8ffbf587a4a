"""Config validation with external checkers."""

from dotctl.validators.checker import Checker, validate

__all__ = ["Checker", "validate"]
