"""Custom exception hierarchy for evalo.

Exception Hierarchy:
    EvaloError (base)
    ├── RegistryError - malformed command registry (load-time contract)
    └── ConfigurationError - settings/configuration issues

The command palette itself never raises for degenerate states (empty results,
anonymous users, unknown roles). These exceptions only cover problems that
exist before a palette is ever opened.

Usage:
    from evalo.exceptions import RegistryError

    raise RegistryError("Duplicate command id", command_id="home")
"""

from typing import Any, Optional


class EvaloError(Exception):
    """Base exception for all evalo errors.

    Attributes:
        message: Human-readable error description
        context: Additional context about the error (e.g., ids, paths)
    """

    def __init__(self, message: str, **context: Any) -> None:
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


# =============================================================================
# Registry Errors
# =============================================================================


class RegistryError(EvaloError):
    """A command registry entry violates the registry contract."""

    def __init__(
        self,
        message: str = "Invalid command registry",
        *,
        command_id: Optional[str] = None,
        **context: Any,
    ) -> None:
        if command_id is not None:
            context["command_id"] = command_id
        super().__init__(message, **context)


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(EvaloError):
    """Configuration or settings error."""

    def __init__(
        self,
        message: str = "Configuration error",
        *,
        setting: Optional[str] = None,
        **context: Any,
    ) -> None:
        if setting:
            context["setting"] = setting
        super().__init__(message, **context)
