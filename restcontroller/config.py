"""Runtime configuration for controllers and the error renderers."""

import os
from dataclasses import dataclass
from typing import Optional

ENVIRONMENTS = ("development", "test", "production")


@dataclass
class Config:
    """Configuration for dispatch and error rendering.

    Attributes:
        environment: One of "development", "test" or "production".
                     Defaults to "production".

        debug_errors: Render exception type, message and stack trace in error
                      pages. Only honoured when environment is "development";
                      production never discloses traces.

        default_layout: Layout template name used when a connection has not
                        chosen one with put_layout().

    Examples:
        Config(environment="development")

        # Read RESTCONTROLLER_ENV / RESTCONTROLLER_DEBUG_ERRORS
        Config.from_env()
    """

    environment: str = "production"
    debug_errors: bool = True
    default_layout: str = "application"

    def __post_init__(self):
        if self.environment not in ENVIRONMENTS:
            raise ValueError(
                f"Unknown environment {self.environment!r}, expected one of {', '.join(ENVIRONMENTS)}"
            )

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def traces_enabled(self) -> bool:
        """Whether error pages may include the stack trace."""
        return self.is_development and self.debug_errors

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> "Config":
        """Build a Config from RESTCONTROLLER_* environment variables."""
        env = os.environ if environ is None else environ
        environment = env.get("RESTCONTROLLER_ENV", "production").lower()
        debug_value = env.get("RESTCONTROLLER_DEBUG_ERRORS", "").lower()
        if debug_value in ("true", "1", "yes", "on"):
            debug_errors = True
        elif debug_value in ("false", "0", "no", "off"):
            debug_errors = False
        else:
            debug_errors = environment == "development"
        return cls(
            environment=environment,
            debug_errors=debug_errors,
            default_layout=env.get("RESTCONTROLLER_LAYOUT", "application"),
        )
