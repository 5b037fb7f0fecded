"""Engine configuration.

EngineConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups. Per-route behaviour lives on ``RouteStrategy``,
not here.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Engine configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = EngineConfig(build_concurrency=32, log_level="debug")
    """

    # Build
    build_concurrency: int = 8  # Max pages generated at once per route

    # Status mapping for failures whose cause carries no explicit status
    client_error_status: int = 400
    server_error_status: int = 500

    # Logging (applied by the CLI only; the library never configures handlers)
    log_level: str = "info"

    def __post_init__(self) -> None:
        if self.build_concurrency < 1:
            from wren.errors import ConfigurationError

            msg = f"build_concurrency must be at least 1, got {self.build_concurrency}"
            raise ConfigurationError(msg)
