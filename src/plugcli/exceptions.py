"""Exception hierarchy for plugcli.

All exceptions inherit from :class:`PlugcliError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`plugcli.exit_codes`.
The top-level error handler in :func:`plugcli.app.main` catches
``PlugcliError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    PlugcliError (exit 1)
    +-- ConfigurationError    (exit 2)
    +-- LoadError             (exit 10)
    +-- ConfigError           (exit 1)
    +-- CommandNotFoundError  (exit 4)

Resolution misses inside the runtime are never raised; only the launcher
turns a miss into :class:`CommandNotFoundError`.
"""

from plugcli.exit_codes import (
    EXIT_COMMAND_NOT_FOUND,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_LOAD_ERROR,
)


class PlugcliError(Exception):
    """Base exception for all plugcli errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`plugcli.exit_codes`.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigurationError(PlugcliError):
    """Raised when the runtime is assembled incorrectly.

    Examples are adding a command before a default plugin exists, passing
    unknown loader options, or supplying a malformed command descriptor.
    """

    exit_code = EXIT_INVALID_USAGE


class LoadError(PlugcliError):
    """Raised when a required plugin directory or a plugin module cannot be loaded."""

    exit_code = EXIT_LOAD_ERROR


class ConfigError(PlugcliError):
    """Raised for unreadable or malformed configuration files."""

    exit_code = EXIT_GENERIC_FAILURE


class CommandNotFoundError(PlugcliError):
    """Raised by the launcher when no plugin provides the requested command."""

    exit_code = EXIT_COMMAND_NOT_FOUND
