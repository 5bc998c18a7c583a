"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~plugcli.exceptions.PlugcliError` subclass.
Shell wrappers can inspect the exit code to tell a missing command apart
from a broken plugin without parsing stderr.

Example::

    $ plugcli --src ./cli nope
    $ echo $?
    4   # EXIT_COMMAND_NOT_FOUND -- no plugin provides "nope"
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The runtime was configured incorrectly (bad options, no default plugin)."""

EXIT_COMMAND_NOT_FOUND = 4
"""No registered plugin provides a command matching the arguments."""

EXIT_LOAD_ERROR = 10
"""A plugin, command or extension could not be loaded."""

EXIT_CANCELLED = 130
"""The user interrupted the process (Ctrl-C)."""
