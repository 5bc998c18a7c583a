"""Loaders that read commands, extensions and plugins off disk.

* :func:`load_plugin_from_directory` -- a whole plugin directory.
* :func:`load_command_from_file` / :func:`load_command_from_preload` --
  one command from a module or a descriptor.
* :func:`load_extension_from_file` -- one extension module.
"""

from plugcli.loaders.command_loader import load_command_from_file, load_command_from_preload
from plugcli.loaders.extension_loader import load_extension_from_file
from plugcli.loaders.plugin_loader import load_plugin_from_directory

__all__ = [
    "load_command_from_file",
    "load_command_from_preload",
    "load_extension_from_file",
    "load_plugin_from_directory",
]
