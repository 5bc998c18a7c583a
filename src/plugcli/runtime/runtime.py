"""The :class:`Runtime` -- plugin registry, extension registry and config.

A runtime is assembled with chainable builder calls and then run::

    runtime = (
        Runtime("movie")
        .add_default_plugin("./src")
        .add_plugins("./plugins", matching="movie-*")
        .add_extension("clock", lambda ctx: setattr(ctx, "clock", time.time))
    )
    context = runtime.run(["quote", "random"])

Registration is single-threaded and ordered:

* ``plugins`` keeps registration order; the default plugin is searched
  first regardless of when it was added.
* ``extensions`` is an append-only sequence. Duplicate names are kept and
  every setup runs, in order, on each new context, so the last
  registration for a name is the one left on the context. Core extensions
  are registered in the constructor, before any plugin, so plugins always
  shadow them.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Optional

from pydantic import ValidationError

from plugcli.config import load_config, split_defaults
from plugcli.exceptions import ConfigurationError, LoadError
from plugcli.extensions import CORE_EXTENSIONS
from plugcli.filesystem import is_blank, is_directory, subdirectories
from plugcli.loaders import load_command_from_preload, load_plugin_from_directory
from plugcli.models import (
    Extension,
    FindResult,
    Plugin,
    PluginOptions,
    PluginsOptions,
    RunContext,
)
from plugcli.runtime.find_command import find_command, search_order
from plugcli.runtime.run import run, run_async

logger = logging.getLogger(__name__)


def _validate(model: type[PluginOptions], options: dict[str, Any]) -> Any:
    try:
        return model.model_validate(options)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid plugin options: {exc}") from exc


class Runtime:
    """Loads plugins and extensions, and invokes the intended command.

    Args:
        brand: The application's name. It namespaces the default plugin and
            its configuration files (``<brand>.config.yaml``, ``.<brand>rc``).

    Attributes:
        brand: The brand given at construction.
        plugins: Loaded plugins in registration order.
        extensions: Every registered extension, duplicates included.
        defaults: The ``defaults`` mapping of the aggregated configuration.
        config: The aggregated configuration without ``defaults``.
        default_plugin: The plugin representing the application itself.
    """

    def __init__(self, brand: Optional[str] = None) -> None:
        self.brand = brand
        self.plugins: list[Plugin] = []
        self.extensions: list[Extension] = []
        self.defaults: dict[str, Any] = {}
        self.config: dict[str, Any] = {}
        self.default_plugin: Optional[Plugin] = None

        self.add_core_extensions()

    def __repr__(self) -> str:
        return (
            f"Runtime(brand={self.brand!r}, plugins={len(self.plugins)}, "
            f"extensions={len(self.extensions)})"
        )

    # ------------------------------------------------------------------
    # Extensions
    # ------------------------------------------------------------------

    def add_core_extensions(self) -> None:
        """Register the built-in extensions, in their documented order."""
        for name, setup in CORE_EXTENSIONS:
            self.add_extension(name, setup)

    def add_extension(self, name: str, setup: Callable[[RunContext], Any]) -> Runtime:
        """Register an extension installed on every context as ``context.<name>``.

        No uniqueness check is made: a later registration with the same name
        shadows the earlier one when contexts are built, but both setups
        still run.
        """
        self.extensions.append(Extension(name=name, setup=setup))
        logger.debug("Registered extension '%s'", name)
        return self

    def get_extension(self, name: str) -> Optional[Extension]:
        """Return the visible extension for *name* (the last one registered)."""
        for extension in reversed(self.extensions):
            if extension.name == name:
                return extension
        return None

    # ------------------------------------------------------------------
    # Plugins
    # ------------------------------------------------------------------

    def add_plugin(self, directory: str | Path, **options: Any) -> Runtime:
        """Load a plugin from *directory* and register its extensions.

        Args:
            directory: The plugin's directory.
            **options: Fields of :class:`~plugcli.models.PluginOptions`.

        Raises:
            LoadError: If *directory* is not a directory and ``required`` is set.
            ConfigurationError: If *options* contains an unknown key.
        """
        plugin_options = _validate(PluginOptions, options)
        return self._add_plugin(directory, plugin_options)

    def _add_plugin(self, directory: str | Path, options: PluginOptions) -> Runtime:
        if not is_directory(directory):
            if options.required:
                raise LoadError(f"Couldn't load plugin (not a directory): {directory}")
            logger.debug("Skipping plugin %s: not a directory", directory)
            return self

        plugin = load_plugin_from_directory(
            Path(directory).resolve(), brand=self.brand, options=options
        )
        self.plugins.append(plugin)
        for extension in plugin.extensions:
            self.add_extension(extension.name, extension.setup)
        logger.info("Loaded plugin '%s' from %s", plugin.name, plugin.directory)
        return self

    def add_plugins(self, directory: Optional[str | Path], **options: Any) -> Runtime:
        """Load every immediate sub-directory of *directory* as a plugin.

        Args:
            directory: The directory holding plugin directories. Blank or
                missing directories are ignored.
            **options: Fields of :class:`~plugcli.models.PluginsOptions`.
                ``matching`` filters sub-directory names and is not passed
                on to the individual plugins.
        """
        plugins_options = _validate(PluginsOptions, options)
        if directory is None or is_blank(str(directory)) or not is_directory(directory):
            return self

        forwarded = plugins_options.plugin_options()
        for subdirectory in subdirectories(
            directory, recursive=False, matching=plugins_options.matching, include_hidden=True
        ):
            self._add_plugin(subdirectory, forwarded)
        return self

    def add_default_plugin(self, directory: str | Path, **options: Any) -> Runtime:
        """Load the application's own plugin and aggregate configuration.

        Option precedence: ``required`` is always ``True``; ``name`` is the
        caller's value when given, otherwise the brand; every other option
        is the caller's value or its default.

        Raises:
            ConfigurationError: If a default plugin is already set.
            LoadError: If *directory* is not a directory.
        """
        if self.default_plugin is not None:
            raise ConfigurationError(
                f"Default plugin already set to '{self.default_plugin.name}'; "
                f"can't replace it with {directory}"
            )

        merged = {"name": self.brand, **options, "required": True}
        if merged["name"] is None:
            merged["name"] = self.brand
        plugin_options = _validate(PluginOptions, merged)

        # required=True: _add_plugin either appends or raises.
        self._add_plugin(directory, plugin_options)
        self.default_plugin = self.plugins[-1]

        self._load_config()
        return self

    def _load_config(self) -> None:
        assert self.default_plugin is not None
        raw = load_config(self.brand, self.default_plugin.directory) or {}
        self.defaults, self.config = split_defaults(raw)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def add_command(self, command: Any) -> Runtime:
        """Add a command ahead of every other command of the default plugin.

        Args:
            command: A :class:`~plugcli.models.Command` or a descriptor
                mapping (see :class:`~plugcli.models.CommandDescriptor`).

        Raises:
            ConfigurationError: If no default plugin has been added yet, or
                the descriptor is invalid.
        """
        if self.default_plugin is None:
            name = getattr(command, "name", None)
            if name is None and isinstance(command, dict):
                name = command.get("name")
            raise ConfigurationError(
                f"Can't add command {name} - no default plugin. "
                "You may have forgotten add_default_plugin() on your runtime."
            )
        loaded = load_command_from_preload(command)
        self.default_plugin.commands.insert(0, loaded)
        logger.debug("Added command '%s' to '%s'", loaded.name, self.default_plugin.name)
        return self

    # ------------------------------------------------------------------
    # Querying
    # ------------------------------------------------------------------

    def get_plugin(self, name: str) -> Optional[Plugin]:
        """Return the first plugin registered under *name*."""
        for plugin in self.plugins:
            if plugin.name == name:
                return plugin
        return None

    def visible_plugins(self) -> list[Plugin]:
        """Return non-hidden plugins in resolution order."""
        return [plugin for plugin in search_order(self) if not plugin.hidden]

    def find_command(self, parameters: Any) -> FindResult:
        """Find the command for *parameters*; see :func:`~plugcli.runtime.find_command.find_command`."""
        return find_command(self, parameters)

    # ------------------------------------------------------------------
    # Running
    # ------------------------------------------------------------------

    def run(self, raw: Any = None, **extra_options: Any) -> RunContext:
        """Resolve *raw*, build a context and run the command synchronously."""
        return run(self, raw, **extra_options)

    async def run_async(self, raw: Any = None, **extra_options: Any) -> RunContext:
        """Coroutine form of :meth:`run`."""
        return await run_async(self, raw, **extra_options)
