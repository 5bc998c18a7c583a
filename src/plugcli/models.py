"""Canonical models shared across all plugcli modules.

This is the single source of truth for data shapes in the project. The
models fall into two groups:

**Option models** -- pydantic v2 models with a closed set of fields.
Unknown keys are rejected (``extra="forbid"``) so a misspelt loader option
fails loudly instead of being silently ignored:
    :class:`PluginOptions`, :class:`PluginsOptions` and
    :class:`CommandDescriptor`.

**Runtime models** -- plain dataclasses holding loaded state and the
per-invocation context:
    :class:`Command`, :class:`Extension`, :class:`Plugin`,
    :class:`Parameters`, :class:`FindResult` and :class:`RunContext`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from plugcli.runtime.runtime import Runtime


# --- Option models ---


class PluginOptions(BaseModel):
    """Options accepted by :meth:`~plugcli.runtime.runtime.Runtime.add_plugin`.

    Every recognised field is listed here with its default; anything else
    is a validation error.

    Example::

        PluginOptions(required=True, name="movie", hidden=False)
    """

    model_config = ConfigDict(extra="forbid")

    required: bool = Field(
        default=False,
        description="Raise LoadError when the directory does not exist",
    )
    hidden: bool = Field(
        default=False, description="Exclude the plugin from help and listings"
    )
    name: Optional[str] = Field(
        default=None, description="Plugin name; defaults to the directory name"
    )
    command_file_pattern: str = Field(
        default="*.py", description="Glob selecting command modules"
    )
    extension_file_pattern: str = Field(
        default="*.py", description="Glob selecting extension modules"
    )
    preloaded_commands: list[Any] = Field(
        default_factory=list,
        description="Command descriptors added ahead of the ones found on disk",
    )


class PluginsOptions(PluginOptions):
    """Options accepted by :meth:`~plugcli.runtime.runtime.Runtime.add_plugins`.

    Identical to :class:`PluginOptions` plus ``matching``, a glob applied
    to the sub-directory names. ``matching`` is consumed by ``add_plugins``
    and never forwarded to the individual ``add_plugin`` calls.
    """

    matching: Optional[str] = Field(
        default=None, description="Glob filtering plugin sub-directory names"
    )

    def plugin_options(self) -> PluginOptions:
        """Return these options with ``matching`` stripped."""
        return PluginOptions(**{key: getattr(self, key) for key in PluginOptions.model_fields})


class CommandDescriptor(BaseModel):
    """A raw command description, as passed to ``Runtime.add_command``.

    ``alias`` is accepted as a synonym of ``aliases`` and may be a single
    string. ``commands`` holds nested descriptors (or ready-made
    :class:`Command` objects).
    """

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    name: str
    aliases: list[str] = Field(default_factory=list)
    alias: Optional[str | list[str]] = None
    description: str = ""
    hidden: bool = False
    root: bool = False
    run: Optional[Callable[..., Any]] = None
    commands: list[Any] = Field(default_factory=list)

    def all_aliases(self) -> tuple[str, ...]:
        """Merge ``aliases`` and ``alias`` into one tuple, keeping order."""
        extra: list[str] = []
        if isinstance(self.alias, str):
            extra = [self.alias]
        elif self.alias:
            extra = list(self.alias)
        return tuple(dict.fromkeys([*self.aliases, *extra]))


# --- Runtime models ---


@dataclass
class Command:
    """A named, possibly nested, unit of executable behaviour.

    Attributes:
        name: The token that selects this command.
        aliases: Alternative tokens; matching is case-sensitive.
        description: One-line help text.
        hidden: Exclude from help listings (still runnable).
        root: The plugin's no-name command, selected by an empty token list.
        commands: Nested sub-commands, searched after this one matches.
        run: The command body, called with the
            :class:`RunContext`. ``None`` for an implicit group.
        file: Module the command was loaded from, if any.
        command_path: Names from the plugin root down to this command.
    """

    name: str
    aliases: tuple[str, ...] = ()
    description: str = ""
    hidden: bool = False
    root: bool = False
    commands: list[Command] = field(default_factory=list)
    run: Optional[Callable[[RunContext], Any]] = None
    file: Optional[str] = None
    command_path: tuple[str, ...] = ()

    def matches(self, token: str) -> bool:
        """Return True if *token* is this command's name or one of its aliases."""
        return token == self.name or token in self.aliases

    @property
    def runnable(self) -> bool:
        return self.run is not None


@dataclass(frozen=True)
class Extension:
    """A named capability installed on every context by its setup routine."""

    name: str
    setup: Callable[[RunContext], Any]
    file: Optional[str] = None


@dataclass
class Plugin:
    """A bundle of commands and extensions loaded from one directory.

    Only the default plugin's ``commands`` list is mutated after loading
    (``Runtime.add_command`` prepends to it).
    """

    name: str
    directory: Optional[str] = None
    hidden: bool = False
    commands: list[Command] = field(default_factory=list)
    extensions: list[Extension] = field(default_factory=list)
    defaults: dict[str, Any] = field(default_factory=dict)
    config: dict[str, Any] = field(default_factory=dict)
    options: PluginOptions = field(default_factory=PluginOptions)

    def iter_commands(self):
        """Yield every command in the tree, depth-first, in sequence order."""
        stack = list(reversed(self.commands))
        while stack:
            command = stack.pop()
            yield command
            stack.extend(reversed(command.commands))


@dataclass
class Parameters:
    """Parsed invocation parameters.

    ``array`` starts out as every positional token and is replaced by the
    unconsumed remainder once a command has been resolved.
    """

    array: list[str] = field(default_factory=list)
    options: dict[str, Any] = field(default_factory=dict)
    raw: Any = None
    argv: list[str] = field(default_factory=list)
    plugin: Optional[str] = None
    command: Optional[str] = None

    @property
    def first(self) -> Optional[str]:
        return self.array[0] if len(self.array) > 0 else None

    @property
    def second(self) -> Optional[str]:
        return self.array[1] if len(self.array) > 1 else None

    @property
    def third(self) -> Optional[str]:
        return self.array[2] if len(self.array) > 2 else None

    @property
    def string(self) -> str:
        """The remainder joined back into a single string."""
        return " ".join(self.array)


@dataclass(frozen=True)
class FindResult:
    """Outcome of command resolution.

    A miss is ``FindResult(None, None, tokens)``; it is never signalled by
    an exception so help rendering can rely on it.
    """

    plugin: Optional[Plugin]
    command: Optional[Command]
    array: list[str] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.command is not None


class RunContext:
    """The per-invocation object passed to a command body.

    Extensions install themselves as attributes (``context.print``,
    ``context.http`` ...). A fresh instance is built for every run.
    """

    def __init__(
        self,
        runtime: Optional[Runtime] = None,
        parameters: Optional[Parameters] = None,
        config: Optional[dict[str, Any]] = None,
        defaults: Optional[dict[str, Any]] = None,
    ) -> None:
        self.runtime = runtime
        self.parameters = parameters if parameters is not None else Parameters()
        self.config: dict[str, Any] = dict(config or {})
        self.defaults: dict[str, Any] = dict(defaults or {})
        self.plugin: Optional[Plugin] = None
        self.command: Optional[Command] = None
        self.result: Any = None

    @property
    def found(self) -> bool:
        return self.command is not None

    def __repr__(self) -> str:
        command = self.command.name if self.command else None
        plugin = self.plugin.name if self.plugin else None
        return f"RunContext(plugin={plugin!r}, command={command!r})"
