"""Resolve a token sequence to exactly one command.

The search runs over a forest of command trees, one per plugin:

1. The default plugin is searched first, then every other plugin in
   registration order.
2. Inside a plugin the tree is walked depth-first. Every command on the
   current level whose name or alias equals the next token is explored,
   and the walk descends into its sub-commands with the following token.
3. The deepest match inside a plugin wins. Equal depths go to the command
   that comes first in sequence order.
4. The first plugin yielding any match wins; later plugins are not
   searched.

An empty token list selects the root command of the first plugin in search
order (the default plugin when one is set). A miss is reported as
an empty :class:`~plugcli.models.FindResult`, never as an exception.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Optional, Sequence

from plugcli.models import Command, FindResult, Parameters, Plugin
from plugcli.runtime.parameters import parse_params

if TYPE_CHECKING:
    from plugcli.runtime.runtime import Runtime

logger = logging.getLogger(__name__)


def search_order(runtime: Runtime) -> list[Plugin]:
    """Return the plugins in resolution order: default first, then the rest."""
    default = runtime.default_plugin
    others = [plugin for plugin in runtime.plugins if plugin is not default]
    return [plugin for plugin in [default, *others] if plugin is not None]


def _tokens_of(parameters: Any) -> list[str]:
    if parameters is None:
        return []
    if isinstance(parameters, Parameters):
        return list(parameters.array)
    if isinstance(parameters, Mapping):
        return list(parameters.get("array") or [])
    if isinstance(parameters, str):
        return parse_params(parameters).array
    return list(parameters)


def _deepest(
    commands: Sequence[Command], tokens: Sequence[str], depth: int = 0
) -> tuple[Optional[Command], int]:
    """Return the deepest command matching ``tokens[depth:]`` and its depth."""
    if depth >= len(tokens):
        return None, depth

    best: Optional[Command] = None
    best_depth = depth
    token = tokens[depth]
    for command in commands:
        if not command.matches(token):
            continue
        found, found_depth = _deepest(command.commands, tokens, depth + 1)
        if found is None:
            found, found_depth = command, depth + 1
        if found_depth > best_depth:
            best, best_depth = found, found_depth
    return best, best_depth


def find_root_command(plugin: Plugin) -> Optional[Command]:
    """Return the plugin's root command, if it has one."""
    for command in plugin.commands:
        if command.root or command.name == plugin.name:
            return command
    return None


def find_in_plugin(plugin: Plugin, tokens: Sequence[str]) -> tuple[Optional[Command], int]:
    """Resolve *tokens* against a single plugin.

    Returns:
        ``(command, consumed)``; ``(None, 0)`` when nothing matches.
    """
    if not tokens:
        return find_root_command(plugin), 0
    command, consumed = _deepest(plugin.commands, tokens)
    if command is None:
        return None, 0
    return command, consumed


def find_command(runtime: Runtime, parameters: Any) -> FindResult:
    """Find the command for *parameters*.

    Args:
        runtime: The runtime whose plugins are searched.
        parameters: A :class:`~plugcli.models.Parameters`, a mapping with an
            ``array`` key, a command string (split like a shell line, options
            dropped) or a plain sequence of tokens.

    Returns:
        A :class:`~plugcli.models.FindResult` holding the winning plugin,
        the command and the unconsumed remainder. On a miss ``plugin`` and
        ``command`` are ``None`` and ``array`` holds every token.
    """
    tokens = _tokens_of(parameters)
    plugins = search_order(runtime)

    # A bare invocation only ever selects the application's own root command.
    if not tokens:
        plugins = plugins[:1]

    for plugin in plugins:
        command, consumed = find_in_plugin(plugin, tokens)
        if command is not None:
            logger.debug(
                "Resolved %r to '%s' in plugin '%s'",
                tokens[:consumed],
                " ".join(command.command_path) or command.name,
                plugin.name,
            )
            return FindResult(plugin=plugin, command=command, array=tokens[consumed:])

    logger.debug("No command matches %r", tokens)
    return FindResult(plugin=None, command=None, array=tokens)
