"""The execution driver: build a context, apply extensions, run one command.

:func:`run_async` is the real implementation. Extension setups and the
command body may be plain callables or coroutine functions; awaitable
results are awaited before moving on, so every setup has completed by the
time the body starts. :func:`run` drives the coroutine with
:func:`asyncio.run` for synchronous callers.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import TYPE_CHECKING, Any, Optional

from plugcli.models import RunContext
from plugcli.runtime.parameters import parse_params

if TYPE_CHECKING:
    from plugcli.runtime.runtime import Runtime

logger = logging.getLogger(__name__)


async def _settle(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


def build_context(runtime: Runtime, raw: Any = None, **extra_options: Any) -> RunContext:
    """Create a fresh context and resolve its command (no setups, no body)."""
    parameters = parse_params(raw, extra_options)
    context = RunContext(
        runtime=runtime,
        parameters=parameters,
        config=runtime.config,
        defaults=runtime.defaults,
    )

    found = runtime.find_command(parameters)
    context.plugin = found.plugin
    context.command = found.command
    parameters.array = list(found.array)
    if found.found:
        assert found.plugin is not None and found.command is not None
        parameters.plugin = found.plugin.name
        parameters.command = found.command.name
    return context


async def run_async(
    runtime: Runtime, raw: Any = None, **extra_options: Any
) -> RunContext:
    """Run the command selected by *raw* and return the context.

    Args:
        runtime: The assembled runtime.
        raw: A command string, argv list or
            :class:`~plugcli.models.Parameters`.
        **extra_options: Options merged over the parsed ones.

    Returns:
        The context after the command ran. When no command matched,
        ``context.command`` is ``None`` and no body was invoked. The body's
        return value is stored on ``context.result``.
    """
    context = build_context(runtime, raw, **extra_options)

    for extension in runtime.extensions:
        logger.debug("Applying extension '%s'", extension.name)
        await _settle(extension.setup(context))

    command = context.command
    if command is None:
        logger.debug("Command not found: %r", context.parameters.array)
        return context

    if command.run is None:
        logger.debug("Command '%s' has no body; nothing to run", command.name)
        return context

    context.result = await _settle(command.run(context))
    return context


def run(runtime: Runtime, raw: Optional[Any] = None, **extra_options: Any) -> RunContext:
    """Synchronous wrapper around :func:`run_async`.

    Must not be called from inside a running event loop; use
    ``await run_async(...)`` there instead.
    """
    return asyncio.run(run_async(runtime, raw, **extra_options))
