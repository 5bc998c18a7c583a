"""plugcli -- the runtime core of a plugin-based command-line framework.

A :class:`~plugcli.runtime.runtime.Runtime` assembles an ordered set of
*plugins* loaded from directories. Each plugin contributes a tree of
commands and a list of named *extensions*. At invocation time the runtime
resolves the argument vector to exactly one command, builds a fresh
context by running every extension's setup routine, and invokes the
command with it.

Typical usage::

    from plugcli import Runtime

    runtime = (
        Runtime("movie")
        .add_default_plugin("./src")
        .add_plugins("./plugins", matching="movie-*")
    )
    context = runtime.run("quote random --count 3")

Modules:
    runtime: Plugin/extension registries, command resolution and the
        execution driver.
    loaders: Reading commands, extensions and plugins off disk.
    models: Dataclasses and pydantic option models shared across the package.
    config: Layered JSON/YAML configuration loading and XDG paths.
    exceptions: Exception hierarchy with exit-code mapping.
    output: stdout/stderr formatting system with Rich support.
    app: Typer launcher for the ``plugcli`` console script.
"""

__version__ = "0.3.0"

from plugcli.runtime.runtime import Runtime  # noqa: E402

__all__ = ["Runtime", "__version__"]
