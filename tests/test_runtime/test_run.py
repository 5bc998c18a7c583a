"""Tests for the execution driver."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from plugcli.models import Command, RunContext
from plugcli.runtime import Runtime


@pytest.fixture
def runtime(make_plugin) -> Runtime:
    return Runtime("movie").add_default_plugin(make_plugin("src"))


class TestRun:
    def test_runs_command_and_returns_context(self, runtime: Runtime) -> None:
        seen: list[RunContext] = []

        def body(context: RunContext) -> str:
            seen.append(context)
            return "done"

        runtime.add_command({"name": "go", "run": body})
        context = runtime.run("go fast --now")

        assert seen == [context]
        assert context.result == "done"
        assert context.command.name == "go"
        assert context.plugin is runtime.default_plugin
        assert context.parameters.array == ["fast"]
        assert context.parameters.options == {"now": True}
        assert context.parameters.command == "go"
        assert context.parameters.plugin == "movie"

    def test_fresh_context_per_run(self, runtime: Runtime) -> None:
        runtime.add_command({"name": "go", "run": lambda ctx: None})
        assert runtime.run("go") is not runtime.run("go")

    def test_body_can_mutate_context(self, runtime: Runtime) -> None:
        def body(context: RunContext) -> None:
            context.touched = True

        runtime.add_command({"name": "go", "run": body})
        assert runtime.run(["go"]).touched is True

    def test_extra_options_merged(self, runtime: Runtime) -> None:
        runtime.add_command({"name": "go", "run": lambda ctx: ctx.parameters.options})
        assert runtime.run("go --a 1", b=2).result == {"a": 1, "b": 2}

    def test_config_and_defaults_on_context(self, make_plugin) -> None:
        root = make_plugin("src", config={"defaults": {"n": 1}, "k": "v"}, config_name="movie")
        runtime = Runtime("movie").add_default_plugin(root)
        runtime.add_command({"name": "go", "run": lambda ctx: (ctx.defaults, ctx.config)})
        assert runtime.run("go").result == ({"n": 1}, {"k": "v"})


class TestNotFound:
    def test_no_body_runs(self, runtime: Runtime) -> None:
        calls: list[str] = []
        runtime.add_command({"name": "go", "run": lambda ctx: calls.append("go")})

        context = runtime.run("nope")

        assert calls == []
        assert not context.found
        assert context.command is None
        assert context.plugin is None
        assert context.result is None
        assert context.parameters.array == ["nope"]

    def test_extensions_still_installed(self, runtime: Runtime) -> None:
        context = runtime.run("nope")
        assert hasattr(context, "print")

    def test_bare_invocation_without_root(self, runtime: Runtime) -> None:
        assert not runtime.run([]).found


class TestImplicitGroup:
    def test_group_without_body_is_found_but_not_run(self, runtime: Runtime) -> None:
        runtime.add_command(Command(name="db", commands=[Command(name="migrate")]))
        context = runtime.run("db")
        assert context.found
        assert context.command.name == "db"
        assert context.result is None


class TestExtensions:
    def test_setups_run_in_registration_order(self, runtime: Runtime) -> None:
        order: list[str] = []
        runtime.add_extension("a", lambda ctx: order.append("a"))
        runtime.add_extension("b", lambda ctx: order.append("b"))
        runtime.run("nope")
        assert order == ["a", "b"]

    def test_last_registration_wins_but_all_setups_run(self, runtime: Runtime) -> None:
        side_effects: list[str] = []

        def first(context: RunContext) -> None:
            side_effects.append("first")
            context.clock = "first"

        def second(context: RunContext) -> None:
            side_effects.append("second")
            context.clock = "second"

        runtime.add_extension("clock", first).add_extension("clock", second)
        runtime.add_command({"name": "go", "run": lambda ctx: ctx.clock})

        context = runtime.run("go")

        assert context.result == "second"
        assert side_effects == ["first", "second"]

    def test_setups_complete_before_body(self, runtime: Runtime) -> None:
        runtime.add_extension("greeting", lambda ctx: setattr(ctx, "greeting", "hi"))
        runtime.add_command({"name": "go", "run": lambda ctx: ctx.greeting})
        assert runtime.run("go").result == "hi"

    def test_plugin_extension_from_disk(self, make_plugin, extension_source) -> None:
        root = make_plugin(
            "src",
            extensions={"greeting_extension.py": extension_source("greeting", "hello")},
        )
        runtime = Runtime("movie").add_default_plugin(root)
        runtime.add_command({"name": "go", "run": lambda ctx: ctx.greeting})
        assert runtime.run("go").result == "hello"

    def test_setup_error_propagates(self, runtime: Runtime) -> None:
        def broken(context: RunContext) -> None:
            raise ValueError("setup failed")

        runtime.add_extension("broken", broken)
        with pytest.raises(ValueError, match="setup failed"):
            runtime.run("nope")


class TestAsync:
    def test_async_setup_awaited_before_body(self, runtime: Runtime) -> None:
        async def slow_setup(context: RunContext) -> None:
            await asyncio.sleep(0)
            context.ready = True

        runtime.add_extension("ready", slow_setup)
        runtime.add_command({"name": "go", "run": lambda ctx: ctx.ready})
        assert runtime.run("go").result is True

    def test_async_body(self, runtime: Runtime) -> None:
        async def body(context: RunContext) -> Any:
            await asyncio.sleep(0)
            return "async-done"

        runtime.add_command({"name": "go", "run": body})
        assert runtime.run("go").result == "async-done"

    def test_run_async(self, runtime: Runtime) -> None:
        runtime.add_command({"name": "go", "run": lambda ctx: 42})
        context = asyncio.run(runtime.run_async("go"))
        assert context.result == 42

    def test_body_error_propagates(self, runtime: Runtime) -> None:
        def body(context: RunContext) -> None:
            raise RuntimeError("body failed")

        runtime.add_command({"name": "go", "run": body})
        with pytest.raises(RuntimeError, match="body failed"):
            runtime.run("go")
