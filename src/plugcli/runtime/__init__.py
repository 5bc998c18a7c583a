"""Runtime core: registries, command resolution and the execution driver."""

from plugcli.runtime.find_command import find_command
from plugcli.runtime.parameters import parse_params
from plugcli.runtime.run import run, run_async
from plugcli.runtime.runtime import Runtime

__all__ = ["Runtime", "find_command", "parse_params", "run", "run_async"]
