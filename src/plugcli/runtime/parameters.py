"""Turn a raw invocation into positional tokens and options.

Accepted input is a command string (split with :mod:`shlex`), a list of
argv tokens, or an already-built :class:`~plugcli.models.Parameters`.

Option grammar:

* ``--key=value`` and ``--key value`` (the value is consumed unless it
  starts with ``-``)
* ``--flag`` is ``True``, ``--no-flag`` is ``False``
* ``-abc`` sets ``a``, ``b`` and ``c`` to ``True``; ``-k=value`` sets ``k``
* ``--`` ends option parsing; everything after it is positional
* option values that look like numbers become ``int``/``float`` and
  ``"true"``/``"false"`` become booleans

Repeated options collect into a list.
"""

from __future__ import annotations

import re
import shlex
from typing import Any, Optional

from plugcli.models import Parameters

_NUMBER_RE = re.compile(r"^-?\d+(\.\d+)?$")


def coerce_value(value: str) -> Any:
    """Convert an option value string to bool/int/float when it clearly is one."""
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if _NUMBER_RE.match(value):
        return float(value) if "." in value else int(value)
    return value


def _set_option(options: dict[str, Any], key: str, value: Any) -> None:
    if key in options and options[key] is not True and value is not True:
        existing = options[key]
        options[key] = [*existing, value] if isinstance(existing, list) else [existing, value]
    else:
        options[key] = value


def _is_option(token: str) -> bool:
    return token.startswith("-") and token != "-" and not _NUMBER_RE.match(token)


def split_argv(argv: list[str]) -> tuple[list[str], dict[str, Any]]:
    """Split *argv* into ``(positional_tokens, options)``."""
    array: list[str] = []
    options: dict[str, Any] = {}

    i = 0
    while i < len(argv):
        token = argv[i]
        i += 1

        if token == "--":
            array.extend(argv[i:])
            break

        if not _is_option(token):
            array.append(token)
            continue

        if token.startswith("--"):
            body = token[2:]
            if "=" in body:
                key, value = body.split("=", 1)
                _set_option(options, key, coerce_value(value))
            elif body.startswith("no-") and len(body) > 3:
                options[body[3:]] = False
            elif i < len(argv) and not _is_option(argv[i]) and argv[i] != "--":
                _set_option(options, body, coerce_value(argv[i]))
                i += 1
            else:
                options[body] = True
            continue

        body = token[1:]
        if "=" in body:
            key, value = body.split("=", 1)
            _set_option(options, key, coerce_value(value))
        else:
            for flag in body:
                options[flag] = True

    return array, options


def parse_params(
    raw: Any = None, extra_options: Optional[dict[str, Any]] = None
) -> Parameters:
    """Parse *raw* into :class:`~plugcli.models.Parameters`.

    Args:
        raw: A command string, an argv list, an existing ``Parameters`` or
            ``None`` (treated as no arguments).
        extra_options: Options merged over the parsed ones; these win.

    Returns:
        A new ``Parameters``. ``array`` holds every positional token; the
        runtime replaces it with the remainder after resolution.
    """
    if isinstance(raw, Parameters):
        return Parameters(
            array=list(raw.array),
            options={**raw.options, **(extra_options or {})},
            raw=raw.raw,
            argv=list(raw.argv),
        )

    if raw is None:
        argv: list[str] = []
    elif isinstance(raw, str):
        argv = shlex.split(raw)
    else:
        argv = [str(token) for token in raw]

    array, options = split_argv(argv)
    options.update(extra_options or {})
    return Parameters(array=array, options=options, raw=raw, argv=argv)
