"""``context.http`` -- httpx client factory."""

from __future__ import annotations

from typing import Any

import httpx

DEFAULT_TIMEOUT = 30.0


class HttpToolbox:
    def create(self, base_url: str = "", **kwargs: Any) -> httpx.Client:
        """Return an :class:`httpx.Client` for *base_url*; close it when done."""
        kwargs.setdefault("timeout", DEFAULT_TIMEOUT)
        kwargs.setdefault("follow_redirects", True)
        return httpx.Client(base_url=base_url, **kwargs)

    def create_async(self, base_url: str = "", **kwargs: Any) -> httpx.AsyncClient:
        kwargs.setdefault("timeout", DEFAULT_TIMEOUT)
        kwargs.setdefault("follow_redirects", True)
        return httpx.AsyncClient(base_url=base_url, **kwargs)


def setup(context: Any) -> None:
    context.http = HttpToolbox()
