"""HTTP surface of the bookshop, mounted under ``API_BASE_PREFIX``."""

from __future__ import annotations

from collections.abc import Iterable

from flask import Blueprint, Flask


def _join_prefix(*segments: str) -> str:
    """Join URL segments into ``/a/b`` form, skipping empty ones."""
    parts = [s.strip("/") for s in segments if s.strip("/")]
    return "/" + "/".join(parts)


def register_blueprint_group(
    app: Flask,
    *,
    base_prefix: str,
    entries: Iterable[tuple[Blueprint, str]],
) -> None:
    """Mount each ``(blueprint, relative_prefix)`` pair below ``base_prefix``.

    :param app: Application receiving the blueprints.
    :param base_prefix: Version root such as ``"/api/v1"``.
    :param entries: Blueprints with their prefix relative to ``base_prefix``.
    """
    for bp, relative in entries:
        app.register_blueprint(bp, url_prefix=_join_prefix(base_prefix, relative))


def init_app(app: Flask) -> None:
    from bookshop.api.v1 import API_VERSION, REGISTRY

    root = app.config.get("API_BASE_PREFIX", "/api")
    register_blueprint_group(app, base_prefix=_join_prefix(root, API_VERSION), entries=REGISTRY)


__all__ = ["init_app", "register_blueprint_group"]
