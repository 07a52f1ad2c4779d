"""Reporting of exceptions caught at the edge of a task."""

from __future__ import annotations

from .log import logger


def cache_exception(msg: str, exc: BaseException | None) -> None:
    """Log ``exc`` as an error prefixed by ``msg``.

    Nothing happens when ``exc`` is None. Exceptions that are not ordinary
    errors (``SystemExit``, ``KeyboardInterrupt`` and the like) are re-raised.
    """
    if exc is None:
        return
    if not isinstance(exc, Exception):
        raise exc
    logger.error("%s %s", msg, exc)