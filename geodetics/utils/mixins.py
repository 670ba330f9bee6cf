"""Utility mixin classes"""

__all__ = ['LoggingMixin']

import logging
from typing import Optional


class LoggingMixin:  # pylint: disable=too-few-public-methods
    """
    Gives the subclass a logger named after its module and class, e.g.
    'geodetics.utils.conditional_imports.ConditionalPackageInterceptor'.
    Works for classes that are only ever used through classmethods, too.
    """
    WARNED_ONCE: set = set()

    @classmethod
    def get_logger(cls, suffix: Optional[str] = None) -> logging.Logger:
        name = f'{cls.__module__}.{cls.__name__}'
        if suffix:
            name += f'.{suffix}'

        return logging.getLogger(name)

    @classmethod
    def warn_once(cls, msg, *args, **kwargs):
        """Logs a warning only once per message"""
        if msg in cls.WARNED_ONCE:
            return

        cls.get_logger().warning(msg, *args, **kwargs)
        cls.WARNED_ONCE.add(msg)
