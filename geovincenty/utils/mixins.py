"""Utility mixin classes"""

__all__ = ['LoggingMixin']

import logging
from typing import Optional


class LoggingMixin:  # pylint: disable=too-few-public-methods
    """
    Mixin class for logging. Gives each subclass a logger named after its
    module and class, and a shared registry of warnings already emitted.
    """
    logger: logging.Logger

    WARNED_ONCE: set = set()

    def __init__(self, logstr: Optional[str] = None):
        _class = self.__class__
        module_name = _class.__module__
        classname = _class.__name__
        if logstr:
            classname += f'.{logstr}'

        logstr = classname if module_name == 'builtins' else f'{module_name}.{classname}'

        self.logger = logging.getLogger(logstr)

    @classmethod
    def _set_warned_once(cls, key: str):
        """Appends message to classvar"""
        cls.WARNED_ONCE.add(key)

    def warn_once(self, msg: str, *args, **kwargs):
        """
        Logs a warning only once per rendered message, i.e. the same template
        with different arguments will warn once for each distinct set of arguments.
        """
        key = msg % args if args else msg
        if key in self.WARNED_ONCE:
            return

        self.logger.warning(msg, *args, **kwargs)
        self._set_warned_once(key)
