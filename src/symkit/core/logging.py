"""Logging for symkit.

Every module logs through ``getLogger(__name__)``, which hands out
:class:`SymkitLogger` instances. Those carry a per-thread mapped diagnostic
context (MDC) whose ``phase`` entry names the kernel stage currently running
(``simplify``, ``equation``, ``inequality``, ``derive``, ...). The phase is
copied onto every record and rendered by :class:`SymkitFormatter`.

z3 proof obligations go to the ``symkit.z3`` logger, which
:func:`configure_loggers` routes to a raw SMT-LIB file.
"""

import contextlib
import dataclasses
import functools
import logging
import logging.config
import pathlib
import shutil
import threading
import typing

LOG_FILENAME = "symkit.log"
Z3_PROOF_FILENAME = "z3_rule_proofs.smt2"

# loggers declared by build_config(), listed even before anything logs to them
STATIC_LOGGERS = ("symkit", "symkit.rewrite", "symkit.solvers", "symkit.z3")

_level_version = 0


def _bump_level_version() -> None:
    global _level_version
    _level_version += 1


@dataclasses.dataclass(slots=True)
class LevelFlag:
    """
    Truthy while ``logger_name`` is enabled for ``level``.

    The answer is cached until the next level change made through
    :class:`LoggerConfigurator` or :func:`configure_loggers`, so the check is
    cheap enough for the simplifier's per-node loop::

        if logger.debug_on:
            logger.debug("rewrote %s", render(tree))
    """

    logger_name: str
    level: int
    _seen_version: int = dataclasses.field(default=-1, init=False)
    _enabled: bool = dataclasses.field(default=False, init=False)

    def __bool__(self) -> bool:
        if self._seen_version != _level_version:
            self._enabled = getLogger(self.logger_name).isEnabledFor(self.level)
            self._seen_version = _level_version
        return self._enabled

    def __repr__(self):
        return f"<LevelFlag {self.logger_name} >= {logging.getLevelName(self.level)}>"


class SymkitLogger(logging.Logger):
    """Logger that stamps records with the thread-local MDC."""

    _local = threading.local()

    @classmethod
    def mdc(cls) -> dict[str, typing.Any]:
        if not hasattr(cls._local, "mdc"):
            cls._local.mdc = {}
        return cls._local.mdc

    @classmethod
    def add_mdc(cls, key: str, value: typing.Any) -> None:
        cls.mdc()[key] = value

    @classmethod
    def get_mdc(cls, key: str, default: typing.Any = None) -> typing.Any:
        return cls.mdc().get(key, default)

    @classmethod
    def remove_mdc(cls, key: str) -> None:
        cls.mdc().pop(key, None)

    @classmethod
    def update_phase(cls, phase: str) -> None:
        cls.add_mdc("phase", phase)

    @classmethod
    def reset_phase(cls) -> None:
        cls.remove_mdc("phase")

    @classmethod
    @contextlib.contextmanager
    def phase(cls, name: str) -> typing.Iterator[None]:
        """Tag records with *name* for the duration of the block, then restore."""
        previous = cls.get_mdc("phase", "")
        cls.update_phase(name)
        try:
            yield
        finally:
            cls.update_phase(previous)

    @functools.cached_property
    def debug_on(self) -> LevelFlag:
        return LevelFlag(self.name, logging.DEBUG)

    def makeRecord(self, *args, **kwargs):
        record = super().makeRecord(*args, **kwargs)
        record.phase = self.get_mdc("phase", "")
        return record


class SymkitFormatter(logging.Formatter):
    """Renders a non-empty ``phase`` as `` - <phase>``."""

    def format(self, record: logging.LogRecord) -> str:
        phase = getattr(record, "phase", "")
        record.phase = f" - {phase}" if phase else ""
        return super().format(record)


def build_config(log_dir: pathlib.Path) -> dict[str, typing.Any]:
    """The ``dictConfig`` mapping used by :func:`configure_loggers`."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "symkit": {
                "()": SymkitFormatter,
                "format": "%(asctime)s - %(name)s - %(levelname)s%(phase)s - %(message)s",
            },
            "raw": {"format": "%(message)s"},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": "INFO",
                "formatter": "symkit",
                "stream": "ext://sys.stdout",
            },
            "file": {
                "class": "logging.FileHandler",
                "level": "DEBUG",
                "formatter": "symkit",
                "filename": (log_dir / LOG_FILENAME).as_posix(),
            },
            "z3_proofs": {
                "class": "logging.FileHandler",
                "level": "INFO",
                "formatter": "raw",
                "filename": (log_dir / Z3_PROOF_FILENAME).as_posix(),
            },
        },
        "loggers": {
            "symkit": {
                "level": "INFO",
                "handlers": ["console", "file"],
                "propagate": False,
            },
            "symkit.rewrite": {"level": "INFO", "handlers": ["file"], "propagate": False},
            "symkit.solvers": {"level": "INFO", "handlers": ["file"], "propagate": False},
            "symkit.z3": {"level": "INFO", "handlers": ["z3_proofs"], "propagate": False},
        },
        "root": {"level": "WARNING", "handlers": ["console"]},
    }


class LoggerConfigurator:
    """Query and change logger levels at runtime."""

    @staticmethod
    def available_loggers(
        prefix: str | typing.Iterable[str] | None = None,
        case_insensitive: bool = False,
    ) -> list[str]:
        """
        Sorted names of every known logger, optionally restricted to those equal
        to or nested under one of the given prefixes.
        """
        names = {
            name
            for name, obj in logging.Logger.manager.loggerDict.items()
            if isinstance(obj, logging.Logger)
        }
        names.update(STATIC_LOGGERS)
        if prefix is None:
            return sorted(names)

        prefixes = [prefix] if isinstance(prefix, str) else list(prefix)
        fold = str.lower if case_insensitive else str
        prefixes = [fold(p) for p in prefixes]

        def under_prefix(name: str) -> bool:
            name = fold(name)
            return any(name == p or name.startswith(p + ".") for p in prefixes)

        return sorted(n for n in names if under_prefix(n))

    @staticmethod
    def get_level(name: str) -> int:
        return getLogger(name).getEffectiveLevel()

    @staticmethod
    def set_level(logger_name: str, level_name: str) -> None:
        """Set ``logger_name`` to a named level such as ``"DEBUG"``."""
        level = logging.getLevelName(level_name.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown logging level: {level_name}")
        getLogger(logger_name).setLevel(level)
        _bump_level_version()


def clear_logs(log_dir: str | pathlib.Path) -> None:
    """Removes the log directory."""
    shutil.rmtree(log_dir, ignore_errors=True)


def configure_loggers(log_dir: str | pathlib.Path) -> None:
    """Install console, file and z3 proof handlers writing under ``log_dir``."""
    log_dir = pathlib.Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(build_config(log_dir))
    logging.getLogger("symkit.z3").info(
        "; rule proofs, one (assert (not (= pattern replacement))) per rule"
    )
    _bump_level_version()


def getLogger(name: str, default_level: int = logging.INFO) -> SymkitLogger:
    """Return the :class:`SymkitLogger` registered under ``name``.

    A plain logger already registered under the name is replaced in place,
    keeping its handlers, filters and parent so records still reach the same
    destinations.
    """
    existing = logging.getLogger(name)
    if isinstance(existing, SymkitLogger):
        return existing
    level = existing.level
    if level == logging.NOTSET or level < default_level:
        level = default_level
    logger = SymkitLogger(existing.name, level=level)
    logger.handlers = list(existing.handlers)
    logger.filters = list(existing.filters)
    logger.parent = existing.parent
    logger.disabled = existing.disabled
    # a logger with no handlers of its own must propagate or its records vanish
    logger.propagate = existing.propagate or not existing.handlers
    logging.Logger.manager.loggerDict[name] = logger
    return logger
