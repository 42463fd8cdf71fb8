import dataclasses
import json
import os
import pathlib
import typing

from .logging import getLogger

logger = getLogger(__name__)


def _get_default_user_dir() -> pathlib.Path:
    """Return the per-user symkit directory.

    ``$SYMKIT_HOME`` wins when set, otherwise ``~/.symkit``.
    """
    env = os.environ.get("SYMKIT_HOME")
    if env:
        return pathlib.Path(env)
    return pathlib.Path.home() / ".symkit"


DEFAULT_USER_DIR = _get_default_user_dir()


@dataclasses.dataclass(frozen=True, slots=True)
class ConfigConstants:
    OPTIONS_FILENAME: typing.ClassVar[str] = "options.json"
    DEFAULT_MAX_PASSES: typing.ClassVar[int] = 16
    DEFAULT_PRECISION: typing.ClassVar[int] = 50

    @staticmethod
    def default_log_dir(user_dir: pathlib.Path | None = None) -> pathlib.Path:
        """Return the default log directory below the user dir."""
        base = user_dir if user_dir is not None else DEFAULT_USER_DIR
        return base / "logs"


@dataclasses.dataclass(slots=True)
class RuleConfiguration:
    """
    Activation state and options of a single rewrite rule.

    >>> rule = RuleConfiguration(name="PhiOfPrimePower", is_activated=True)
    >>> rule.to_dict()
    {'name': 'PhiOfPrimePower', 'is_activated': True, 'config': {}}
    >>> data = {'name': 'SumOfZero', 'is_activated': False, 'config': {'p': 1}}
    >>> RuleConfiguration.from_dict(data).is_activated
    False
    """

    name: str | None = None
    is_activated: bool = False
    config: dict[str, typing.Any] = dataclasses.field(default_factory=dict)

    def to_dict(self) -> dict[str, typing.Any]:
        """Serializes the rule configuration to a dictionary."""
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, typing.Any]) -> "RuleConfiguration":
        """Creates a RuleConfiguration instance from a dictionary."""
        return cls(**data)


class SymkitConfiguration:
    """
    Kernel-wide options backed by a JSON file, with dictionary-like access.

    >>> import tempfile
    >>> temp_dir = tempfile.TemporaryDirectory()
    >>> config_path = pathlib.Path(temp_dir.name) / "options.json"
    >>> config_path.write_text('{"max_passes": 4}')
    17
    >>> config = SymkitConfiguration(config_path)
    >>> config.max_passes
    4
    >>> config.precision
    50
    >>> config["precision"] = 80
    >>> config.save()
    >>> json.loads(config_path.read_text())["precision"]
    80
    >>> temp_dir.cleanup()
    """

    def __init__(
        self,
        config_path: pathlib.Path | str | None = None,
        *,
        user_dir: pathlib.Path | str | None = None,
    ):
        self._user_dir = (
            pathlib.Path(user_dir) if user_dir is not None else DEFAULT_USER_DIR
        )
        if config_path is not None:
            self.config_file = pathlib.Path(config_path)
        else:
            self.config_file = self._user_dir / ConfigConstants.OPTIONS_FILENAME

        self._options: dict[str, typing.Any] = {}
        self._load()

    @classmethod
    def from_file(cls, path: pathlib.Path | str) -> "SymkitConfiguration":
        return cls(path)

    @classmethod
    def defaults(cls) -> "SymkitConfiguration":
        """An in-memory configuration that never touches the disk on load."""
        config = cls.__new__(cls)
        config._user_dir = DEFAULT_USER_DIR
        config.config_file = DEFAULT_USER_DIR / ConfigConstants.OPTIONS_FILENAME
        config._options = {}
        return config

    def _load(self) -> None:
        """Read options from ``config_file``; a missing or unreadable file means defaults."""
        try:
            text = self.config_file.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("No options file at %s", self.config_file)
            return
        try:
            options = json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning("Ignoring malformed options file %s: %s", self.config_file, e)
            return
        if not isinstance(options, dict):
            logger.warning("Ignoring options file %s: not a JSON object", self.config_file)
            return
        self._options = options
        logger.info("Loaded options from %s", self.config_file)

    def save(self) -> None:
        """Write the options back to ``config_file``, creating its directory."""
        try:
            self.config_file.parent.mkdir(parents=True, exist_ok=True)
            self.config_file.write_text(json.dumps(self._options, indent=2), encoding="utf-8")
        except OSError as e:
            logger.error("Could not write options to %s: %s", self.config_file, e)
            return
        logger.info("Saved options to %s", self.config_file)

    @property
    def max_passes(self) -> int:
        """Upper bound on simplifier sweeps before giving up on a fixpoint."""
        return int(self._options.get("max_passes", ConfigConstants.DEFAULT_MAX_PASSES))

    @property
    def precision(self) -> int:
        """Decimal digits carried by Real arithmetic."""
        return int(self._options.get("precision", ConfigConstants.DEFAULT_PRECISION))

    @property
    def rules(self) -> list[RuleConfiguration]:
        return [RuleConfiguration.from_dict(r) for r in self._options.get("rules", [])]

    def disabled_rules(self) -> set[str]:
        """Lower-cased names of rules explicitly switched off."""
        return {
            rule.name.lower()
            for rule in self.rules
            if rule.name and not rule.is_activated
        }

    @property
    def log_dir(self) -> pathlib.Path:
        """``log_dir`` option, else ``logs/`` below the user directory."""
        configured = self._options.get("log_dir")
        if configured:
            return pathlib.Path(configured)
        return ConfigConstants.default_log_dir(self._user_dir)

    def __getitem__(self, name: str) -> typing.Any:
        return self._options[name]

    def __setitem__(self, name: str, value: typing.Any) -> None:
        self._options[name] = value

    def get(self, name: str, default: typing.Any = None) -> typing.Any:
        return self._options.get(name, default)

    def set(self, name: str, value: typing.Any) -> None:
        self._options[name] = value
