"""Settings kept in the ``musicindexer`` section of an INI file."""

from __future__ import annotations

import configparser
from abc import ABC, abstractmethod
from pathlib import Path

DEFAULT_CONFIG_FILE = "../resources/config.conf"
SECTION = "musicindexer"
INVALID_KEY = "INVALID KEY NAME"

_GENERAL = "General"
_INT_BOUNDS = (-(2**31), 2**31 - 1)
_LONG_BOUNDS = (-(2**63), 2**63 - 1)


class ConfigError(Exception):
    """The configuration file could not be read, parsed or written."""


class Configurator(ABC):
    """Source of typed settings values."""

    @abstractmethod
    def get_string(self, key: str) -> str: ...

    @abstractmethod
    def get_long(self, key: str) -> int: ...

    @abstractmethod
    def get_int(self, key: str) -> int: ...

    @abstractmethod
    def get_bool(self, key: str, default: bool) -> bool: ...

    @abstractmethod
    def set_int(self, key: str, value: int) -> None: ...

    @abstractmethod
    def set_string(self, key: str, value: str) -> None: ...


def _to_int(text: str, bounds: tuple[int, int]) -> int:
    """Parse a decimal integer; anything unparsable or out of range gives 0."""
    text = text.strip()
    if "_" in text or not text.isascii():
        return 0
    try:
        value = int(text, 10)
    except ValueError:
        return 0
    low, high = bounds
    return value if low <= value <= high else 0


def _to_bool(text: str) -> bool:
    return text.strip().lower() not in ("", "0", "false")


def _unquote(text: str) -> str:
    if len(text) >= 2 and text[0] == text[-1] == '"':
        return text[1:-1]
    return text


class IniConfigurator(Configurator):
    """Reads and writes keys of the ``musicindexer`` section of an INI file.

    Getters return the usual fallbacks when the file cannot be parsed:
    ``INVALID_KEY`` for strings, ``-1`` for numbers and *default* for
    booleans.  A key that is simply absent reads as an empty string.
    """

    def __init__(self, config_file: str | Path | None = None) -> None:
        self.path = Path(config_file or DEFAULT_CONFIG_FILE)

    def _load(self) -> configparser.ConfigParser:
        parser = configparser.ConfigParser(
            interpolation=None,
            strict=False,
            delimiters=("=",),
            comment_prefixes=(";", "#"),
        )
        parser.optionxform = str  # keys are case-sensitive
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            text = ""
        except OSError as exc:
            raise ConfigError(f"cannot read {self.path}: {exc}") from exc
        try:
            parser.read_string(f"[{_GENERAL}]\n{text}", source=str(self.path))
        except configparser.Error as exc:
            raise ConfigError(f"cannot parse {self.path}: {exc}") from exc
        return parser

    def _raw(self, key: str) -> str:
        parser = self._load()
        return _unquote(parser.get(SECTION, key, fallback=""))

    def get_string(self, key: str) -> str:
        try:
            return self._raw(key)
        except ConfigError:
            return INVALID_KEY

    def get_long(self, key: str) -> int:
        try:
            return _to_int(self._raw(key), _LONG_BOUNDS)
        except ConfigError:
            return -1

    def get_int(self, key: str) -> int:
        try:
            return _to_int(self._raw(key), _INT_BOUNDS)
        except ConfigError:
            return -1

    def get_bool(self, key: str, default: bool) -> bool:
        try:
            return _to_bool(self._raw(key))
        except ConfigError:
            return default

    def _store(self, key: str, value: str) -> None:
        parser = self._load()
        if not parser.has_section(SECTION):
            parser.add_section(SECTION)
        parser.set(SECTION, key, value)
        defaults = parser.defaults()
        if not any(option not in defaults for option in parser[_GENERAL]):
            parser.remove_section(_GENERAL)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as handle:
                parser.write(handle)
        except OSError as exc:
            raise ConfigError(f"cannot write {self.path}: {exc}") from exc

    def set_int(self, key: str, value: int) -> None:
        self._store(key, str(int(value)))

    def set_string(self, key: str, value: str) -> None:
        self._store(key, str(value))


_active: Configurator | None = None


def set_configurator(configurator: Configurator | None) -> Configurator | None:
    """Install the configurator used by the module-level accessors.

    Returns the configurator that was installed before.
    """
    global _active
    if configurator is not None and not isinstance(configurator, Configurator):
        raise TypeError(
            f"expected a Configurator, got {type(configurator).__name__}"
        )
    previous = _active
    _active = configurator
    return previous


def _require() -> Configurator:
    if _active is None:
        raise RuntimeError("no configurator has been set")
    return _active


def get_string(key: str) -> str:
    return _require().get_string(key)


def get_int(key: str) -> int:
    return _require().get_int(key)


def get_long(key: str) -> int:
    return _require().get_long(key)


def get_bool(key: str, default: bool) -> bool:
    return _require().get_bool(key, default)


def set_int(key: str, value: int) -> None:
    _require().set_int(key, value)


def set_string(key: str, value: str) -> None:
    _require().set_string(key, value)