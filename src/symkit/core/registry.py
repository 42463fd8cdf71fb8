"""Self-registering class hierarchies.

A class deriving directly from :class:`Registrant` becomes the root of a
registry; every subclass defined below it is recorded under a lower-cased
key as soon as its ``class`` statement runs. :class:`RewriteRule` is such a
root, so defining a rule is all it takes to make the simplifier use it.
"""

from abc import ABCMeta
from typing import Any, Callable, ClassVar, TypeAlias, TypeVar, cast

_R = TypeVar("_R", bound="Registrant")

Loader: TypeAlias = Callable[[], type]


class Registry(ABCMeta):
    """Metaclass giving each registry root its own tables."""

    def __init__(cls, name: str, bases: tuple[type, ...], attrs: dict[str, Any]):
        super().__init__(name, bases, attrs)
        if name != "Registrant" and Registrant in bases:
            cls.registry = {}
            cls.lazy_registry = {}


class Registrant(metaclass=Registry):
    """Base for classes that register themselves with their registry root."""

    registrant_name: ClassVar[str]
    """Overrides the class name as registry key."""

    registry: ClassVar[dict[str, type]] = {}
    lazy_registry: ClassVar[dict[str, Loader]] = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        for root in cls._roots():
            root.register(cls)

    @classmethod
    def _roots(cls) -> list[type["Registrant"]]:
        """Ancestors of ``cls`` that derive directly from Registrant."""
        roots, seen, pending = [], set(), list(cls.__bases__)
        while pending:
            base = pending.pop()
            if base in seen:
                continue
            seen.add(base)
            if Registrant in base.__bases__:
                roots.append(base)
            else:
                pending.extend(base.__bases__)
        return roots

    @staticmethod
    def keyof(kls: type) -> str:
        return getattr(kls, "registrant_name", kls.__name__)

    @classmethod
    def normalize_key(cls, key: str) -> str:
        return key.lower()

    @classmethod
    def register(cls, kls: type) -> None:
        key = cls.normalize_key(cls.keyof(kls))
        cls.lazy_registry.pop(key, None)
        cls.registry[key] = kls

    @classmethod
    def lazy_register(cls, load: Loader) -> None:
        """Defer creating a class until it is first looked up.

        The key is the loader's function name.
        """
        key = cls.normalize_key(load.__name__)
        if key not in cls.registry:
            cls.lazy_registry[key] = load

    @classmethod
    def get(cls, name: str) -> _R:  # type: ignore[type-var]
        """Registered class for ``name``, case-insensitive.

        Raises:
            KeyError: nothing is registered under ``name``.
        """
        key = cls.normalize_key(name)
        load = cls.lazy_registry.get(key)
        if load is not None:
            kls = load()
            # the loader may already have registered the class itself
            cls.lazy_registry.pop(key, None)
            cls.registry[key] = kls
        return cast(_R, cls.registry[key])

    @classmethod
    def find(cls, name: str) -> _R | None:  # type: ignore[type-var]
        try:
            return cls.get(name)
        except KeyError:
            return None

    @classmethod
    def all(cls) -> list[type]:
        return list(cls.registry.values())
