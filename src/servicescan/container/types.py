"""Container types and enums."""

from enum import Enum, auto


class Lifetime(Enum):
    """Service lifetime handed to the external container."""

    SINGLETON = auto()
    SCOPED = auto()
    TRANSIENT = auto()


class DeclarationSource(Enum):
    """Which declaration form produced a registration."""

    MARKER = auto()
    NAMED = auto()
    BUILDER = auto()


class PredicateKind(Enum):
    """How a condition predicate is located and invoked."""

    METHOD = auto()
    PROPERTY = auto()
    MARKED = auto()
    CALLABLE = auto()


class ErrorPolicy(Enum):
    """What a scan does after the first malformed declaration."""

    FAIL_FAST = "fail-fast"
    COLLECT = "collect"
