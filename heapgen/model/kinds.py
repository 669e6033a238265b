"""
GC thing kinds found in a heap log.

Each node line in the main section carries a type tag ("string", "shape",
"Function", ...) and a free-form details string. The classifier folds those
into the closed Kind enumeration below; anything it does not recognise is an
error rather than a guess.
"""

from enum import Enum
from typing import Dict, FrozenSet, Optional

from .errors import ClassificationError, SourceLocation


class Kind(Enum):
    """Structural category of a heap node."""
    STRING = "string"
    OBJECT = "object"
    SYMBOL = "symbol"
    JITCODE = "jitcode"                # Emitted as a placeholder object
    SCRIPT = "script"                  # Emitted as a placeholder object
    SHAPE = "shape"                    # Object internals, never emitted
    BASE_SHAPE = "base_shape"          # Object internals, never emitted
    GETTER_SETTER = "getter_setter"
    PROP_MAP = "prop_map"              # Object internals, never emitted
    SCOPE = "scope"
    REG_EXP_SHARED = "reg_exp_shared"

    @property
    def includable(self) -> bool:
        """Whether nodes of this kind are declared in the reconstruction."""
        return self in INCLUDABLE_KINDS


INCLUDABLE_KINDS: FrozenSet[Kind] = frozenset({
    Kind.STRING,
    Kind.OBJECT,
    Kind.SYMBOL,
    Kind.SCRIPT,
    Kind.JITCODE,
    Kind.GETTER_SETTER,
    Kind.SCOPE,
    Kind.REG_EXP_SHARED,
})

# Type tags that map directly onto a kind
TYPE_TAGS: Dict[str, Kind] = {
    "string": Kind.STRING,
    "substring": Kind.STRING,
    "symbol": Kind.SYMBOL,
    "jitcode": Kind.JITCODE,
    "script": Kind.SCRIPT,
    "shape": Kind.SHAPE,
    "base_shape": Kind.BASE_SHAPE,
    "getter_setter": Kind.GETTER_SETTER,
    "prop_map": Kind.PROP_MAP,
    "scope": Kind.SCOPE,
    "reg_exp_shared": Kind.REG_EXP_SHARED,
}

FUNCTION_TAG = "Function"
UNKNOWN_OBJECT_SUFFIX = "<unknown object>"


def classify(type_tag: str, details: str,
             location: Optional[SourceLocation] = None) -> Kind:
    """
    Map a node's type tag and details onto a Kind.

    Args:
        type_tag: Third word of the node line
        details: Remaining words of the node line, joined by spaces
        location: Position of the node line, used for error reporting

    Returns:
        The Kind of the node

    Raises:
        ClassificationError: if the pair matches no rule
    """
    kind = TYPE_TAGS.get(type_tag)
    if kind is not None:
        return kind

    if type_tag == FUNCTION_TAG or details.endswith(UNKNOWN_OBJECT_SUFFIX):
        return Kind.OBJECT

    raise ClassificationError(type_tag, details, location)
