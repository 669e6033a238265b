"""
Configuration for the JavaScript emitter.
"""

import re
from dataclasses import dataclass

IDENTIFIER_PATTERN = re.compile(r'^[A-Za-z_$][A-Za-z0-9_$]*$')


@dataclass
class EmitterConfig:
    """Naming and layout of the generated script"""

    # Generated names
    node_prefix: str = "n"                      # n0, n1, ...
    property_prefix: str = "e"                  # e0, e1, ...

    # Root collectors supplied by the host at run time
    black_root_accessor: str = "blackRoot"
    gray_root_accessor: str = "grayRoot"

    # Layout
    wrap_in_function: bool = True               # (() => { ... })();
    separate_phases: bool = True                # Blank line before edges and roots

    def __post_init__(self):
        for name in ("node_prefix", "property_prefix",
                     "black_root_accessor", "gray_root_accessor"):
            value = getattr(self, name)
            if not IDENTIFIER_PATTERN.match(value):
                raise ValueError(f"{name} must be a JavaScript identifier, got {value!r}")
