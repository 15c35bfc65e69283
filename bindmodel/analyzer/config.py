"""Configuration for a single analysis run."""

import os
from dataclasses import dataclass

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


@dataclass
class AnalysisConfig:
    """Options controlling how a module is analyzed.

    Attributes:
        strict: Raise on unsupported declarations instead of reporting them
        trace_symbols: Emit the symbol table listing at the end of the pass
        id_separator: Separator joining module, type and member names in ids
        const_getter_prefix: Prefix of the getter id generated for constants
    """

    strict: bool = False
    trace_symbols: bool = True
    id_separator: str = "_"
    const_getter_prefix: str = "get_"

    @classmethod
    def from_env(cls) -> "AnalysisConfig":
        """Build a configuration from ``BINDMODEL_*`` environment variables."""
        defaults = cls()
        return cls(
            strict=_env_flag("BINDMODEL_STRICT", defaults.strict),
            trace_symbols=_env_flag("BINDMODEL_TRACE_SYMBOLS", defaults.trace_symbols),
        )

    def make_id(self, *parts: str) -> str:
        """Join non-empty name parts into an identity string."""
        return self.id_separator.join(p for p in parts if p)
