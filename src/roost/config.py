"""Dispatch configuration.

DispatchConfig is a frozen dataclass. Each node holds one, fixed at
construction, and nodes created with ``DispatchNode.child()`` inherit
their parent's. There is no process-wide mutable state.
"""

from dataclasses import dataclass, replace

from roost.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class DispatchConfig:
    """Delimiter and meta-symbols for a dispatch node. Immutable after creation.

    Override what you need::

        config = DispatchConfig(delimiter=".", get_all_symbol="all")
    """

    # Path syntax
    delimiter: str = "/"

    # Meta-symbols (never usable as entry names)
    get_all_symbol: str = "*"
    get_params_symbol: str = "?"

    def __post_init__(self) -> None:
        if len(self.delimiter) != 1:
            msg = f"Delimiter must be a single character, got {self.delimiter!r}"
            raise ConfigurationError(msg)
        if not self.get_all_symbol or not self.get_params_symbol:
            msg = "Meta-symbols must be non-empty strings"
            raise ConfigurationError(msg)
        if self.get_all_symbol == self.get_params_symbol:
            msg = (
                f"get_all_symbol and get_params_symbol must differ, "
                f"both are {self.get_all_symbol!r}"
            )
            raise ConfigurationError(msg)
        for symbol in (self.get_all_symbol, self.get_params_symbol):
            if self.delimiter in symbol:
                msg = f"Meta-symbol {symbol!r} contains the delimiter {self.delimiter!r}"
                raise ConfigurationError(msg)

    @property
    def meta_symbols(self) -> tuple[str, str]:
        return (self.get_all_symbol, self.get_params_symbol)

    def with_symbols(
        self,
        get_all: str | None = None,
        get_params: str | None = None,
    ) -> "DispatchConfig":
        """Return a copy with one or both meta-symbols replaced."""
        return replace(
            self,
            get_all_symbol=get_all if get_all is not None else self.get_all_symbol,
            get_params_symbol=get_params if get_params is not None else self.get_params_symbol,
        )


DEFAULT_CONFIG = DispatchConfig()
