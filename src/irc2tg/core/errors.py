"""Relay exceptions.

Every error carries a machine-readable ``code``. Subclasses supply a default so
call sites only pass one when they need a more specific reason, e.g.
``LinkConfigurationError("...", code="empty_link_field")``.

    RelayError
    ├── RelayConfigurationError      bad config, raised at construction only
    │   └── LinkConfigurationError   one malformed link record
    └── ProcessorStateError          submit() against a processor in the wrong state
        ├── ProcessorClosedError
        └── ProcessorNotRunningError
"""

from __future__ import annotations


class RelayError(Exception):
    default_code = "relay_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        details: dict[str, object] | None = None,
        original_error: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code or self.default_code
        self.details = details or {}
        self.original_error = original_error

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r}, code={self.code!r})"


class RelayConfigurationError(RelayError):
    """Config could not be loaded or failed validation. Never raised while routing."""

    default_code = "invalid_config"


class LinkConfigurationError(RelayConfigurationError):
    """A link record or Link is malformed."""

    default_code = "invalid_link"

    @property
    def index(self) -> int | None:
        """Position of the offending record in the links list, when known."""
        value = self.details.get("index")
        return value if isinstance(value, int) else None

    def at_index(self, index: int) -> LinkConfigurationError:
        """Record which links entry failed. Returns self so it can be re-raised inline."""
        self.details["index"] = index
        return self


class ProcessorStateError(RelayError):
    default_code = "processor_state"


class ProcessorClosedError(ProcessorStateError):
    """Event submitted after close()."""

    default_code = "processor_closed"


class ProcessorNotRunningError(ProcessorStateError):
    """Cross-thread submit before the processor's event loop is known."""

    default_code = "processor_not_running"
