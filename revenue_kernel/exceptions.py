"""
Typed exception hierarchy for the revenue kernel.

The calculation engines never raise on bad input: they degrade to zero or
an empty schedule and report problems through the validator's error list.
Exceptions are reserved for the layers around them -- loading engine
configuration and mutating service lines -- where a caller asked for
something that cannot be done.

Hierarchy::

    RevenueKernelError (base)
    |
    +-- ConfigurationError
    |
    +-- ServiceLineError
        +-- ServiceNotExtendableError
        +-- InvalidExtensionError

Every class carries a ``code`` class attribute (machine-readable, API-safe)
and stores its context as attributes so it survives structured logging.

Codes:

    CONFIGURATION_ERROR       Engine config file is malformed or out of range
    SERVICE_LINE_ERROR        Generic service line failure
    SERVICE_NOT_EXTENDABLE    Extension requested for a non-active service
    INVALID_EXTENSION         Extension length is not a positive month count
"""


class RevenueKernelError(Exception):
    """
    Base exception for all revenue kernel errors.

    All subclasses must have a ``code`` class attribute for
    machine-readable error identification.
    """

    code: str = "REVENUE_KERNEL_ERROR"


# Configuration


class ConfigurationError(RevenueKernelError):
    """Engine configuration could not be loaded or failed validation."""

    code: str = "CONFIGURATION_ERROR"

    def __init__(self, field: str, reason: str, source: str | None = None):
        self.field = field
        self.reason = reason
        self.source = source
        location = f" in {source}" if source else ""
        super().__init__(f"Invalid engine config field '{field}'{location}: {reason}")


# Service lines


class ServiceLineError(RevenueKernelError):
    """Base exception for service line operations."""

    code: str = "SERVICE_LINE_ERROR"


class ServiceNotExtendableError(ServiceLineError):
    """Only active or extended services may have their term extended."""

    code: str = "SERVICE_NOT_EXTENDABLE"

    def __init__(self, service_name: str, status: str):
        self.service_name = service_name
        self.status = status
        super().__init__(
            f"Service '{service_name}' cannot be extended from status '{status}'"
        )


class InvalidExtensionError(ServiceLineError):
    """Extension length must be a positive number of months."""

    code: str = "INVALID_EXTENSION"

    def __init__(self, months: int):
        self.months = months
        super().__init__(f"Extension must be a positive number of months, got {months}")
