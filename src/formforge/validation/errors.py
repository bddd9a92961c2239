"""Integration errors.

These signal programmer or configuration mistakes and fail fast.
Constraint violations are data and never appear here.
"""


class ValidationIntegrationError(RuntimeError):
    """Base class for validation integration errors."""

    pass


class BindingConflictError(ValidationIntegrationError):
    """A validator was bound twice, or to a component that holds no value."""

    pass


class UnresolvablePropertyError(ValidationIntegrationError):
    """No Property was supplied and none could be resolved from the component."""

    def __init__(self, message: str, component: object = None, model: object = None):
        super().__init__(message)
        self.component = component
        self.model = model


class NotConfiguredError(ValidationIntegrationError):
    """The process-wide validation configuration was read before being installed."""

    pass
