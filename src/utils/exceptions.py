# src/utils/exceptions.py

"""Exception hierarchy for catalog_dash."""


class CatalogDashError(Exception):
    """Base exception for the project."""


class CatalogAPIError(CatalogDashError):
    """Raised when the remote catalog service call fails.

    Attributes:
        operation: Short name of the failed call (e.g. ``"update product"``)
        status_code: HTTP status, or ``None`` for transport failures
    """

    def __init__(
        self, operation: str, status_code: int | None = None
    ) -> None:
        self.operation = operation
        self.status_code = status_code
        if status_code is None:
            message = f"Failed to {operation}"
        else:
            message = f"Failed to {operation} (HTTP {status_code})"
        super().__init__(message)


class ProductValidationError(CatalogDashError):
    """Raised when product form data fails schema validation.

    Attributes:
        errors: Field name to user-facing message
    """

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = errors
        fields = ", ".join(sorted(errors))
        super().__init__(f"Invalid product data: {fields}")


class EmptySelectionError(CatalogDashError):
    """Raised when a bulk operation runs with nothing selected."""

    def __init__(self) -> None:
        super().__init__("Please select products to update")
