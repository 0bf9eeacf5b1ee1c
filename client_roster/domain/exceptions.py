"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class StoreError(Exception):
    """Raised when the backing store (database or hosted API) fails.

    Backend-agnostic — wraps SQLAlchemy errors and hosted API failures alike.
    """

    def __init__(self, backend: str, operation: str, message: str):
        self.backend = backend
        self.operation = operation
        self.message = message
        super().__init__(f"[{backend}] {operation} failed: {message}")


class CredentialError(Exception):
    """Raised when stored credential material cannot be hashed or revealed."""
