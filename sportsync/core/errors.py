"""
Error taxonomy shared by the club provisioning and invite workflows.

Every error carries a machine-readable ``kind`` and a human-readable message;
the API layer renders both as ``{"error_kind": ..., "message": ...}``.
"""


class CoordinatorError(Exception):
    kind = "error"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error_kind": self.kind, "message": self.message}


class ValidationError(CoordinatorError):
    """Bad input, raised before any store or storage call."""
    kind = "validation_error"
    status_code = 422


class ConflictError(CoordinatorError):
    """Uniqueness violated, either by the probe or by the store's unique index."""
    kind = "conflict_error"
    status_code = 409


class UploadError(CoordinatorError):
    kind = "upload_error"
    status_code = 502


class AuthError(CoordinatorError):
    kind = "auth_error"
    status_code = 401


class StoreError(CoordinatorError):
    kind = "store_error"
    status_code = 500
