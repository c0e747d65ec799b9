"""Error types raised by the controller.

Every error carries a stable ``kind`` so the dispatcher can log and test
against it even though the wire envelope only exposes the message.
"""


class ControllerError(Exception):
    """Base class for all controller errors."""

    kind = "ControllerError"


class NoActiveKeyError(ControllerError):
    """Raised when no key pair can be resolved without an explicit path."""

    kind = "NoActiveKey"

    def __init__(self, message: str = "No active Starkware key pair - please provide a path"):
        super().__init__(message)


class IdentityMismatchError(ControllerError):
    """Raised when a claimed stark public key is not the active one."""

    kind = "IdentityMismatch"

    def __init__(self, message: str = "starkPublicKey in request does not match the active key"):
        super().__init__(message)


class UnknownMethodError(ControllerError):
    """Raised when the dispatcher receives an unrecognized method name."""

    kind = "UnknownMethod"

    def __init__(self, method: object):
        self.method = method
        super().__init__(f"Unknown Starkware RPC method: {method}")


class InvalidParamsError(ControllerError):
    """Raised when request params or message fields are malformed."""

    kind = "InvalidParams"


class CollaboratorError(ControllerError):
    """Raised when the store, signer or transaction builder fails.

    The original exception is kept as ``__cause__``.
    """

    kind = "CollaboratorFailure"

    def __init__(self, collaborator: str, message: str):
        self.collaborator = collaborator
        super().__init__(f"{collaborator} failed: {message}")
