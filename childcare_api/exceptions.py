"""
Service-level error taxonomy.

Each error carries the HTTP status and problem-details title the API layer
renders it with. The message is the user-facing detail and is part of the
observable contract.
"""


class ServiceError(Exception):
    """Base class for errors raised by the service layer."""
    status_code = 500
    title = "Erreur"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ServiceError):
    """A referenced entity or link does not exist."""
    status_code = 404
    title = "Ressource introuvable"


class BadRequestError(ServiceError):
    """The request contradicts itself (e.g. path id differs from body id)."""
    status_code = 400
    title = "Requête invalide"


class ConflictError(ServiceError):
    """A link already exists for the given key pair."""
    status_code = 409
    title = "Conflit détecté"


class InternalError(ServiceError):
    """A collaborator broke its contract (mapping returned nothing, write not readable)."""
    status_code = 500
    title = "Erreur interne du serveur"
