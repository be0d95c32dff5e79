class CmsException(Exception):
    """Base class for errors raised by the CMS domain."""


class ValidationError(CmsException):
    """
    A submitted change breaks a domain rule.

    ``message_key`` is the stable, user-facing identifier of the violated rule;
    ``log_message`` is the diagnostic text written to the application log.
    """

    def __init__(self, message_key, log_message=None, *, page_id=None):
        self.message_key = message_key
        self.log_message = log_message or message_key
        self.page_id = page_id
        super().__init__(self.log_message)


class AuthorizationError(CmsException):
    def __init__(self, message="Insufficient permissions", *, roles=None):
        self.roles = list(roles or [])
        super().__init__(message)


class ConcurrencyConflict(CmsException):
    """The entity was changed by someone else since the caller loaded it."""

    def __init__(self, entity_id, message=None):
        self.entity_id = entity_id
        super().__init__(
            message or f"Entity {entity_id} has been modified by another user."
        )


class EntityNotFound(CmsException):
    def __init__(self, entity_type, entity_id):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} {entity_id} not found")
