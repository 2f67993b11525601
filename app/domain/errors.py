# app/domain/errors.py


class DomainError(Exception):
    """Bazowy blad domeny, mapowany na odpowiedz HTTP w app.main."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(DomainError):
    pass


class ValidationFailure(DomainError):
    pass


class WebhookSignatureError(ValidationFailure):
    pass


class PersistenceFailure(DomainError):
    pass
