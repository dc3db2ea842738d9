"""Ошибки предметной области и их HTTP-статусы.

Сервисы бросают эти исключения, а обработчики в ``main.py`` превращают их
в JSON-ответ вида ``{"message": ...}``.
"""


class KnowledgeHubError(Exception):
    """Базовая ошибка приложения"""

    status_code = 500
    default_message = "Server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(KnowledgeHubError):
    status_code = 400
    default_message = "Invalid request"


class AuthenticationError(KnowledgeHubError):
    status_code = 401
    default_message = "Token is not valid"


class PermissionDeniedError(KnowledgeHubError):
    status_code = 403
    default_message = "Access denied"


class NotFoundError(KnowledgeHubError):
    status_code = 404
    default_message = "Not found"


class StoreFailure(KnowledgeHubError):
    status_code = 500
    default_message = "Server error"


class AIProviderFailure(Exception):
    """Сбой внешнего AI-провайдера; наружу из шлюза не выходит"""
