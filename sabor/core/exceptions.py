"""
Domain Exceptions

Raised by the services layer and converted into structured
``{"success": false, "message": ...}`` responses by the API layer.
Messages are customer/admin facing, hence in Portuguese.
"""

from typing import Optional


class SaborError(Exception):
    """Base for every domain error."""

    default_message = "Erro interno do servidor."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


# =============================================================================
# VALIDATION
# =============================================================================

class ValidationError(SaborError):
    """Missing or invalid required field."""
    default_message = "Dados inválidos."


class MissingFieldsError(ValidationError):
    default_message = "Todos os campos são obrigatórios."


class InvalidSizeError(ValidationError):
    default_message = "Tamanho de marmita inválido."


class InvalidQuantityError(ValidationError):
    default_message = "A quantidade deve ser pelo menos 1."


class InvalidExpenseError(ValidationError):
    default_message = "Valor e parcelas devem ser maiores que zero."


class MissingOrderIdError(ValidationError):
    default_message = "ID do pedido é obrigatório."


# =============================================================================
# LOOKUP
# =============================================================================

class NotFoundError(SaborError):
    """Unknown id on lookup or toggle."""
    default_message = "Registro não encontrado."


class OrderNotFoundError(NotFoundError):
    default_message = "Pedido não encontrado."


class IngredientNotFoundError(NotFoundError):
    default_message = "Ingrediente não encontrado."


class HouseSpecialNotFoundError(NotFoundError):
    default_message = "Moda da casa não encontrada."


class DrinkNotFoundError(NotFoundError):
    default_message = "Bebida não encontrada."


# =============================================================================
# OTHER
# =============================================================================

class InvalidReferenceError(SaborError):
    """House special created with an ingredient id that does not exist."""
    default_message = "Alguns ingredientes selecionados não existem."


class AuthenticationError(SaborError):
    default_message = "Usuário ou senha incorretos."
