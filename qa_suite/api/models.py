"""
ServeRest response shapes.

Bodies are parsed into a tagged union so tests can branch on the shape the
API actually returned instead of probing loose dictionaries.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


# =============================================================================
# Entities
# =============================================================================


@dataclass
class User:
    _id: str
    nome: str
    email: str
    password: str
    administrador: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        return cls(
            _id=data["_id"],
            nome=data["nome"],
            email=data["email"],
            password=data.get("password", ""),
            administrador=data.get("administrador", "false"),
        )


@dataclass
class Product:
    _id: str
    nome: str
    preco: int
    descricao: str
    quantidade: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Product":
        return cls(
            _id=data["_id"],
            nome=data["nome"],
            preco=data["preco"],
            descricao=data["descricao"],
            quantidade=data["quantidade"],
        )


@dataclass
class CartProduct:
    idProduto: str
    quantidade: int
    precoUnitario: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CartProduct":
        return cls(
            idProduto=data["idProduto"],
            quantidade=data["quantidade"],
            precoUnitario=data.get("precoUnitario"),
        )


@dataclass
class Cart:
    _id: str
    produtos: List[CartProduct]
    precoTotal: int
    quantidadeTotal: int
    idUsuario: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Cart":
        return cls(
            _id=data["_id"],
            produtos=[CartProduct.from_dict(p) for p in data.get("produtos", [])],
            precoTotal=data.get("precoTotal", 0),
            quantidadeTotal=data.get("quantidadeTotal", 0),
            idUsuario=data.get("idUsuario", ""),
        )

    def find_product(self, product_id: str) -> Optional[CartProduct]:
        for product in self.produtos:
            if product.idProduto == product_id:
                return product
        return None


# =============================================================================
# Response bodies
# =============================================================================


@dataclass
class LoginBody:
    """Successful login: ``{"message", "authorization"}``."""

    message: str
    authorization: str


@dataclass
class CreatedBody:
    """Resource created: ``{"message", "_id"}``."""

    message: str
    _id: str


@dataclass
class ItemErrorBody:
    """Error about one submitted item: ``{"message", "item": {...}}``."""

    message: str
    item: Dict[str, Any] = field(default_factory=dict)


@dataclass
class MessageBody:
    """Plain message (success or error): ``{"message"}``."""

    message: str
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class FieldErrorBody:
    """Validation failure keyed by field: ``{"email": "email é obrigatório"}``."""

    fields: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ListBody:
    """Listing: ``{"quantidade", "<resource>": [...]}``."""

    quantidade: int
    key: str
    items: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def users(self) -> List[User]:
        return [User.from_dict(item) for item in self.items]

    @property
    def products(self) -> List[Product]:
        return [Product.from_dict(item) for item in self.items]

    @property
    def carts(self) -> List[Cart]:
        return [Cart.from_dict(item) for item in self.items]


@dataclass
class EntityBody:
    """A single resource: ``{"_id", ...}``."""

    _id: str
    data: Dict[str, Any] = field(default_factory=dict)


ResponseBody = Union[
    LoginBody,
    EntityBody,
    CreatedBody,
    ItemErrorBody,
    ListBody,
    MessageBody,
    FieldErrorBody,
]

LIST_KEYS = ("usuarios", "produtos", "carrinhos")


def parse_body(data: Any) -> ResponseBody:
    """
    Classify a decoded JSON body into one of the known response shapes.

    Shapes are checked most specific first; a dict without ``message`` is a
    field-keyed validation error.
    """
    if isinstance(data, str):
        return MessageBody(message=data)

    if not isinstance(data, dict):
        return FieldErrorBody(fields={"body": data})

    if "quantidade" in data:
        for key in LIST_KEYS:
            if isinstance(data.get(key), list):
                return ListBody(quantidade=data["quantidade"], key=key, items=data[key])

    if "_id" in data and "message" not in data:
        return EntityBody(_id=data["_id"], data=dict(data))

    if "message" in data:
        if "authorization" in data:
            return LoginBody(message=data["message"], authorization=data["authorization"])
        if "_id" in data:
            return CreatedBody(message=data["message"], _id=data["_id"])
        if isinstance(data.get("item"), dict):
            return ItemErrorBody(message=data["message"], item=data["item"])
        extra = {k: v for k, v in data.items() if k != "message"}
        return MessageBody(message=data["message"], extra=extra)

    return FieldErrorBody(fields=dict(data))
