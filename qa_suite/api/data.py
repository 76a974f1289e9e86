"""
Unique test data for ServeRest.

Every generated user and product is unique per call so parallel runs and
leftover data from earlier runs do not collide.
"""

import random
import time
from dataclasses import asdict, dataclass
from typing import Any, Dict
from uuid import uuid4


DEFAULT_PASSWORD = "senha123456"


def generate_unique_id() -> str:
    return f"{int(time.time() * 1000)}_{uuid4().hex[:9]}"


def generate_unique_email() -> str:
    """Generate a unique email address for testing."""
    return f"qa_user_{int(time.time() * 1000)}_{uuid4().hex[:5]}@qatest.com"


def generate_unique_name(prefix: str = "Test") -> str:
    return f"{prefix}_{int(time.time() * 1000)}_{uuid4().hex[:5]}"


@dataclass
class UserData:
    """User payload for ``POST /usuarios``."""

    # Prevent pytest from treating this as a test class
    __test__ = False

    nome: str
    email: str
    password: str = DEFAULT_PASSWORD
    administrador: str = "false"

    @property
    def payload(self) -> Dict[str, Any]:
        return asdict(self)

    @property
    def login_data(self) -> Dict[str, str]:
        """Get data for login."""
        return {"email": self.email, "password": self.password}


@dataclass
class ProductData:
    """Product payload for ``POST /produtos``."""

    nome: str
    preco: Any
    descricao: str
    quantidade: int

    @property
    def payload(self) -> Dict[str, Any]:
        return asdict(self)


def generate_valid_user() -> UserData:
    return UserData(
        nome=f"QA Test User {generate_unique_id()}",
        email=generate_unique_email(),
    )


def generate_admin_user() -> UserData:
    return UserData(
        nome=f"QA Admin User {generate_unique_id()}",
        email=generate_unique_email(),
        administrador="true",
    )


def generate_valid_product() -> ProductData:
    return ProductData(
        nome=generate_unique_name("Produto"),
        preco=random.randint(10, 1009),
        descricao=f"Descrição do produto {generate_unique_id()}",
        quantidade=random.randint(1, 100),
    )


def generate_user_with_invalid_email() -> UserData:
    return UserData(
        nome=f"QA Test User {generate_unique_id()}",
        email="email_invalido",
    )


def generate_user_with_invalid_admin() -> UserData:
    """Administrador must be 'true' or 'false'."""
    return UserData(
        nome=f"QA Test User {generate_unique_id()}",
        email=generate_unique_email(),
        administrador="maybe",
    )


def generate_product_with_negative_price() -> ProductData:
    return ProductData(
        nome=generate_unique_name("Produto"),
        preco=-100,
        descricao="Produto com preço negativo",
        quantidade=10,
    )


def generate_product_with_decimal_price() -> ProductData:
    return ProductData(
        nome=generate_unique_name("Produto"),
        preco=99.99,
        descricao="Produto com preço decimal",
        quantidade=10,
    )
