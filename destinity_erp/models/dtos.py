# ==============================================================================
# DTOs - Proyecciones reducidas que salen por la API
# ==============================================================================
# Nunca exponen el hash de la contraseña ni los subdocumentos completos.
# ==============================================================================

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from destinity_erp.models.entities import EmployeeData, Product, Sale, User, to_iso


@dataclass
class UserDTO:
    id: Optional[str]
    firstName: Optional[str]
    lastName: Optional[str]
    middleName: Optional[str]
    email: Optional[str]
    userType: Optional[str]
    role: Optional[str]
    department: Optional[str]
    status: Optional[str]
    createdAt: Optional[datetime]
    updatedAt: Optional[datetime]

    @classmethod
    def from_user(cls, user: User) -> 'UserDTO':
        employee = user.profile if isinstance(user.profile, EmployeeData) else None
        return cls(
            id=user.id,
            firstName=user.first_name,
            lastName=user.last_name,
            middleName=user.middle_name,
            email=user.email,
            userType=user.user_type,
            role=employee.role if employee else None,
            department=employee.department if employee else None,
            status=user.status,
            createdAt=user.created_at,
            updatedAt=user.updated_at,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['createdAt'] = to_iso(self.createdAt)
        data['updatedAt'] = to_iso(self.updatedAt)
        return data


@dataclass
class ProductDTO:
    id: Optional[str]
    name: Optional[str]
    price: Any
    stock: Any
    category: Optional[str]
    description: Optional[str]
    image: Optional[str]
    provider: Optional[str]
    status: Optional[str]

    @classmethod
    def from_product(cls, product: Product) -> 'ProductDTO':
        return cls(
            id=product.id,
            name=product.name,
            price=product.price,
            stock=product.stock,
            category=product.category,
            description=product.description,
            image=product.image,
            provider=product.provider,
            status=product.status,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SaleDTO:
    """Resumen de venta: cliente, método de pago, total, estatus y fecha."""
    id: Optional[str]
    name: Optional[str]
    payment: Optional[str]
    total: Any
    status: Optional[str]
    sale: Optional[datetime]

    @classmethod
    def from_sale(cls, sale: Sale) -> 'SaleDTO':
        return cls(
            id=sale.id,
            name=sale.customer_info.name if sale.customer_info else None,
            payment=sale.payment_method,
            total=sale.total_amount,
            status=sale.status,
            sale=sale.sale_date,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['sale'] = to_iso(self.sale)
        return data
