# ==============================================================================
# ENTIDADES DEL DOMINIO - Definiciones de dataclasses
# ==============================================================================
# Cada entidad representa un documento del almacén (colecciones hr,
# inventory y sales). Las claves del documento usan camelCase, igual que
# el payload JSON de la API.
#
# - to_document():   entidad → documento del almacén (con _id)
# - from_document(): documento del almacén → entidad
# - from_payload():  JSON recibido por la API → entidad (con id)
# ==============================================================================

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Union

from destinity_erp.errors import ErrorType, ServiceError


USER_TYPE_EMPLOYEE = 'employee'
USER_TYPE_PROVIDER = 'provider'


def to_iso(value: Optional[datetime]) -> Optional[str]:
    """Convierte un datetime a texto ISO-8601 (o None)."""
    return value.isoformat() if value is not None else None


def from_iso(value: Any) -> Optional[datetime]:
    """Convierte texto ISO-8601 a datetime. Acepta datetime o None."""
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def sub_document(data: Dict[str, Any], key: str) -> Optional[Dict[str, Any]]:
    """
    Lee un subdocumento (objeto JSON anidado) del payload.

    Raises:
        ServiceError: INVALID_INPUT si el valor existe pero no es un objeto
    """
    value = data.get(key)
    if value is not None and not isinstance(value, dict):
        raise ServiceError(ErrorType.INVALID_INPUT, f"El campo {key} debe ser un objeto", key)
    return value


# ==============================================================================
# USUARIOS (EMPLEADOS Y PROVEEDORES)
# ==============================================================================

@dataclass
class EmployeeData:
    """Subdocumento con los datos laborales de un empleado."""
    role: Optional[str] = None
    department: Optional[str] = None
    salary: Any = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'role': self.role,
            'department': self.department,
            'salary': self.salary,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EmployeeData':
        return cls(
            role=data.get('role'),
            department=data.get('department'),
            salary=data.get('salary'),
        )


@dataclass
class ProviderData:
    """Subdocumento con los datos de contacto de un proveedor."""
    company: Optional[str] = None
    service_type: Optional[str] = None
    phone: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'company': self.company,
            'serviceType': self.service_type,
            'phone': self.phone,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ProviderData':
        return cls(
            company=data.get('company'),
            service_type=data.get('serviceType'),
            phone=data.get('phone'),
        )


# Un usuario es empleado O proveedor: nunca ambos.
UserProfile = Union[EmployeeData, ProviderData]


def _profile_from(data: Dict[str, Any]) -> Optional[UserProfile]:
    """
    Lee el subdocumento del usuario (employeeData / providerData).

    Raises:
        ServiceError: BUSINESS_RULE si el documento trae ambos subdocumentos,
            INVALID_INPUT si alguno no es un objeto
    """
    employee = sub_document(data, 'employeeData')
    provider = sub_document(data, 'providerData')
    if employee is not None and provider is not None:
        raise ServiceError.business(
            "El usuario no puede ser empleado y proveedor al mismo tiempo."
        )
    if employee is not None:
        return EmployeeData.from_dict(employee)
    if provider is not None:
        return ProviderData.from_dict(provider)
    return None


@dataclass
class User:
    """
    Usuario del sistema: empleado o proveedor.

    Attributes:
        id: Identificador del documento (24 caracteres hex)
        first_name: Nombre
        last_name: Apellido paterno
        middle_name: Apellido materno (opcional)
        email: Correo (único)
        password: Contraseña en texto plano al crear, hash una vez guardada
        status: Estatus ("Activo" por defecto)
        profile: EmployeeData o ProviderData
        created_at: Fecha de creación
        updated_at: Fecha de la última modificación
    """
    id: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    middle_name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    status: Optional[str] = None
    profile: Optional[UserProfile] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def user_type(self) -> Optional[str]:
        """Tipo de usuario derivado del subdocumento."""
        if isinstance(self.profile, EmployeeData):
            return USER_TYPE_EMPLOYEE
        if isinstance(self.profile, ProviderData):
            return USER_TYPE_PROVIDER
        return None

    @property
    def full_name(self) -> str:
        """Nombre completo (solo las partes no vacías)."""
        parts = [self.first_name, self.last_name, self.middle_name]
        return ' '.join(p for p in parts if p)

    def to_document(self) -> Dict[str, Any]:
        """Convierte a documento para el almacén."""
        doc = {
            '_id': self.id,
            'firstName': self.first_name,
            'lastName': self.last_name,
            'middleName': self.middle_name,
            'email': self.email,
            'password': self.password,
            'userType': self.user_type,
            'status': self.status,
            'createdAt': to_iso(self.created_at),
            'updatedAt': to_iso(self.updated_at),
        }
        if isinstance(self.profile, EmployeeData):
            doc['employeeData'] = self.profile.to_dict()
        elif isinstance(self.profile, ProviderData):
            doc['providerData'] = self.profile.to_dict()
        return doc

    @classmethod
    def from_document(cls, doc: Optional[Dict[str, Any]]) -> Optional['User']:
        """Crea instancia desde un documento del almacén."""
        if doc is None:
            return None
        return cls(
            id=doc.get('_id'),
            first_name=doc.get('firstName'),
            last_name=doc.get('lastName'),
            middle_name=doc.get('middleName'),
            email=doc.get('email'),
            password=doc.get('password'),
            status=doc.get('status'),
            profile=_profile_from(doc),
            created_at=from_iso(doc.get('createdAt')),
            updated_at=from_iso(doc.get('updatedAt')),
        )

    @classmethod
    def from_payload(cls, data: Optional[Dict[str, Any]]) -> Optional['User']:
        """Crea instancia desde el JSON recibido por la API."""
        if not data:
            return None
        return cls(
            id=data.get('id'),
            first_name=data.get('firstName'),
            last_name=data.get('lastName'),
            middle_name=data.get('middleName'),
            email=data.get('email'),
            password=data.get('password'),
            status=data.get('status'),
            profile=_profile_from(data),
        )


# ==============================================================================
# INVENTARIO
# ==============================================================================

@dataclass
class Product:
    """
    Producto del inventario.

    price y stock conservan el valor tal como llega (int, float o cualquier
    otro tipo del JSON); las reglas numéricas las aplica el validador.
    """
    id: Optional[str] = None
    name: Optional[str] = None
    price: Any = None
    stock: Any = None
    category: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    provider: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_document(self) -> Dict[str, Any]:
        """Convierte a documento para el almacén."""
        return {
            '_id': self.id,
            'name': self.name,
            'price': self.price,
            'stock': self.stock,
            'category': self.category,
            'description': self.description,
            'image': self.image,
            'provider': self.provider,
            'status': self.status,
            'createdAt': to_iso(self.created_at),
            'updatedAt': to_iso(self.updated_at),
        }

    @classmethod
    def from_document(cls, doc: Optional[Dict[str, Any]]) -> Optional['Product']:
        """Crea instancia desde un documento del almacén."""
        if doc is None:
            return None
        product = cls.from_payload(doc)
        product.id = doc.get('_id')
        product.created_at = from_iso(doc.get('createdAt'))
        product.updated_at = from_iso(doc.get('updatedAt'))
        return product

    @classmethod
    def from_payload(cls, data: Optional[Dict[str, Any]]) -> Optional['Product']:
        """Crea instancia desde el JSON recibido por la API."""
        if not data:
            return None
        return cls(
            id=data.get('id'),
            name=data.get('name'),
            price=data.get('price'),
            stock=data.get('stock'),
            category=data.get('category'),
            description=data.get('description'),
            image=data.get('image'),
            provider=data.get('provider'),
            status=data.get('status'),
        )


# ==============================================================================
# VENTAS
# ==============================================================================
# La venta guarda una COPIA del cliente y del producto al momento de vender.
# Editar después al usuario o al producto no modifica ventas históricas.

@dataclass
class CustomerInfo:
    """Datos básicos del cliente al momento de la venta."""
    id: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {'id': self.id, 'name': self.name, 'email': self.email}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CustomerInfo':
        return cls(id=data.get('id'), name=data.get('name'), email=data.get('email'))


@dataclass
class ProductSold:
    """Detalle del producto vendido (precio y cantidad del momento)."""
    id: Optional[str] = None
    name: Optional[str] = None
    price: Any = None
    quantity: Any = None
    sub_total: Any = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'price': self.price,
            'quantity': self.quantity,
            'subTotal': self.sub_total,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ProductSold':
        return cls(
            id=data.get('id'),
            name=data.get('name'),
            price=data.get('price'),
            quantity=data.get('quantity'),
            sub_total=data.get('subTotal'),
        )


@dataclass
class Sale:
    """
    Venta registrada.

    Attributes:
        customer_info: Copia de los datos del cliente
        product_sold: Copia del producto vendido
        payment_method: Método de pago
        total_amount: Total cobrado
        status: Estatus ("Completada" por defecto)
        sale_date: Fecha de la venta
    """
    id: Optional[str] = None
    customer_info: Optional[CustomerInfo] = None
    product_sold: Optional[ProductSold] = None
    payment_method: Optional[str] = None
    total_amount: Any = None
    status: Optional[str] = None
    sale_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_document(self) -> Dict[str, Any]:
        """Convierte a documento para el almacén."""
        return {
            '_id': self.id,
            'customerInfo': self.customer_info.to_dict() if self.customer_info else None,
            'productSold': self.product_sold.to_dict() if self.product_sold else None,
            'paymentMethod': self.payment_method,
            'totalAmount': self.total_amount,
            'status': self.status,
            'saleDate': to_iso(self.sale_date),
            'createdAt': to_iso(self.created_at),
            'updatedAt': to_iso(self.updated_at),
        }

    @classmethod
    def from_document(cls, doc: Optional[Dict[str, Any]]) -> Optional['Sale']:
        """Crea instancia desde un documento del almacén."""
        if doc is None:
            return None
        sale = cls.from_payload(doc)
        sale.id = doc.get('_id')
        sale.created_at = from_iso(doc.get('createdAt'))
        sale.updated_at = from_iso(doc.get('updatedAt'))
        return sale

    @classmethod
    def from_payload(cls, data: Optional[Dict[str, Any]]) -> Optional['Sale']:
        """Crea instancia desde el JSON recibido por la API."""
        if not data:
            return None
        customer = sub_document(data, 'customerInfo')
        product = sub_document(data, 'productSold')
        try:
            sale_date = from_iso(data.get('saleDate'))
        except ValueError:
            raise ServiceError.business("La fecha de venta no tiene un formato válido", 'saleDate')
        return cls(
            id=data.get('id'),
            customer_info=CustomerInfo.from_dict(customer) if customer is not None else None,
            product_sold=ProductSold.from_dict(product) if product is not None else None,
            payment_method=data.get('paymentMethod'),
            total_amount=data.get('totalAmount'),
            status=data.get('status'),
            sale_date=sale_date,
        )
