# ==============================================================================
# DESTINITY ERP - Backend de empleados, proveedores, inventario y ventas
# ==============================================================================

__version__ = '1.0.0'
