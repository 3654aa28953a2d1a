"""Role catalog: roles, industries and required-skill lists."""

from .data import DEFAULT_RESOURCES, DEFAULT_ROLES
from .roles import CatalogError, Role, RoleCatalog

__all__ = ["CatalogError", "DEFAULT_RESOURCES", "DEFAULT_ROLES", "Role", "RoleCatalog"]
