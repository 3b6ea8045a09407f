"""Namespace alias resolution."""

from symbol_cli.features.namespace.service import NamespaceInfo, NamespaceService
from symbol_cli.features.namespace.validators import NamespaceValidator

__all__ = ["NamespaceInfo", "NamespaceService", "NamespaceValidator"]
