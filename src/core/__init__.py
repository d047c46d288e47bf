"""Core domain layer - entities, interfaces, services and exceptions."""

from src.core import entities, exceptions, interfaces

__all__ = ["entities", "interfaces", "exceptions"]
