"""Infrastructure layer: adapters implementing the application ports."""

from .container import DependencyContainer, create_default_container

__all__ = ["DependencyContainer", "create_default_container"]
