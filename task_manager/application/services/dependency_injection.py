"""Dependency injection container"""

from typing import Dict, Any, Type, TypeVar, Callable, Optional
from dataclasses import dataclass, field
import inspect
import logging

logger = logging.getLogger(__name__)

T = TypeVar('T')

SINGLETON = "singleton"
TRANSIENT = "transient"


@dataclass
class ServiceDescriptor:
    """Descriptor for a registered service"""
    service_type: Type
    implementation: Type = None
    factory: Callable = None
    instance: Any = None
    lifetime: str = TRANSIENT  # singleton, transient
    dependencies: Dict[str, Type] = field(default_factory=dict)


class DIContainer:
    """Dependency injection container"""

    def __init__(self):
        self._services: Dict[Type, ServiceDescriptor] = {}
        self._singletons: Dict[Type, Any] = {}

    def register_singleton(
        self,
        service_type: Type[T],
        implementation: Type[T] = None,
        factory: Callable[..., T] = None,
        instance: T = None,
        dependencies: Optional[Dict[str, Type]] = None
    ) -> "DIContainer":
        """Register a singleton service"""
        if sum(x is not None for x in [implementation, factory, instance]) != 1:
            raise ValueError("Must provide exactly one of: implementation, factory, or instance")

        self._services[service_type] = ServiceDescriptor(
            service_type=service_type,
            implementation=implementation,
            factory=factory,
            instance=instance,
            lifetime=SINGLETON,
            dependencies=dependencies or {}
        )
        return self

    def register_transient(
        self,
        service_type: Type[T],
        implementation: Type[T] = None,
        factory: Callable[..., T] = None,
        dependencies: Optional[Dict[str, Type]] = None
    ) -> "DIContainer":
        """Register a transient service"""
        if sum(x is not None for x in [implementation, factory]) != 1:
            raise ValueError("Must provide exactly one of: implementation or factory")

        self._services[service_type] = ServiceDescriptor(
            service_type=service_type,
            implementation=implementation,
            factory=factory,
            lifetime=TRANSIENT,
            dependencies=dependencies or {}
        )
        return self

    def is_registered(self, service_type: Type) -> bool:
        return service_type in self._services

    async def resolve(self, service_type: Type[T]) -> T:
        """Resolve a service instance"""
        if service_type not in self._services:
            raise ValueError(f"Service {service_type.__name__} not registered")

        descriptor = self._services[service_type]

        if descriptor.lifetime == SINGLETON and service_type in self._singletons:
            return self._singletons[service_type]

        instance = await self._create_instance(descriptor)

        if descriptor.lifetime == SINGLETON:
            self._singletons[service_type] = instance

        return instance

    async def _create_instance(self, descriptor: ServiceDescriptor) -> Any:
        """Create a new service instance"""
        try:
            if descriptor.instance is not None:
                return descriptor.instance

            dependencies = await self._resolve_dependencies(descriptor.dependencies)
            if descriptor.factory is not None:
                instance = descriptor.factory(**dependencies)
                if inspect.isawaitable(instance):
                    instance = await instance
                return instance
            return descriptor.implementation(**dependencies)

        except Exception as e:
            logger.error(f"Failed to create instance of {descriptor.service_type.__name__}: {e}")
            raise

    async def _resolve_dependencies(self, dependencies: Dict[str, Type]) -> Dict[str, Any]:
        """Resolve dependency instances keyed by parameter name"""
        resolved = {}
        for name, dep_type in dependencies.items():
            resolved[name] = await self.resolve(dep_type)
        return resolved

    async def cleanup(self):
        """Cleanup all services"""
        for service_instance in self._singletons.values():
            if hasattr(service_instance, 'cleanup'):
                try:
                    await service_instance.cleanup()
                except Exception as e:
                    logger.warning(f"Error cleaning up singleton service: {e}")

        self._singletons.clear()
