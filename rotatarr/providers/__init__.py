"""Service registry for the streaming services Rotatarr knows about."""

from typing import Dict, List

from rotatarr.providers.base import StreamingService


class ServiceRegistry:
    """Registry for managing known streaming services."""

    _services: Dict[str, StreamingService] = {}

    @classmethod
    def register(cls, service: StreamingService) -> None:
        """Register a service definition."""
        cls._services[service.id] = service

    @classmethod
    def get(cls, service_id: str) -> StreamingService | None:
        """Get a service by id."""
        return cls._services.get(service_id)

    @classmethod
    def all(cls) -> List[StreamingService]:
        """Get all registered services."""
        return list(cls._services.values())

    @classmethod
    def names(cls) -> List[str]:
        """Get display names of all registered services."""
        return [s.name for s in cls._services.values()]

    @classmethod
    def lookup(cls, service_name: str | None) -> StreamingService | None:
        """Find a service by display name or alias (e.g. "Max", "HBO Max")."""
        if not service_name or not service_name.strip():
            return None
        for service in cls._services.values():
            if service.matches(service_name):
                return service
        return None


# Convenience function for registration
def register_service(service: StreamingService) -> None:
    """Register a service with the global registry."""
    ServiceRegistry.register(service)
