"""Streaming service definitions."""

from typing import List, Optional

from pydantic import BaseModel


class StreamingService(BaseModel):
    """A subscription streaming service the plan can rotate through."""

    id: str
    name: str
    # Official account / cancel subscription page
    cancel_url: str
    subscribe_url: Optional[str] = None
    logo_url: Optional[str] = None
    # Other names TMDB or users may use for this service (e.g. "HBO Max")
    aliases: List[str] = []

    def matches(self, service_name: str) -> bool:
        """Return True if ``service_name`` is this service's name or an alias."""
        wanted = service_name.strip().lower()
        if not wanted:
            return False
        if self.name.lower() == wanted:
            return True
        return any(alias.strip().lower() == wanted for alias in self.aliases)
