from abc import ABC, abstractmethod
from typing import List, Optional

from ddnstool.models import DnsRecord, Zone

class DNSBase(ABC):
    """
    Abstract base class for DNS provider plugins.
    Implementations raise DNSError whenever the provider rejects or fails a call.
    """

    class DNSError(Exception):
        """Raised for DNS-related failures."""

        def __init__(self, message: str, status_code: Optional[int] = None, errors: Optional[list] = None):
            super().__init__(message)
            self.message = message
            self.status_code = status_code
            self.errors = errors or []

    @abstractmethod
    def authenticate(self) -> None:
        """Probe the credential with a cheap read call; raise DNSError if it is refused."""
        pass

    @abstractmethod
    def list_zones(self, name: str, status: str = 'active') -> List[Zone]:
        """Return the zones matching `name` and `status` (normally zero or one)."""
        pass

    @abstractmethod
    def list_records(self, zone_id: str, name: str) -> List[DnsRecord]:
        """Return the A/AAAA records named `name` in the zone."""
        pass

    @abstractmethod
    def create_record(self, zone_id: str, record: DnsRecord) -> DnsRecord:
        """Create `record` in the zone and return it as stored by the provider."""
        pass

    @abstractmethod
    def update_record(self, zone_id: str, record: DnsRecord) -> DnsRecord:
        """Overwrite the record identified by `record.id` and return the stored record."""
        pass
