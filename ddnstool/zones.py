# domain -> zone lookups against the DNS provider

import logging

from ddnstool.dns import DNSBase
from ddnstool.errors import InvalidDomain, ZoneNotFound
from ddnstool.models import Zone

logger = logging.getLogger(__name__)


def zone_candidate(domain):
    """Return the zone name to look up for `domain`: its last two labels.

    Multi-label public suffixes (`example.co.uk`) resolve to the suffix itself
    and will not be found; that is a known limitation.

    Raises:
        InvalidDomain: If the domain has fewer than two labels or an empty one.
    """
    labels = domain.split('.')
    if len(labels) < 2 or not all(labels[-2:]):
        raise InvalidDomain(f"Invalid domain: {domain}")
    return '.'.join(labels[-2:])


class ZoneManager:

    def __init__(self, dns_plugin: DNSBase):
        self.dns = dns_plugin

    def resolve_zone(self, domain: str) -> Zone:
        """Find the active provider zone that holds `domain`.

        Args:
            domain (str): Fully qualified domain name, e.g. `home.example.com`.

        Returns:
            Zone: The first active zone named after the domain's last two labels.

        Raises:
            InvalidDomain: If the domain cannot yield a zone candidate.
            ZoneNotFound: If the provider has no such active zone, or the zone
                listing call fails. Not retried.
        """
        zone_name = zone_candidate(domain)
        logger.info(f"Find zone for record '{domain}'")
        try:
            zones = self.dns.list_zones(zone_name, status='active')
        except DNSBase.DNSError as e:
            raise ZoneNotFound(f"Could not set record '{domain}', zone lookup failed: {e.message}")

        if not zones or not zones[0].id:
            raise ZoneNotFound(f"Could not set record '{domain}', could not determine zone id.")

        zone = zones[0]
        logger.info(f"Found zone id ({zone.id}) for '{domain}'.")
        return zone
