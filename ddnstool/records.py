# create / update / skip decisions for a single address record

import logging
from typing import List, Optional

from ddnstool.dns import DNSBase
from ddnstool.errors import AmbiguousRecord, RecordNotFound, RecordWriteFailed
from ddnstool.models import AUTO_TTL, DnsRecord, DomainResult, Outcome, RecordType, Zone

logger = logging.getLogger(__name__)


def find_existing_record(records: List[DnsRecord], record_type: RecordType) -> Optional[DnsRecord]:
    """Pick the record of `record_type` out of a domain's fetched records.

    Args:
        records (list[DnsRecord]): Records already listed for one name.
        record_type (RecordType): Family to look for.

    Returns:
        DnsRecord | None: The only record of that type, or None if there is none.

    Raises:
        AmbiguousRecord: If the provider holds more than one record of the type;
            we refuse to guess which one is authoritative.
    """
    matches = [r for r in records if r.type == record_type]
    if len(matches) > 1:
        raise AmbiguousRecord(
            f"Found {len(matches)} {record_type.value}-Records for '{matches[0].name}', refusing to pick one."
        )
    return matches[0] if matches else None


def missing_record_types(records: List[DnsRecord], record_types: List[RecordType]) -> List[RecordType]:
    """Return the types in `record_types` that have no record at all in `records`."""
    present = {r.type for r in records}
    return [t for t in record_types if t not in present]


class RecordManager:

    def __init__(self, dns_plugin: DNSBase):
        self.dns = dns_plugin

    def reconcile(self, zone: Zone, domain: str, record_type: RecordType, address: str,
                  proxied: bool, records: List[DnsRecord], create_missing: bool = True) -> DomainResult:
        """Bring one address record of `domain` in line with `address`.

        Issues at most one write call:
        - existing record with the same content: skipped, no call;
        - existing record with other content: update (same id, TTL auto);
        - no record: create, unless `create_missing` is False.

        Args:
            zone (Zone): Zone the domain lives in.
            domain (str): Record name.
            record_type (RecordType): A or AAAA.
            address (str): Desired record content.
            proxied (bool): Proxy flag written on create/update.
            records (list[DnsRecord]): The domain's records, fetched once by the caller.
            create_missing (bool): Whether a missing record may be created.

        Returns:
            DomainResult: Outcome for this (domain, family) pair. Failures carry
                the error kind; provider rejections never raise out of here.
        """
        family = record_type.family
        try:
            existing = find_existing_record(records, record_type)
            desired = DnsRecord(
                type=record_type,
                name=domain,
                content=address,
                ttl=AUTO_TTL,
                proxied=proxied,
            )

            if existing is None:
                if not create_missing:
                    raise RecordNotFound(f"No {record_type.value}-Record found for '{domain}'.")
                return self._create(zone, domain, desired)

            if existing.content == address:
                message = f"Skipped record, because {family} is already up-to-date."
                logger.info(message)
                return DomainResult(domain, Outcome.SKIPPED, record_type, message=message)

            desired.id = existing.id
            return self._update(zone, domain, desired)

        except (AmbiguousRecord, RecordNotFound, RecordWriteFailed) as e:
            logger.error(e.message)
            return DomainResult(domain, Outcome.FAILED, record_type, error=e.kind, message=e.message)

    def _create(self, zone, domain, record):
        try:
            self.dns.create_record(zone.id, record)
        except DNSBase.DNSError as e:
            raise RecordWriteFailed(f"Could not create record for '{domain}': {e.message}")
        message = f"Created new {record.type.value}-Record for '{domain}' with ip '{record.content}' successfully."
        logger.info(message)
        return DomainResult(domain, Outcome.CREATED, record.type, message=message)

    def _update(self, zone, domain, record):
        try:
            self.dns.update_record(zone.id, record)
        except DNSBase.DNSError as e:
            raise RecordWriteFailed(f"Could not update record for '{domain}': {e.message}")
        message = f"Updated {record.type.value}-Record with ip '{record.content}' successfully."
        logger.info(message)
        return DomainResult(domain, Outcome.UPDATED, record.type, message=message)
