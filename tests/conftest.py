import os

import pytest

os.environ["FLASK_ENV"] = "local"
os.environ["CF_API_TOKEN"] = ""
os.environ["CF_API_BASE"] = "https://api.cloudflare.test/client/v4/"
os.environ["DEFAULT_PROXIED"] = "false"
os.environ["LOG_ENABLED"] = "false"

from ddnstool import create_app
from ddnstool.dns import DNSBase
from ddnstool.models import DnsRecord, Zone


class FakeDNS(DNSBase):
    """In-memory provider that records every call made against it."""

    def __init__(self, zones=None, records=None):
        self.zones = {z.name: z for z in (zones or [])}
        self.records = records or {}
        self.calls = []
        self.auth_error = None
        self.zone_errors = set()
        self.list_errors = set()
        self.write_errors = set()
        self._next_id = 1

    @property
    def writes(self):
        return [c for c in self.calls if c[0] in ('create_record', 'update_record')]

    def authenticate(self):
        self.calls.append(('authenticate',))
        if self.auth_error:
            raise self.auth_error

    def list_zones(self, name, status='active'):
        self.calls.append(('list_zones', name, status))
        if name in self.zone_errors:
            raise DNSBase.DNSError("zone lookup exploded", status_code=500)
        zone = self.zones.get(name)
        return [zone] if zone else []

    def list_records(self, zone_id, name):
        self.calls.append(('list_records', zone_id, name))
        if name in self.list_errors:
            raise DNSBase.DNSError("listing exploded", status_code=500)
        return [r for r in self.records.get(zone_id, []) if r.name == name]

    def create_record(self, zone_id, record):
        self.calls.append(('create_record', zone_id, record.payload()))
        if record.name in self.write_errors:
            raise DNSBase.DNSError("Record quota exceeded", status_code=400)
        stored = DnsRecord(
            id=f"rec-{self._next_id}",
            type=record.type,
            name=record.name,
            content=record.content,
            ttl=record.ttl,
            proxied=record.proxied,
        )
        self._next_id += 1
        self.records.setdefault(zone_id, []).append(stored)
        return stored

    def update_record(self, zone_id, record):
        self.calls.append(('update_record', zone_id, record.id, record.payload()))
        if record.name in self.write_errors:
            raise DNSBase.DNSError("Record update refused", status_code=400)
        for stored in self.records.get(zone_id, []):
            if stored.id == record.id:
                stored.content = record.content
                stored.ttl = record.ttl
                stored.proxied = record.proxied
                return stored
        raise DNSBase.DNSError("Record not found", status_code=404)


@pytest.fixture
def fake_dns():
    return FakeDNS(zones=[Zone(id='zone-123', name='example.com')])


@pytest.fixture
def client():
    test_app = create_app({
        'TESTING': True,
        'SECRET_KEY': '1234567890'
    })
    with test_app.test_client() as client:
        yield client
