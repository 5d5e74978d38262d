import logging
from typing import Any, Dict, List, Optional

import requests

from ddnstool import settings
from ddnstool.dns import DNSBase
from ddnstool.models import DnsRecord, RecordType, Zone

logger = logging.getLogger(__name__)


class CloudflareDNS(DNSBase):
    """Cloudflare API v4 implementation of the DNS plugin."""

    def __init__(self, api_token: str, api_base: Optional[str] = None, timeout: Optional[int] = None):
        """Initialize the Cloudflare DNS plugin.

        Builds a `requests.Session` carrying the bearer token, which is reused
        for every call made during one reconciliation run.

        Args:
            api_token (str): Cloudflare API token with Zone:Read and DNS:Edit.
            api_base (str, optional): API root; defaults to `CF_API_BASE`.
            timeout (int, optional): Per-request timeout in seconds; defaults
                to `CF_REQUEST_TIMEOUT`.

        Returns:
            None
        """
        self.api_base = api_base or settings.CF_API_BASE
        if not self.api_base.endswith('/'):
            self.api_base += '/'
        self.timeout = timeout or settings.CF_REQUEST_TIMEOUT
        self.session = self.get_dns_client(api_token)

    def get_dns_client(self, api_token: str) -> requests.Session:
        """Return a session preconfigured with Cloudflare auth headers."""
        session = requests.Session()
        session.headers.update({
            "Authorization": f"Bearer {api_token}",
            "Content-Type": "application/json",
        })
        return session

    def _request(self, method: str, path: str, params: Optional[dict] = None,
                 json_data: Optional[dict] = None) -> Dict[str, Any]:
        """Call the Cloudflare API and return the decoded envelope.

        Args:
            method (str): HTTP method.
            path (str): Path relative to the API root, e.g. `zones`.
            params (dict, optional): Query string parameters.
            json_data (dict, optional): JSON request body.

        Returns:
            dict: The response envelope (`success`, `result`, `result_info`, ...).

        Raises:
            DNSBase.DNSError: On transport errors, non-JSON bodies, or an
                envelope with `success: false`. The first provider error
                message and the HTTP status are attached.
        """
        url = self.api_base + path
        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=json_data,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Cloudflare request {method} {path} failed: {e}")
            raise DNSBase.DNSError(f"Request failed: {e}")

        try:
            data = response.json()
        except ValueError:
            raise DNSBase.DNSError(
                f"Unexpected response from Cloudflare (HTTP {response.status_code})",
                status_code=response.status_code,
            )

        if not isinstance(data, dict):
            raise DNSBase.DNSError(
                f"Unexpected response from Cloudflare (HTTP {response.status_code})",
                status_code=response.status_code,
            )

        if not data.get('success', False):
            errors = data.get('errors') or []
            message = errors[0].get('message', '') if errors else ''
            logger.error(f"Cloudflare API error on {method} {path}: {message}")
            raise DNSBase.DNSError(message, status_code=response.status_code, errors=errors)

        return data

    def authenticate(self) -> None:
        self._request('GET', 'zones')
        logger.info("Cloudflare authentication successful")

    def list_zones(self, name: str, status: str = 'active') -> List[Zone]:
        data = self._request('GET', 'zones', params={'name': name, 'status': status})
        return [Zone(id=z['id'], name=z.get('name', name)) for z in data.get('result') or []]

    def list_records(self, zone_id: str, name: str) -> List[DnsRecord]:
        """List the A/AAAA records for `name`, following pagination.

        Records of other types (CNAME, TXT, ...) sharing the name are skipped.
        """
        records = []
        params = {'name': name, 'per_page': 100, 'page': 1}
        while True:
            data = self._request('GET', f'zones/{zone_id}/dns_records', params=dict(params))
            for item in data.get('result') or []:
                if item.get('type') in (RecordType.A.value, RecordType.AAAA.value):
                    records.append(self._to_record(item))

            total_pages = (data.get('result_info') or {}).get('total_pages', 1)
            if params['page'] >= total_pages:
                break
            params['page'] += 1
        return records

    def create_record(self, zone_id: str, record: DnsRecord) -> DnsRecord:
        data = self._request('POST', f'zones/{zone_id}/dns_records', json_data=record.payload())
        return self._to_record(data['result']) if data.get('result') else record

    def update_record(self, zone_id: str, record: DnsRecord) -> DnsRecord:
        if not record.id:
            raise DNSBase.DNSError(f"Cannot update record without an id: {record.name}")
        data = self._request('PUT', f'zones/{zone_id}/dns_records/{record.id}', json_data=record.payload())
        return self._to_record(data['result']) if data.get('result') else record

    @staticmethod
    def _to_record(item: Dict[str, Any]) -> DnsRecord:
        return DnsRecord(
            id=item.get('id'),
            type=RecordType(item['type']),
            name=item['name'],
            content=item['content'],
            ttl=item.get('ttl', 1),
            proxied=item.get('proxied', False),
        )
