# The reconciliation workflow is orchestrated from here.

import logging
from typing import List, Optional

from flask import Blueprint, g, jsonify, request

from ddnstool import settings
from ddnstool.addresses import address_set
from ddnstool.dns import DNSBase
from ddnstool.dns.cloudflare import CloudflareDNS
from ddnstool.errors import (
    AuthenticationFailed, DDNSError, MissingParameters, NoValidAddress,
    RecordLookupFailed, RecordNotFound
)
from ddnstool.helpers import parse_flag, split_domains
from ddnstool.models import BatchResult, DomainResult, Outcome
from ddnstool.records import RecordManager, missing_record_types
from ddnstool.zones import ZoneManager

bp = Blueprint('orchestrator', __name__)
logger = logging.getLogger(__name__)


@bp.route('/update')
def process_domains():
    """Reconcile every domain in the `domain` query parameter.

    Query parameters:
        cf_key: Cloudflare API token (falls back to `CF_API_TOKEN`).
        domain: Comma-separated list of fully qualified domain names.
        ipv4 / ipv6: Candidate addresses; invalid ones are ignored.
        proxy: "true" to proxy records through Cloudflare.
        log: "true" to emit diagnostic logs for this request.

    Returns:
        flask.Response: `{"result": "success"|"failure"}` with status 200, or
            `{"error": ...}` with 400/401/403 for batch-fatal errors.
    """
    set_diagnostics(request.args)
    return run_update_flow(split_domains(request.args.get('domain')))

@bp.route('/single/<string:domain>')
def process_single_domain(domain=None):
    """Update the existing records of a single domain.

    Takes the same query parameters as `/update` except `domain`, which comes
    from the path. Records are only updated, never created: a missing record
    for a requested family answers 404.
    """
    set_diagnostics(request.args)
    return run_update_flow([domain], create_missing=False)

def set_diagnostics(request_args):
    """Switch diagnostic logging on for this request when `log=true`.

    Returns:
        bool: Whether diagnostics are on (also true when `LOG_ENABLED` is set).
    """
    diagnostics = settings.LOG_ENABLED or parse_flag(request_args.get('log'))
    g.diagnostics = diagnostics
    return diagnostics

def run_update_flow(domain_list, create_missing=True):
    """Run `update_flow` with the request's parameters and render JSON.

    Batch-fatal errors become `{"error": message}` with their status code. A
    single-domain request whose record does not exist answers 404; any other
    per-domain failure only shows up as `"failure"`.
    """
    args = request.args
    token = args.get('cf_key') or settings.CF_API_TOKEN
    proxied = parse_flag(args.get('proxy'), default=settings.DEFAULT_PROXIED)

    try:
        batch = update_flow(
            token,
            domain_list,
            ipv4=args.get('ipv4'),
            ipv6=args.get('ipv6'),
            proxied=proxied,
            create_missing=create_missing,
        )
    except DDNSError as e:
        logger.info("Script aborted")
        return jsonify({'error': e.message}), e.status_code

    if not create_missing:
        missing = [r for r in batch.failed if r.error == RecordNotFound.__name__]
        if missing:
            return jsonify({'error': f"Record not found for {missing[0].domain}"}), RecordNotFound.status_code

    return jsonify(batch.to_dict()), 200

def build_dns_client(token: str) -> DNSBase:
    """Construct the provider client for one invocation's credential."""
    return CloudflareDNS(api_token=token)

def update_flow(token: Optional[str], domain_list: List[str], ipv4: Optional[str] = None,
                ipv6: Optional[str] = None, proxied: bool = False,
                dns_client: Optional[DNSBase] = None, create_missing: bool = True) -> BatchResult:
    """Reconcile the A/AAAA records of every domain against the candidate addresses.

    Preconditions are checked in order before any domain is touched:
    1. A credential and at least one domain are present.
    2. At least one of `ipv4`/`ipv6` is syntactically valid.
    3. The provider accepts the credential.

    Domains are then processed one at a time, in order. A failure on one domain
    (invalid name, unknown zone, rejected write) is recorded and the loop moves
    on to the next.

    Args:
        token (str | None): Provider API credential.
        domain_list (list[str]): Domains to reconcile.
        ipv4 (str | None): Candidate IPv4 address.
        ipv6 (str | None): Candidate IPv6 address.
        proxied (bool): Proxy flag for created/updated records.
        dns_client (DNSBase | None): Provider client to use; built from `token`
            when omitted.
        create_missing (bool): Whether missing records may be created.

    Returns:
        BatchResult: Per-domain results and the aggregate "success"/"failure".

    Raises:
        MissingParameters: No credential or no domain.
        NoValidAddress: Neither address is valid.
        AuthenticationFailed: The provider refused the credential.
    """
    logger.info("===== Starting Script =====")

    if not token or not domain_list:
        logger.error("Parameter(s) missing or invalid")
        raise MissingParameters("Parameter(s) missing or invalid")

    addresses = address_set(ipv4, ipv6)
    if not addresses:
        logger.error("Neither IPv4 nor IPv6 available.")
        raise NoValidAddress("Neither IPv4 nor IPv6 available.")

    logger.info(f"Record will{'' if proxied else ' not'} be proxied by Cloudflare")

    dns = dns_client or build_dns_client(token)
    authenticate(dns)

    zones = ZoneManager(dns)
    records = RecordManager(dns)
    batch = BatchResult()

    logger.info(f"Found records to set: {','.join(domain_list)}")
    for domain in domain_list:
        process_domain(domain, addresses, proxied, zones, records, batch, create_missing)

    logger.info(f"===== Script completed: {batch.result} =====")
    return batch

def authenticate(dns: DNSBase):
    """Probe the provider credential; raise AuthenticationFailed if refused.

    A provider answer of HTTP 403 keeps its status; anything else maps to 401.
    """
    try:
        dns.authenticate()
    except DNSBase.DNSError as e:
        message = f"Cloudflare authentication failed: {e.message}"
        logger.error(message)
        status = 403 if e.status_code == 403 else 401
        raise AuthenticationFailed(message, status_code=status)

def process_domain(domain, addresses, proxied, zones, records, batch, create_missing=True):
    """Reconcile both address families of one domain into `batch`.

    Never raises for per-domain problems; they become failed results.
    """
    try:
        zone = zones.resolve_zone(domain)
        existing = fetch_records(records.dns, zone, domain)
    except DDNSError as e:
        logger.error(e.message)
        batch.add(DomainResult(domain, Outcome.FAILED, error=e.kind, message=e.message))
        return

    if not create_missing:
        # update-only: refuse every write unless all requested records exist
        missing = missing_record_types(existing, [t for t, _ in addresses])
        if missing:
            for record_type in missing:
                message = f"No {record_type.value}-Record found for '{domain}'."
                logger.error(message)
                batch.add(DomainResult(domain, Outcome.FAILED, record_type,
                                       error=RecordNotFound.__name__, message=message))
            return

    for record_type, address in addresses:
        batch.add(records.reconcile(zone, domain, record_type, address, proxied, existing, create_missing))

def fetch_records(dns: DNSBase, zone, domain):
    """List the domain's records once so both families can reuse them."""
    try:
        return dns.list_records(zone.id, domain)
    except DNSBase.DNSError as e:
        raise RecordLookupFailed(f"Could not list records for '{domain}': {e.message}")
