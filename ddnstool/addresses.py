# syntactic checks on candidate addresses; the provider has the final word

import logging
import re
from typing import Optional

from ddnstool.models import AddressSet

logger = logging.getLogger(__name__)

IPV4_PATTERN = re.compile(r'^\d{1,3}(\.\d{1,3}){3}$')
IPV6_PATTERN = re.compile(r'^[0-9a-fA-F:]+$')


def validate_ipv4(candidate: Optional[str]) -> Optional[str]:
    """Return `candidate` if it looks like a dotted-quad, else None.

    Octets are not range-checked (`999.1.1.1` passes).
    """
    if candidate and IPV4_PATTERN.fullmatch(candidate):
        return candidate
    return None


def validate_ipv6(candidate: Optional[str]) -> Optional[str]:
    """Return `candidate` if it only holds hex digits and colons, else None."""
    if candidate and IPV6_PATTERN.fullmatch(candidate):
        return candidate
    return None


def address_set(ipv4: Optional[str] = None, ipv6: Optional[str] = None) -> AddressSet:
    """Build an AddressSet from raw candidates, dropping the invalid ones.

    Args:
        ipv4 (str | None): Candidate IPv4 address from the caller.
        ipv6 (str | None): Candidate IPv6 address from the caller.

    Returns:
        AddressSet: Holds only the candidates that passed validation; may be
            empty (falsy), which callers treat as "no valid address".
    """
    valid_ipv4 = validate_ipv4(ipv4)
    valid_ipv6 = validate_ipv6(ipv6)
    if ipv4 and not valid_ipv4:
        logger.warning(f"Ignoring invalid IPv4 address: {ipv4!r}")
    if ipv6 and not valid_ipv6:
        logger.warning(f"Ignoring invalid IPv6 address: {ipv6!r}")
    return AddressSet(ipv4=valid_ipv4, ipv6=valid_ipv6)
