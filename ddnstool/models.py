from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Tuple

# Cloudflare's "automatic" TTL sentinel.
AUTO_TTL = 1


class RecordType(str, Enum):
    """Address record types managed by the reconciler."""

    A = "A"
    AAAA = "AAAA"

    @property
    def family(self):
        return "ipv4" if self is RecordType.A else "ipv6"


class Outcome(str, Enum):
    SKIPPED = "skipped"
    CREATED = "created"
    UPDATED = "updated"
    FAILED = "failed"


@dataclass(frozen=True)
class AddressSet:
    """Validated candidate addresses; either may be missing, not both."""

    ipv4: Optional[str] = None
    ipv6: Optional[str] = None

    def __bool__(self):
        return bool(self.ipv4 or self.ipv6)

    def __iter__(self) -> Iterator[Tuple[RecordType, str]]:
        if self.ipv4:
            yield RecordType.A, self.ipv4
        if self.ipv6:
            yield RecordType.AAAA, self.ipv6


@dataclass(frozen=True)
class Zone:
    id: str
    name: str


@dataclass
class DnsRecord:
    """An A/AAAA record as the provider reports it (or as we want it)."""

    type: RecordType
    name: str
    content: str
    ttl: int = AUTO_TTL
    proxied: bool = False
    id: Optional[str] = None

    def payload(self) -> dict:
        """Request body for create/update calls."""
        return {
            'type': self.type.value,
            'name': self.name,
            'content': self.content,
            'ttl': self.ttl,
            'proxied': self.proxied,
        }


@dataclass
class DomainResult:
    """Outcome of one (domain, address family) pair.

    `record_type` is None when the domain failed before any family was tried
    (invalid domain, unknown zone, record listing failure). `error` names the
    error kind for failed outcomes, e.g. 'ZoneNotFound'.
    """

    domain: str
    outcome: Outcome
    record_type: Optional[RecordType] = None
    error: Optional[str] = None
    message: str = ''

    @property
    def failed(self):
        return self.outcome is Outcome.FAILED


@dataclass
class BatchResult:
    """All per-domain results of one invocation, folded into one status."""

    results: List[DomainResult] = field(default_factory=list)

    def add(self, result: DomainResult) -> DomainResult:
        self.results.append(result)
        return result

    @property
    def failed(self) -> List[DomainResult]:
        return [r for r in self.results if r.failed]

    @property
    def result(self) -> str:
        return "failure" if self.failed else "success"

    def to_dict(self) -> dict:
        return {'result': self.result}
