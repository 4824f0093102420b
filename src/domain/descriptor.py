"""Job descriptor parsing: raw event payload -> JobDescriptor."""

from pathlib import PurePosixPath
from typing import Any, Dict, Iterable, Tuple, Type, TypeVar

from .exceptions import InvalidJobPayload, MalformedAddress, NameCollision
from .models import (
    DEFAULT_ACL,
    DEFAULT_STORAGE_CLASS,
    DestinationRef,
    JobDescriptor,
    NotificationSpec,
    ObjectRef,
    SourceRef,
)
from .storage import StoreCredentials

R = TypeVar('R', bound=ObjectRef)


def parse_address(address: str, ref_type: Type[R] = ObjectRef) -> R:
    """
    Split a "bucket/key/.../name" string into an address triple.

    Args:
        address: Slash-delimited object address
        ref_type: ObjectRef subclass to build

    Returns:
        Parsed reference

    Raises:
        MalformedAddress: If there is no bucket separator or the key is empty
    """
    if not isinstance(address, str) or '/' not in address:
        raise MalformedAddress(f"No bucket separator in address: {address!r}")

    bucket, key = address.split('/', 1)
    if not bucket:
        raise MalformedAddress(f"Empty bucket in address: {address!r}")
    if not key:
        raise MalformedAddress(f"Empty key in address: {address!r}")

    name = PurePosixPath(key).name
    if not name:
        raise MalformedAddress(f"Address has no file name: {address!r}")

    return ref_type(bucket=bucket, key=key, name=name)


def parse_sources(addresses: Iterable[str]) -> Tuple[SourceRef, ...]:
    """Parse source addresses and reject display-name collisions."""
    sources = tuple(parse_address(a, SourceRef) for a in addresses)

    seen: Dict[str, SourceRef] = {}
    for source in sources:
        other = seen.get(source.name)
        if other is not None:
            raise NameCollision(
                f"Sources {other.full_key} and {source.full_key} "
                f"both download to '{source.name}'"
            )
        seen[source.name] = source

    return sources


def parse_notification(raw: Dict[str, Any]) -> NotificationSpec:
    """
    Build a NotificationSpec from a raw entry.

    Entries without a type keep an empty tag; the notifier skips them.
    """
    if not isinstance(raw, dict):
        return NotificationSpec(type='', params={})
    params = {k: v for k, v in raw.items() if k != 'type'}
    return NotificationSpec(type=str(raw.get('type') or ''), params=params)


def parse_job(data: Dict[str, Any]) -> JobDescriptor:
    """
    Normalize the ``data`` block of a job event.

    Args:
        data: Job payload (files, destination, credentials, ...)

    Returns:
        Immutable JobDescriptor

    Raises:
        InvalidJobPayload: If required fields are missing or credentials are incomplete
        MalformedAddress: If an address cannot be split
        NameCollision: If two sources, or a source and the archive, share a file name
    """
    if not isinstance(data, dict):
        raise InvalidJobPayload("Job data must be an object")

    for required in ('credentials', 'files', 'destination'):
        if required not in data:
            raise InvalidJobPayload(f"Job data is missing '{required}'")

    files = data['files']
    if not isinstance(files, list):
        raise InvalidJobPayload("'files' must be a list of addresses")
    if not files:
        raise InvalidJobPayload("'files' must name at least one source")

    credentials = data['credentials']
    if not isinstance(credentials, dict):
        raise InvalidJobPayload("'credentials' must be an object")

    store_credentials = StoreCredentials.from_payload(credentials)
    if not store_credentials.validate():
        raise InvalidJobPayload("'credentials' needs region, accessKeyId and secretAccessKey")

    sources = parse_sources(files)
    destination = parse_address(data['destination'], DestinationRef)
    for source in sources:
        if source.name == destination.name:
            raise NameCollision(
                f"Source {source.full_key} downloads to '{source.name}', "
                f"the archive file name"
            )

    job_id = data.get('id')

    return JobDescriptor(
        sources=sources,
        destination=destination,
        credentials=store_credentials,
        acl=data.get('acl') or DEFAULT_ACL,
        storage_class=data.get('storageClass') or DEFAULT_STORAGE_CLASS,
        notifications=tuple(parse_notification(n) for n in data.get('notifications') or []),
        job_id=str(job_id) if job_id is not None else None,
    )
