'''
This module infers nameservers from the adapter used for outbound traffic.

The local address of a connected UDP socket tells which adapter the OS would
route through. That adapter's nameservers win. When no adapter owns the
address, one nameserver is picked from the other active adapters.
'''

import socket
from ..core import (
    logger, Family, parse_ip, is_ipv4, is_ipv6,
    AdapterEnumerationFailed, ProbeUnavailable,
)
from ..adapters import OperStatus, get_adapters as default_get_adapters
from .base import NameserverSource
from .root import core_config

__all__ = [
    'AdapterProbe',
    'probe_primary_address',
]

def probe_primary_address(family, target=None, port=None):
    '''
    Return the source address the OS would pick to reach `target`.

    Nothing is sent: connecting a UDP socket only selects a route.
    '''
    if family is Family.V6:
        af = socket.AF_INET6
        target = target or core_config['probe_ipv6']
    else:
        af = socket.AF_INET
        target = target or core_config['probe_ipv4']
    port = port or core_config['probe_port']
    try:
        with socket.socket(af, socket.SOCK_DGRAM) as sock:
            sock.connect((target, port))
            host = sock.getsockname()[0]
    except OSError as e:
        raise ProbeUnavailable(e.errno, f'Cannot probe {target}: {e.strerror or e}') from e
    return parse_ip(host)

def _is_active(adapter):
    return adapter.status is OperStatus.UP and bool(adapter.gateways)

def _pick_fallback(nameservers, prefer):
    first_v4 = first_v6 = None
    for ip in nameservers:
        if first_v6 is None and is_ipv6(ip):
            first_v6 = ip
            if prefer is not Family.V4:
                break
        elif first_v4 is None and is_ipv4(ip):
            first_v4 = ip
            if prefer is Family.V4:
                break
    if prefer is Family.V4:
        return first_v4 or first_v6
    if prefer is Family.V6:
        return first_v6
    return first_v6 or first_v4

class AdapterProbe(NameserverSource):
    def __init__(self, prefer=Family.ANY, get_adapters=None, probe=None):
        self.prefer = Family.parse(prefer)
        self.get_adapters = get_adapters or default_get_adapters
        self.probe = probe or probe_primary_address

    def primary_address(self):
        '''
        Probe IPv6 then IPv4, as allowed by the preference.
        '''
        families = []
        if self.prefer is not Family.V4:
            families.append(Family.V6)
        if self.prefer is not Family.V6:
            families.append(Family.V4)
        for family in families:
            try:
                return self.probe(family)
            except ProbeUnavailable as e:
                logger.debug('Probe failed for %s: %s', family.value, e)
        logger.debug('No primary address, falling back to adapter scan')
        return None

    def list_adapters(self):
        try:
            return list(self.get_adapters())
        except AdapterEnumerationFailed:
            raise
        except Exception as e:
            raise AdapterEnumerationFailed(f'Cannot enumerate adapters: {e}') from e

    def discover(self):
        '''
        Get nameservers of the adapter that owns the primary address.
        '''
        primary = self.primary_address()
        active = [adapter for adapter in self.list_adapters() if _is_active(adapter)]
        nameservers = []
        if primary is not None:
            for adapter in active:
                if primary in adapter.ip_addresses:
                    logger.debug('Primary address %s belongs to %s', primary, adapter.name)
                    nameservers.extend(adapter.nameservers)
                    return nameservers
        fallback = _pick_fallback(
            (ip for adapter in active for ip in adapter.nameservers), self.prefer)
        if fallback is not None:
            logger.debug('Using fallback nameserver %s', fallback)
            nameservers.append(fallback)
        return nameservers

    def __repr__(self):
        return f'<AdapterProbe prefer={self.prefer.value}>'
