'''
Read-only view of the host's network adapters.
'''

import enum
import os
from collections import namedtuple
from ..core import logger, parse_ip, InvalidIP, AdapterEnumerationFailed

__all__ = [
    'OperStatus',
    'Adapter',
    'split_addresses',
    'get_adapters',
]

class OperStatus(enum.Enum):
    UP = 'up'
    DOWN = 'down'
    OTHER = 'other'

Adapter = namedtuple('Adapter', [
    'name',
    'status',
    'ip_addresses',
    'gateways',
    'nameservers',
])

def split_addresses(value):
    '''
    Split a registry value into IP addresses.

    `value` may be a comma or space separated string or a list of strings.
    Empty, unspecified and unparseable entries are dropped.
    '''
    if not value:
        return ()
    if isinstance(value, str):
        value = [value]
    result = []
    for item in value:
        for part in item.replace(',', ' ').split():
            try:
                ip = parse_ip(part)
            except InvalidIP:
                continue
            if not ip.is_unspecified:
                result.append(ip)
    return tuple(result)

def get_adapters():
    '''
    Enumerate the adapters of this host.
    '''
    if os.name != 'nt':
        raise AdapterEnumerationFailed(f'Adapter enumeration is not supported on {os.name}')
    from . import iphlpapi
    try:
        return iphlpapi.get_adapters()
    except OSError as e:
        logger.warning('IP Helper API unavailable, reading the registry: %s', e)
    from . import registry
    return registry.get_adapters()
