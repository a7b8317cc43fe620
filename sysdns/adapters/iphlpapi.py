'''
This module enumerates adapters with `GetAdaptersAddresses` of the IP Helper API.
'''

import ctypes
import ipaddress
from ctypes import POINTER, Structure, c_char_p, c_int, c_uint32, c_uint64, c_wchar_p, c_void_p
from . import Adapter, OperStatus

__all__ = [
    'get_adapters',
]

# Windows values, not the ones of the running platform.
AF_UNSPEC = 0
AF_INET = 2
AF_INET6 = 23

GAA_FLAG_SKIP_ANYCAST = 0x2
GAA_FLAG_SKIP_MULTICAST = 0x4
GAA_FLAG_INCLUDE_GATEWAYS = 0x80

ERROR_SUCCESS = 0
ERROR_BUFFER_OVERFLOW = 111
ERROR_NO_DATA = 232

IF_OPER_STATUS_UP = 1
IF_OPER_STATUS_DOWN = 2

MAX_TRIES = 3
INITIAL_BUFFER_SIZE = 15000


class SOCKADDR(Structure):
    _fields_ = [
        ('sa_family', ctypes.c_ushort),
        ('sa_data', ctypes.c_char * 14),
    ]


class SOCKET_ADDRESS(Structure):
    _fields_ = [
        ('lpSockaddr', POINTER(SOCKADDR)),
        ('iSockaddrLength', c_int),
    ]


class IP_ADAPTER_ADDRESS(Structure):
    '''
    Common head of the unicast, DNS server and gateway address lists.
    '''


IP_ADAPTER_ADDRESS._fields_ = [
    ('Length', c_uint32),
    ('Flags', c_uint32),
    ('Next', POINTER(IP_ADAPTER_ADDRESS)),
    ('Address', SOCKET_ADDRESS),
]


class IP_ADAPTER_ADDRESSES(Structure):
    '''
    Leading fields of `IP_ADAPTER_ADDRESSES_LH`, up to the gateways.
    '''


IP_ADAPTER_ADDRESSES._fields_ = [
    ('Length', c_uint32),
    ('IfIndex', c_uint32),
    ('Next', POINTER(IP_ADAPTER_ADDRESSES)),
    ('AdapterName', c_char_p),
    ('FirstUnicastAddress', POINTER(IP_ADAPTER_ADDRESS)),
    ('FirstAnycastAddress', c_void_p),
    ('FirstMulticastAddress', c_void_p),
    ('FirstDnsServerAddress', POINTER(IP_ADAPTER_ADDRESS)),
    ('DnsSuffix', c_wchar_p),
    ('Description', c_wchar_p),
    ('FriendlyName', c_wchar_p),
    ('PhysicalAddress', ctypes.c_ubyte * 8),
    ('PhysicalAddressLength', c_uint32),
    ('Flags', c_uint32),
    ('Mtu', c_uint32),
    ('IfType', c_uint32),
    ('OperStatus', c_int),
    ('Ipv6IfIndex', c_uint32),
    ('ZoneIndices', c_uint32 * 16),
    ('FirstPrefix', c_void_p),
    ('TransmitLinkSpeed', c_uint64),
    ('ReceiveLinkSpeed', c_uint64),
    ('FirstWinsServerAddress', c_void_p),
    ('FirstGatewayAddress', POINTER(IP_ADAPTER_ADDRESS)),
]


def sockaddr_to_ip(address):
    '''Convert a `SOCKET_ADDRESS` to an ip object, or None for other families.'''
    if not address.lpSockaddr or address.iSockaddrLength < 2:
        return None
    raw = ctypes.string_at(address.lpSockaddr, address.iSockaddrLength)
    family = int.from_bytes(raw[:2], 'little')
    if family == AF_INET and len(raw) >= 8:
        return ipaddress.IPv4Address(raw[4:8])
    if family == AF_INET6 and len(raw) >= 24:
        ip = ipaddress.IPv6Address(raw[8:24])
        scope_id = int.from_bytes(raw[24:28], 'little') if len(raw) >= 28 else 0
        if scope_id and ip.is_link_local:
            ip = ipaddress.IPv6Address(f'{ip}%{scope_id}')
        return ip
    return None


def _iter_list(head):
    while head:
        item = head.contents
        yield item
        head = item.Next


def _addresses(head):
    result = []
    for item in _iter_list(head):
        ip = sockaddr_to_ip(item.Address)
        if ip is not None and not ip.is_unspecified:
            result.append(ip)
    return tuple(result)


def _status(oper_status):
    if oper_status == IF_OPER_STATUS_UP:
        return OperStatus.UP
    if oper_status == IF_OPER_STATUS_DOWN:
        return OperStatus.DOWN
    return OperStatus.OTHER


def walk_adapters(head):
    '''
    Convert a linked list of `IP_ADAPTER_ADDRESSES` to `Adapter`s, in list order.
    '''
    adapters = []
    for item in _iter_list(head):
        name = item.FriendlyName or (item.AdapterName or b'').decode('ascii', 'replace')
        adapters.append(Adapter(
            name,
            _status(item.OperStatus),
            _addresses(item.FirstUnicastAddress),
            _addresses(item.FirstGatewayAddress),
            _addresses(item.FirstDnsServerAddress),
        ))
    return adapters


def _load():
    func = ctypes.WinDLL('iphlpapi').GetAdaptersAddresses
    func.argtypes = [c_uint32, c_uint32, c_void_p, POINTER(IP_ADAPTER_ADDRESSES), POINTER(c_uint32)]
    func.restype = c_uint32
    return func


def get_adapters(get_adapters_addresses=None):
    '''
    Enumerate adapters in the order reported by the system.

    Raises `OSError` when the call fails.
    '''
    if get_adapters_addresses is None:
        get_adapters_addresses = _load()
    flags = GAA_FLAG_INCLUDE_GATEWAYS | GAA_FLAG_SKIP_ANYCAST | GAA_FLAG_SKIP_MULTICAST
    size = c_uint32(INITIAL_BUFFER_SIZE)
    for _ in range(MAX_TRIES):
        buf = ctypes.create_string_buffer(size.value)
        head = ctypes.cast(buf, POINTER(IP_ADAPTER_ADDRESSES))
        code = get_adapters_addresses(AF_UNSPEC, flags, None, head, ctypes.pointer(size))
        if code == ERROR_SUCCESS:
            return walk_adapters(head)
        if code == ERROR_NO_DATA:
            return []
        if code != ERROR_BUFFER_OVERFLOW:
            raise OSError(code, f'GetAdaptersAddresses failed with code {code}')
    raise OSError(ERROR_BUFFER_OVERFLOW, 'GetAdaptersAddresses kept asking for a larger buffer')
