'''
This module enumerates adapters from the Windows Registry.

Used when the IP Helper API is unavailable. The registry only knows IPv4
addresses of an interface and may keep DHCP values of a disconnected one.
'''

import winreg
from ..core import logger
from . import Adapter, OperStatus, split_addresses

TCPIP_INTERFACES = r'SYSTEM\CurrentControlSet\Services\Tcpip\Parameters\Interfaces'
TCPIP6_INTERFACES = r'SYSTEM\CurrentControlSet\Services\Tcpip6\Parameters\Interfaces'
NETWORK_CONNECTIONS = r'SYSTEM\CurrentControlSet\Control\Network\{4D36E972-E325-11CE-BFC1-08002BE10318}'

def _addresses(key, *names):
    '''
    Return the addresses of the first value among `names` holding any.

    Static slots of a DHCP interface may hold placeholders like `0.0.0.0`,
    so values are parsed before moving on.
    '''
    for name in names:
        try:
            value, _rtype = winreg.QueryValueEx(key, name)
        except OSError:
            continue
        addresses = split_addresses(value)
        if addresses:
            return addresses
    return ()

def _nt_is_enabled(hlm, guid):
    '''
    True if the device is enabled, False if disabled, None if unknown.
    '''
    try:
        with winreg.OpenKey(hlm, r'%s\%s\Connection' % (NETWORK_CONNECTIONS, guid)) as connection_key:
            pnp_id, _ttype = winreg.QueryValueEx(connection_key, 'PnpInstanceID')
        with winreg.OpenKey(hlm, r'SYSTEM\CurrentControlSet\Enum\%s' % pnp_id) as device_key:
            try:
                flags, _ttype = winreg.QueryValueEx(device_key, 'ConfigFlags')
            except OSError:
                flags = 0
    except OSError:
        return None
    return not flags & 0x1

def _read_nameservers6(interfaces6, guid):
    if interfaces6 is None:
        return ()
    try:
        with winreg.OpenKey(interfaces6, guid) as key:
            return _addresses(key, 'NameServer', 'DhcpNameServer')
    except OSError:
        return ()

def _status(enabled, ip_addresses):
    if enabled is None:
        return OperStatus.OTHER
    if enabled and ip_addresses:
        return OperStatus.UP
    return OperStatus.DOWN

def _read_adapter(hlm, interfaces, interfaces6, guid):
    with winreg.OpenKey(interfaces, guid) as key:
        ip_addresses = _addresses(key, 'IPAddress', 'DhcpIPAddress')
        gateways = _addresses(key, 'DefaultGateway', 'DhcpDefaultGateway')
        nameservers = _addresses(key, 'NameServer', 'DhcpNameServer')
    nameservers += _read_nameservers6(interfaces6, guid)
    status = _status(_nt_is_enabled(hlm, guid), ip_addresses)
    return Adapter(guid, status, ip_addresses, gateways, nameservers)

def get_adapters():
    '''
    Enumerate TCP/IP interfaces from the registry, in key order.
    '''
    adapters = []
    with winreg.ConnectRegistry(None, winreg.HKEY_LOCAL_MACHINE) as hlm:
        with winreg.OpenKey(hlm, TCPIP_INTERFACES) as interfaces:
            try:
                interfaces6 = winreg.OpenKey(hlm, TCPIP6_INTERFACES)
            except OSError:
                interfaces6 = None
            try:
                i = 0
                while True:
                    try:
                        guid = winreg.EnumKey(interfaces, i)
                    except OSError:
                        break
                    i += 1
                    try:
                        adapters.append(_read_adapter(hlm, interfaces, interfaces6, guid))
                    except OSError as e:
                        logger.debug('Skipping interface %s: %s', guid, e)
            finally:
                if interfaces6 is not None:
                    interfaces6.Close()
    return adapters
