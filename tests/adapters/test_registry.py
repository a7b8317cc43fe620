import importlib
import ipaddress
import sys
import types
import unittest
from unittest.mock import patch

from sysdns.adapters import OperStatus

INTERFACES = r'SYSTEM\CurrentControlSet\Services\Tcpip\Parameters\Interfaces'
INTERFACES6 = r'SYSTEM\CurrentControlSet\Services\Tcpip6\Parameters\Interfaces'
CONNECTIONS = r'SYSTEM\CurrentControlSet\Control\Network\{4D36E972-E325-11CE-BFC1-08002BE10318}'
ENUM = r'SYSTEM\CurrentControlSet\Enum'


def ips(*items):
    return tuple(ipaddress.ip_address(item) for item in items)


class FakeKey:
    def __init__(self, registry, path):
        self.registry = registry
        self.path = path

    def Close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.Close()


def fake_winreg(keys):
    '''
    Build a stand-in for `winreg` over `keys`, a dict of path -> values.
    '''
    def join(key, sub_key):
        return '\\'.join(part for part in (key.path, sub_key) if part)

    def OpenKey(key, sub_key):
        path = join(key, sub_key)
        if path not in keys:
            raise FileNotFoundError(2, 'The system cannot find the file specified', path)
        return FakeKey(keys, path)

    def QueryValueEx(key, name):
        try:
            return keys[key.path][name], 1
        except KeyError:
            raise FileNotFoundError(2, 'The system cannot find the file specified', name) from None

    def EnumKey(key, index):
        prefix = key.path + '\\'
        children = []
        for path in keys:
            if path.startswith(prefix):
                child = path[len(prefix):].split('\\')[0]
                if child not in children:
                    children.append(child)
        if index >= len(children):
            raise OSError(259, 'No more data is available')
        return children[index]

    def ConnectRegistry(computer_name, key):
        return FakeKey(keys, '')

    return types.SimpleNamespace(
        HKEY_LOCAL_MACHINE=0x80000002,
        ConnectRegistry=ConnectRegistry,
        OpenKey=OpenKey,
        QueryValueEx=QueryValueEx,
        EnumKey=EnumKey,
    )


def interface(guid, values, enabled=True, values6=None):
    keys = {rf'{INTERFACES}\{guid}': values}
    if values6 is not None:
        keys[rf'{INTERFACES6}\{guid}'] = values6
    if enabled is not None:
        keys[rf'{CONNECTIONS}\{guid}\Connection'] = {'PnpInstanceID': rf'PCI\{guid}'}
        keys[rf'{ENUM}\PCI\{guid}'] = {'ConfigFlags': 0 if enabled else 1}
    return keys


class TestRegistryAdapters(unittest.TestCase):
    def get_adapters(self, *interfaces, with_root=True):
        keys = {}
        if with_root:
            keys[INTERFACES] = {}
            keys[INTERFACES6] = {}
        for item in interfaces:
            keys.update(item)
        with patch.dict(sys.modules, {'winreg': fake_winreg(keys)}):
            sys.modules.pop('sysdns.adapters.registry', None)
            registry = importlib.import_module('sysdns.adapters.registry')
            return registry.get_adapters()

    def test_dhcp_placeholders(self):
        adapters = self.get_adapters(interface('{dhcp}', {
            'IPAddress': ['0.0.0.0'],
            'DefaultGateway': [''],
            'NameServer': '',
            'DhcpIPAddress': '192.168.1.20',
            'DhcpDefaultGateway': ['192.168.1.254'],
            'DhcpNameServer': '192.168.1.1 1.1.1.1',
        }))
        self.assertEqual(len(adapters), 1)
        adapter = adapters[0]
        self.assertEqual(adapter.status, OperStatus.UP)
        self.assertEqual(adapter.ip_addresses, ips('192.168.1.20'))
        self.assertEqual(adapter.gateways, ips('192.168.1.254'))
        self.assertEqual(adapter.nameservers, ips('192.168.1.1', '1.1.1.1'))

    def test_static_values_win(self):
        adapters = self.get_adapters(interface('{static}', {
            'IPAddress': ['10.0.0.5'],
            'DefaultGateway': ['10.0.0.254'],
            'NameServer': '10.0.0.1,10.0.0.2',
            'DhcpIPAddress': '192.168.1.20',
            'DhcpNameServer': '192.168.1.1',
        }))
        self.assertEqual(adapters[0].ip_addresses, ips('10.0.0.5'))
        self.assertEqual(adapters[0].nameservers, ips('10.0.0.1', '10.0.0.2'))

    def test_ipv6_nameservers_appended(self):
        adapters = self.get_adapters(interface(
            '{dual}',
            {'IPAddress': ['10.0.0.5'], 'DefaultGateway': ['10.0.0.254'], 'NameServer': '10.0.0.1'},
            values6={'NameServer': '', 'DhcpNameServer': '2001:db8::53'},
        ))
        self.assertEqual(adapters[0].nameservers, ips('10.0.0.1', '2001:db8::53'))

    def test_status(self):
        adapters = self.get_adapters(
            interface('{a-disabled}', {'IPAddress': ['10.0.0.5']}, enabled=False),
            interface('{b-unknown}', {'IPAddress': ['10.0.0.6']}, enabled=None),
            interface('{c-no-address}', {'IPAddress': ['0.0.0.0']}),
            interface('{d-up}', {'DhcpIPAddress': '10.0.0.8'}),
        )
        self.assertEqual(
            [(a.name, a.status) for a in adapters],
            [('{a-disabled}', OperStatus.DOWN),
             ('{b-unknown}', OperStatus.OTHER),
             ('{c-no-address}', OperStatus.DOWN),
             ('{d-up}', OperStatus.UP)],
        )

    def test_unreadable_interface_is_skipped(self):
        keys = interface('{b-good}', {'IPAddress': ['10.0.0.5']})
        # enumerated but cannot be opened
        bad = {rf'{INTERFACES}\{{a-bad}}\Child': {}}
        with self.assertLogs('sysdns', 'DEBUG') as cm:
            adapters = self.get_adapters(bad, keys)
        self.assertEqual([a.name for a in adapters], ['{b-good}'])
        self.assertIn('Skipping interface {a-bad}', cm.output[0])

    def test_missing_root_key(self):
        with self.assertRaises(OSError):
            self.get_adapters(with_root=False)
