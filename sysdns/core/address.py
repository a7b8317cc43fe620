import enum
import ipaddress

__all__ = [
    'Family',
    'InvalidIP',
    'parse_ip',
    'is_ipv4',
    'is_ipv6',
]

class InvalidIP(ValueError):
    pass

_family_aliases = {
    '4': 'v4',
    'ipv4': 'v4',
    'inet': 'v4',
    '6': 'v6',
    'ipv6': 'v6',
    'inet6': 'v6',
    '': 'any',
    'none': 'any',
}

class Family(enum.Enum):
    '''
    Address family preference used when probing and picking nameservers.
    '''
    V4 = 'v4'
    V6 = 'v6'
    ANY = 'any'

    @classmethod
    def parse(cls, value):
        if isinstance(value, Family):
            return value
        key = str(value).strip().lower()
        key = _family_aliases.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f'Unknown address family: {value!r}') from None

def parse_ip(text):
    '''Parse an IPv4 or IPv6 literal, zone ids included.'''
    try:
        return ipaddress.ip_address(text.strip())
    except (ValueError, AttributeError):
        raise InvalidIP(text) from None

def is_ipv4(ip):
    return ip.version == 4

def is_ipv6(ip):
    return ip.version == 6
