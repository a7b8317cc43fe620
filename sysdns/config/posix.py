'''
This module loads nameservers from posix resolv.conf.
'''
from ..core import logger, parse_ip, InvalidIP, ConfigUnavailable, MalformedDirective
from .base import NameserverSource
from .root import core_config

__all__ = [
    'ResolvConf',
    'parse_resolv_conf',
]

DIRECTIVE = 'nameserver '

def parse_resolv_conf(lines, filename='<string>'):
    '''
    Yield the addresses of the `nameserver` lines, in order.

    Lines whose argument is not an IP address are reported and skipped.
    '''
    for lineno, line in enumerate(lines, 1):
        line = line.rstrip('\r\n')
        if not line.startswith(DIRECTIVE):
            continue
        try:
            yield parse_ip(line[len(DIRECTIVE):])
        except InvalidIP:
            logger.warning('%s', MalformedDirective(filename, lineno, line))

class ResolvConf(NameserverSource):
    def __init__(self, filename=None):
        self.filename = filename or core_config['resolv_conf']

    def discover(self):
        '''
        Load nameservers from the resolv.conf file.
        '''
        try:
            with open(self.filename, 'r', encoding='utf-8', errors='replace') as f:
                return list(parse_resolv_conf(f, self.filename))
        except OSError as e:
            raise ConfigUnavailable(e.errno, f'Cannot read {self.filename}: {e.strerror or e}') from e

    def __repr__(self):
        return f'<ResolvConf {self.filename}>'
