'''
Discover the DNS nameservers configured on this host.
'''
from .core import *
from .config import get_nameservers, default_source, core_config
from .config.base import NameserverSource

__version__ = '0.1.0'
