import os
from ..core import Family
from .root import *

if os.name == 'nt':
    from .nt import AdapterProbe as _Source

    def default_source(prefer=Family.ANY):
        return _Source(prefer)
else:
    from .posix import ResolvConf as _Source

    def default_source(prefer=Family.ANY):
        # resolv.conf carries no family preference
        return _Source()

def get_nameservers(prefer=Family.ANY):
    '''
    Get the nameservers configured on this host.
    '''
    return default_source(prefer).discover()
