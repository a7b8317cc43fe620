__all__ = [
    'NameserverSource',
]

class NameserverSource:
    '''
    A way of finding the nameservers configured on this host.
    '''

    def discover(self):
        '''
        Return a fresh list of nameserver addresses, in discovery order.

        Raises a `NameserverError` when the source cannot be read at all.
        '''
        raise NotImplementedError

    def __repr__(self):
        return f'<{type(self).__name__}>'
