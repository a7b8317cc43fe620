'''
Errors shared by the nameserver sources.

Fatal errors derive from `OSError` so callers treating discovery as I/O can
catch them as such.
'''

__all__ = [
    'NameserverError',
    'ConfigUnavailable',
    'AdapterEnumerationFailed',
    'MalformedDirective',
    'ProbeUnavailable',
]

class NameserverError(OSError):
    pass

class ConfigUnavailable(NameserverError):
    pass

class AdapterEnumerationFailed(NameserverError):
    pass

class ProbeUnavailable(OSError):
    pass

class MalformedDirective(ValueError):
    def __init__(self, filename, lineno, line):
        super().__init__(filename, lineno, line)
        self.filename = filename
        self.lineno = lineno
        self.line = line

    def __str__(self):
        return f'{self.filename}:{self.lineno}: bad nameserver line {self.line!r}'
