'''
Script to print the nameservers of this host.
'''
import argparse
import json
import sys
from sysdns.core import *
from . import get_nameservers
from .config.posix import ResolvConf

def _parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog='python3 -m sysdns',
        description='Print the DNS nameservers configured on this host')
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        '-4', dest='prefer', action='store_const', const=Family.V4,
        help='prefer IPv4 when probing adapters')
    group.add_argument(
        '-6', dest='prefer', action='store_const', const=Family.V6,
        help='prefer IPv6 when probing adapters')
    parser.add_argument('-f', '--file', help='read nameservers from a resolv.conf file')
    parser.add_argument('--json', action='store_true', help='print a JSON array')
    parser.set_defaults(prefer=Family.ANY)
    return parser.parse_args(argv)

def main(argv=None):
    args = _parse_args(argv)
    try:
        if args.file:
            nameservers = ResolvConf(args.file).discover()
        else:
            nameservers = get_nameservers(args.prefer)
    except NameserverError as e:
        logger.error('%s', e)
        return 1
    if args.json:
        print(json.dumps([str(ip) for ip in nameservers]))
    else:
        for ip in nameservers:
            print(ip)
    return 0

if __name__ == '__main__':
    sys.exit(main())
