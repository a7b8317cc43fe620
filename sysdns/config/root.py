'''
Configuration defaults, optionally overridden by a user config file.
'''

import os
import json
from ..core import logger

__all__ = [
    'CONFIG_DIR',
    'core_config',
    'load_config',
]

CONFIG_DIR = os.environ.get('SYSDNS_CONFIG_DIR', os.path.expanduser('~/.config/sysdns'))

defaults = {
    'resolv_conf': '/etc/resolv.conf',
    'probe_ipv4': '8.8.8.8',
    'probe_ipv6': '2001:4860:4860::8888',
    'probe_port': 53,
}

def load_config(config_dir=CONFIG_DIR, environ=os.environ):
    '''
    Merge `config.json` from `config_dir` and environment overrides over the defaults.
    '''
    config = dict(defaults)
    filename = os.path.join(config_dir, 'config.json')
    if os.path.isfile(filename):
        try:
            with open(filename, 'r', encoding='utf-8') as f:
                user_config = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning('Ignoring config file %s: %s', filename, e)
        else:
            if isinstance(user_config, dict):
                config.update((k, v) for k, v in user_config.items() if k in defaults)
            else:
                logger.warning('Ignoring config file %s: not an object', filename)
    resolv_conf = environ.get('SYSDNS_RESOLV_CONF')
    if resolv_conf:
        config['resolv_conf'] = resolv_conf
    return config

core_config = load_config()
