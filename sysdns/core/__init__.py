from .logger import logger
from .address import *
from .errors import *
