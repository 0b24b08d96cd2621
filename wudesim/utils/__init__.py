"""
The wudesim.utils package contains helper functions.
"""
from . import logger
