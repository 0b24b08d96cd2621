from wudesim import epanet
from wudesim import network
from wudesim import utils

__version__ = '0.1.0'

__license__ = "Revised BSD License"

from wudesim.utils.logger import start_logging
