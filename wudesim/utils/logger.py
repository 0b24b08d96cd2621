"""Functions to set up a default handler for wudesim that will output to the console and to wudesim.log."""

import logging
logging.getLogger('wudesim').addHandler(logging.NullHandler())

class _LogWrapper(object):  # pragma: no cover
    initialized = None

    def __init__(self, filename='wudesim.log'):
        self.logger = logger = logging.getLogger('wudesim')
        if not len([h for h in logger.handlers if not isinstance(h, logging.NullHandler)]):
            logger.setLevel(logging.DEBUG)
            # warnings and load failures are kept in the log file
            self.fh = fh = logging.FileHandler(filename, mode='w')
            fh.setLevel(logging.WARNING)
            # all info is sent to the screen
            self.ch = ch = logging.StreamHandler()
            ch.setLevel(logging.INFO)
            formatter = logging.Formatter(
                '%(name)-12s %(levelname)-8s %(message)s')
            fh.setFormatter(formatter)
            ch.setFormatter(formatter)
            logger.addHandler(fh)
            logger.addHandler(ch)

def start_logging(filename='wudesim.log'):  # pragma: no cover
    """
    Start the wudesim logger.

    Parameters
    ----------
    filename : str
        Log file receiving warnings and errors, by default 'wudesim.log'
    """
    if _LogWrapper.initialized is None:
        _LogWrapper.initialized = _LogWrapper(filename)
