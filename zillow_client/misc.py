import os, sys
import time
import logging
import logging.handlers
import platform


#-----------------------------------------------------------------------------------------------------------------------------
def _set_formatter ():
    prefix = platform.node ().split('.', 1)[0]
    fmtr = logging.Formatter (prefix + ":" + '%(asctime)s %(levelname)s' +
                              ': %(message)s', datefmt='%Y-%m-%d %H:%M:%S')
    for handler in logging.getLogger ().handlers:
        handler.setFormatter (fmtr)

#-----------------------------------------------------------------------------------------------------------------------------
def set_logging (log_file=None, level=logging.INFO, max_bytes=4*1024*1024, backup_count=5):
    '''
    Setup the logging configuration. Must be called before any logging output is produced.
    :param log_file: Full path to the log_file (None - to not to log to file). If this is dir, creates scriptname.log
    :param level: logging level
    :param max_bytes: Configuration for rotating log - max file size
    :param backup_count: Configuration for rotating log - max number of log files (suffixed .log.1, .log.2, ...)
    :return: root logger
    '''
    logger = logging.getLogger()
    if len(logger.handlers):
        logger.handlers = []

    logger.setLevel (level)

    handler_list = [logging.StreamHandler()]

    if log_file is not None:
        if os.path.isdir(log_file):
            # use default scriptname.log
            log_file = os.path.join(log_file, os.path.splitext(os.path.basename(sys.argv[0]))[0]) + '.log'

        # setup rotating file handler
        handler_list.append(logging.handlers.RotatingFileHandler (log_file, 'a',
                                                                  maxBytes=max_bytes, backupCount=backup_count))
    for ch in handler_list:
        ch.setLevel(level)
        logger.addHandler(ch)

    _set_formatter ()
    logging.debug("Logging configured - level {} log_file {}".format(logging.getLevelName(level), log_file))

    return logger


#------------------------------------------------------------------------------------------------------------
class _callable_dict(dict):
    """
    Class used with Timer - for returning elapsed time
    """
    def __call__(self):
        return self.get('T')
#------------------------------------------------------------------------------------------------------------
class Timer(object):
    """
    Timer: Context Manager class to track elapsed time.
    e.g.:
        with Timer() as t:
            do_some_work()
        print ('Took {} secs'.format(t()))
    """
    def __init__(self):
        self._t = _callable_dict()

    def __enter__(self):
        self._begin_ts = time.time()
        return self._t

    def __exit__(self, type, value, traceback):
        self._t['T'] = time.time() - self._begin_ts
