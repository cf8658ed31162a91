import logging
import time
from functools import wraps


class Timer:
    def __init__(self, logger=None, time_source=time.perf_counter, name=None):
        """Logs the duration of a block or of a method call

        Used as a method decorator without an explicit logger it reports through
        the debug method of the instance's `logger` attribute when there is one.
        """
        self.logger = logger
        self.time_source = time_source
        self.name = name
        self.start, self.stop = None, None

    def __enter__(self):
        self.start = self.time_source()
        return self

    def __exit__(self, *exc_info):
        self.stop = self.time_source()
        logger = self.logger if self.logger is not None else logging.getLogger(__name__).debug
        logger(f"{self.name} {self.duration():.6f} s")

    def duration(self):
        return self.stop - self.start

    def __call__(self, method):
        @wraps(method)
        def _wrapped_method(instance, *method_args, **method_kwargs):
            logger = self.logger
            if logger is None and isinstance(getattr(instance, "logger", None), logging.Logger):
                logger = instance.logger.debug
            with Timer(
                logger=logger,
                time_source=self.time_source,
                name=self.name or method.__name__,
            ):
                method_output = method(instance, *method_args, **method_kwargs)
            return method_output

        return _wrapped_method
