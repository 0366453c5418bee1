from functools import wraps
import logging
logger = logging.getLogger(__name__)


def crudview(f):
    """Log the request line and the list/edit handler it is dispatched to.
    """
    @wraps(f)
    def wrapper(request, *args, **kwargs):
        logger.debug('%s %s %s' % (
            request.method, request.path, request.META.get('QUERY_STRING', '')
        ))
        logger.debug('-> %s' % getattr(f, '__qualname__', f.__name__))
        return f(request, *args, **kwargs)
    return wrapper
