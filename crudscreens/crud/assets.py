import logging
logger = logging.getLogger(__name__)
import os

from django.http import FileResponse, Http404


RES_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'res')

# res name -> Content-Type
RESOURCES = {
    'crud.datetime.js': 'application/javascript',
    'crud.datetime.css': 'text/css',
}

# handle -> {'script': res name, 'style': res name}
# Filled once at startup by register().
REGISTERED = {}


def register():
    """Register the date/time picker script and stylesheet.

    Called once from CrudConfig.ready().
    """
    REGISTERED.clear()
    REGISTERED['crud-datetime'] = {
        'script': 'crud.datetime.js',
        'style': 'crud.datetime.css',
    }
    for name in RESOURCES.keys():
        if not os.path.exists(os.path.join(RES_DIR, name)):
            logger.warning('Missing resource file: %s' % os.path.join(RES_DIR, name))
    logger.debug('registered assets: %s' % list(REGISTERED.keys()))
    return REGISTERED

def res(request):
    """Serve one of the frontend resource files named in RESOURCES.
    """
    name = request.GET.get('res', '')
    if name not in RESOURCES:
        raise Http404('No such resource: %s' % name)
    path = os.path.join(RES_DIR, name)
    if not os.path.exists(path):
        raise Http404('No such resource: %s' % name)
    return FileResponse(open(path, 'rb'), content_type=RESOURCES[name])
