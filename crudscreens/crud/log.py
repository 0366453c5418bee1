import logging
import re


RE_RES_REQUEST = re.compile(r'GET [^ ]*/res/\?res=')

class SuppressResourceRequests(logging.Filter):
    """Suppresses access-log lines for the static resource endpoint.

    Every edit screen requests the date/time picker script and stylesheet,
    which clutters up the logs. This filter drops those lines.

    Example:
        [19/Oct/2026 10:01:42] "GET /crud/res/?res=crud.datetime.js HTTP/1.1" 200 1820
    """

    def filter(self, record):
        logthis = 1
        mod_server = record.name.startswith('django.server')
        try:
            msg = record.getMessage()
        except (TypeError, ValueError):
            msg = str(record.msg)
        if mod_server and RE_RES_REQUEST.search(msg):
            logthis = 0
        return logthis
