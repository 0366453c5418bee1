from collections import OrderedDict
import logging
logger = logging.getLogger(__name__)

from django.urls import reverse, NoReverseMatch

from crud import MENU
from crud import assets


def menu_tree():
    """Top-level menu entries, each with its list of submenu entries.

    Entries whose parent slug names no top-level entry get a bare
    heading of their own.
    """
    tree = OrderedDict()
    for entry in MENU:
        if not entry['parent']:
            tree[entry['slug']] = dict(entry, children=[])
    for entry in MENU:
        parent = entry['parent']
        if not parent:
            continue
        if parent not in tree:
            tree[parent] = {
                'title': parent, 'slug': parent, 'parent': None,
                'url_name': None, 'children': [],
            }
        tree[parent]['children'].append(dict(entry))
    for entry in tree.values():
        for e in [entry] + entry['children']:
            e['url'] = None
            if e['url_name']:
                try:
                    e['url'] = reverse(e['url_name'])
                except NoReverseMatch:
                    logger.warning('No URL for menu entry %s' % e['url_name'])
    return list(tree.values())

def sitewide(request):
    """Variables that need to be inserted into all templates.
    """
    return {
        'crud_menu': menu_tree(),
        'crud_assets': assets.REGISTERED,
    }
