from collections import OrderedDict
from copy import deepcopy
import logging
logger = logging.getLogger(__name__)


class MemoryStore(object):
    """Keeps dicts of item data in memory, keyed by integer id.

    Callers always get copies, so changes to a fetched item are not
    visible to other callers until put() is called.
    """

    def __init__(self, name):
        self.name = name
        self.reset()

    def __repr__(self):
        return "<%s.%s '%s' %s items>" % (
            self.__module__, self.__class__.__name__, self.name, len(self.data)
        )

    def reset(self):
        self.data = OrderedDict()
        self.next_id = 1

    def get(self, item_id):
        """
        @param item_id: int
        @returns: dict or None
        """
        if item_id not in self.data:
            return None
        return deepcopy(self.data[item_id])

    def all(self):
        return [deepcopy(data) for data in self.data.values()]

    def put(self, data):
        """Add or replace item data; assigns an id to new items.

        @param data: dict
        @returns: int id
        """
        data = deepcopy(data)
        if not data.get('id'):
            data['id'] = self.next_id
            self.next_id += 1
        self.data[data['id']] = data
        logger.debug('%s put %s' % (self.name, data['id']))
        return data['id']

    def remove(self, item_id):
        self.data.pop(item_id, None)
        logger.debug('%s remove %s' % (self.name, item_id))


ARTICLES = MemoryStore('articles')
TAGS = MemoryStore('tags')
