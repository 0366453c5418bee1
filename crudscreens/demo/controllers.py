import logging
logger = logging.getLogger(__name__)

from crud.controllers import CrudController, ItemNotFound
from demo.store import ARTICLES, TAGS


STATUS_CHOICES = {
    1: 'Active',
    2: 'Inactive',
}

COLOR_CHOICES = {
    'red': 'Red',
    'green': 'Green',
    'blue': 'Blue',
}

def _store_id(item_id):
    try:
        return int(item_id)
    except (TypeError, ValueError):
        raise ItemNotFound('Not a valid id: %s' % item_id)


class Article(object):
    """Plain object item; fields are attributes.
    """

    def __init__(self, id=None, title='', status=1, published=0, body=''):
        self.id = id
        self.title = title
        self.status = status
        self.published = published
        self.body = body

    def __repr__(self):
        return "<%s.%s %s>" % (self.__module__, self.__class__.__name__, self.id)


class ArticleCrud(CrudController):

    def configure(self):
        self.set_type_name('Article')
        self.set_description('Articles shown on the front page.')
        self.add_field('title').with_label('Title')
        self.add_field('status').with_label('Status').with_options(STATUS_CHOICES)
        self.add_field('published').with_label('Published').with_type(
            'timestamp'
        ).with_description('Leave empty to keep unpublished.')
        self.add_field('body').with_label('Body')
        self.set_list_fields(['title', 'status', 'published'])

    def validate_item(self, item):
        if not (item.title or '').strip():
            return 'Title is required.'

    def create_item(self):
        return Article()

    def fetch_item(self, item_id):
        data = ARTICLES.get(_store_id(item_id))
        if data is None:
            return None
        return Article(**data)

    def save_item(self, item):
        item.id = ARTICLES.put(vars(item))

    def delete_item(self, item):
        ARTICLES.remove(item.id)

    def fetch_all_items(self):
        return [Article(**data) for data in ARTICLES.all()]


class TagCrud(CrudController):
    """Dict items, listed under the Article menu.
    """

    def configure(self):
        self.set_type_name('Tag')
        self.set_submenu_slug('article')
        self.add_field('name').with_label('Name')
        self.add_field('color').with_label('Color').with_options(COLOR_CHOICES)

    def create_item(self):
        return {'id': None, 'name': '', 'color': ''}

    def fetch_item(self, item_id):
        return TAGS.get(_store_id(item_id))

    def save_item(self, item):
        item['id'] = TAGS.put(item)

    def delete_item(self, item):
        TAGS.remove(item['id'])

    def fetch_all_items(self):
        return TAGS.all()
