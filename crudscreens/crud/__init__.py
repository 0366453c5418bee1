import logging
logger = logging.getLogger(__name__)


# Navigation entries added by CrudController.admin_menu()
MENU = []

# Date/time formats used for timestamp fields
DISPLAY_DATETIME_FORMAT = '%Y-%m-%d %H:%M'
FORM_DATETIME_FORMATS = [
    '%Y-%m-%d %H:%M',
    '%Y-%m-%d %H:%M:%S',
    '%Y-%m-%dT%H:%M',
    '%Y-%m-%dT%H:%M:%S',
    '%Y-%m-%d',
]


CRUD_MESSAGES = {

    # crud.controllers (list)
    'LIST_ITEM_DELETED': 'Item deleted.',
    'LIST_ITEMS_DELETED': '{} item(s) deleted.', # number of items
    'LIST_DELETE_CONFIRM': 'Are you sure? This operation cannot be undone!',

    # crud.controllers (form)
    'FORM_SAVED': '{} saved.', # type name
    'FORM_BAD_TIMESTAMP': '{}: "{}" is not a valid date/time.', # label, value

    # crud.controllers (menu)
    'MENU_MANAGE': 'Manage {}', # type name
    'MENU_EDIT': 'Edit {}', # type name

}
