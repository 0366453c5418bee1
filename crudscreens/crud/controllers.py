"""Generic list/edit screens for any managed type.

Implementing classes declare their fields in configure() and supply
persistence through these methods:

- create_item
- fetch_item
- save_item
- delete_item
- fetch_all_items

and may override get_field_value, set_field_value and validate_item.

Example:

    class ArticleCrud(CrudController):

        def configure(self):
            self.set_type_name('Article')
            self.add_field('title').with_label('Title')
            self.add_field('published').with_type('timestamp')
            self.set_list_fields(['title', 'published'])
        ...

    urlpatterns = [
        path('manage/', include(ArticleCrud.admin_menu())),
    ]
"""

from abc import ABC, abstractmethod
from collections import OrderedDict
from collections.abc import Mapping, MutableMapping
from datetime import datetime
import logging
logger = logging.getLogger(__name__)

from django.conf import settings
from django.contrib import messages
from django.http import HttpResponseRedirect
from django.shortcuts import render
from django.urls import path, reverse
from django.utils.html import format_html
from django.utils.http import urlencode
from django.utils.safestring import mark_safe

from crud import CRUD_MESSAGES, MENU
from crud import DISPLAY_DATETIME_FORMAT, FORM_DATETIME_FORMATS
from crud.decorators import crudview
from crud.fields import FieldSpec
from crud.forms import CrudForm


class ItemNotFound(LookupError):
    pass

class UnsupportedItemShape(TypeError):
    pass

class InvalidFieldValue(ValueError):
    pass


class FieldAccess(ABC):
    """Items that know how to read and write their own fields.

    The default CrudController accessors use these methods directly
    instead of treating the item as a dict or a plain object.
    """

    @abstractmethod
    def get_field(self, name):
        pass

    @abstractmethod
    def set_field(self, name, value):
        pass


def format_timestamp(value, tz):
    """Format a UNIX timestamp for display, in the given timezone.

    Seconds are dropped so formatting then parsing only gives back
    the original value for whole minutes.

    @param value: int epoch seconds; zero/None/'' give ''
    @param tz: pytz timezone
    @returns: str 'YYYY-MM-DD HH:MM'
    """
    if not value:
        return ''
    return datetime.fromtimestamp(int(value), tz).strftime(DISPLAY_DATETIME_FORMAT)

def parse_timestamp(text, tz):
    """Parse a submitted date/time string to a UNIX timestamp.

    @param text: str in one of FORM_DATETIME_FORMATS; empty gives 0
    @param tz: pytz timezone the text is expressed in
    @returns: int
    """
    text = str(text).strip() if text else ''
    if not text:
        return 0
    for fmt in FORM_DATETIME_FORMATS:
        try:
            dt = datetime.strptime(text, fmt)
        except ValueError:
            continue
        return int(tz.localize(dt).timestamp())
    raise ValueError('Unrecognized date/time: "%s"' % text)

def _has_attributes(item):
    return hasattr(item, '__dict__') or hasattr(type(item), '__slots__')


class CrudController(ABC):
    """Renders the list screen and the edit screen for one type.
    """

    def __init__(self):
        self.type_name = None
        self.type_id = None
        self.fields = OrderedDict()
        # specs for listed/edited names that configure() never declared
        self.implicit_fields = OrderedDict()
        self.list_fields = None
        self.edit_fields = None
        self.description = None
        self.submenu_slug = None
        self.set_type_name(self.__class__.__name__)
        self.configure()

    def __repr__(self):
        return "<%s.%s '%s'>" % (
            self.__module__, self.__class__.__name__, self.type_id
        )

    def configure(self):
        """Declare fields.
        Override in subclass.
        """
        pass

    # configuration ----------------------------------------------------

    def set_type_name(self, name):
        """Set the name of the type being managed.
        """
        self.type_name = name
        self.type_id = name.replace(' ', '').lower()

    def set_description(self, description):
        self.description = description

    def set_submenu_slug(self, slug):
        self.submenu_slug = slug

    def add_field(self, field):
        """Add a field to be managed, or get it if already added.

        Returns a FieldSpec, intended to be used like this in configure():

            self.add_field('myfield').with_label('My Field')...
        """
        if field not in self.fields:
            self.fields[field] = self.implicit_fields.pop(field, None) or FieldSpec(field)
        return self.fields[field]

    def set_list_fields(self, fields):
        self.list_fields = list(fields)
        self._add_implicit_fields(self.list_fields)

    def set_edit_fields(self, fields):
        self.edit_fields = list(fields)
        self._add_implicit_fields(self.edit_fields)

    def _add_implicit_fields(self, fields):
        for field in fields:
            if (field not in self.fields) and (field not in self.implicit_fields):
                self.implicit_fields[field] = FieldSpec(field)

    def get_field_spec(self, field):
        """Spec for field; names never declared get a default spec.

        Does not change the declared fields, so list and edit screens
        rendered from the same controller never affect each other.
        """
        if field in self.fields:
            return self.fields[field]
        if field in self.implicit_fields:
            return self.implicit_fields[field]
        return FieldSpec(field)

    def get_list_fields(self):
        if self.list_fields:
            return list(self.list_fields)
        return list(self.fields.keys())

    def get_edit_fields(self):
        if self.edit_fields:
            return list(self.edit_fields)
        return list(self.fields.keys())

    def get_timezone(self):
        return settings.TZ

    # item access ------------------------------------------------------

    def get_field_value(self, item, field):
        if isinstance(item, FieldAccess):
            return item.get_field(field)
        if isinstance(item, Mapping):
            return item.get(field)
        if _has_attributes(item):
            return getattr(item, field, None)
        raise UnsupportedItemShape(
            'Expected item to be a mapping or an object, got %s' % type(item).__name__
        )

    def set_field_value(self, item, field, value):
        if isinstance(item, FieldAccess):
            item.set_field(field, value)
        elif isinstance(item, MutableMapping):
            item[field] = value
        elif _has_attributes(item) and not isinstance(item, Mapping):
            setattr(item, field, value)
        else:
            raise UnsupportedItemShape(
                'Expected item to be a mapping or an object, got %s' % type(item).__name__
            )

    def get_item_id(self, item):
        return self.get_field_value(item, 'id')

    def validate_item(self, item):
        """Return an error message if item is not valid.
        Override in subclass.
        """
        return None

    @abstractmethod
    def create_item(self):
        """Return a new blank item."""

    @abstractmethod
    def fetch_item(self, item_id):
        """Return item with the given id; None or ItemNotFound if absent."""

    @abstractmethod
    def save_item(self, item):
        pass

    @abstractmethod
    def delete_item(self, item):
        pass

    @abstractmethod
    def fetch_all_items(self):
        """Return all items for the list screen."""

    def resolve_item(self, item_id):
        """fetch_item, with a missing item always reported as None
        """
        try:
            item = self.fetch_item(item_id)
        except ItemNotFound as err:
            logger.debug('%s %s not found: %s' % (self.type_id, item_id, err))
            return None
        if item is None:
            logger.debug('%s %s not found' % (self.type_id, item_id))
        return item

    def delete_items(self, item_ids):
        """Delete items one at a time; missing ones are skipped.

        Not atomic: an exception from delete_item leaves earlier
        deletions in place.

        @param item_ids: list
        @returns: int number of items deleted
        """
        deleted = 0
        for item_id in item_ids:
            item = self.resolve_item(item_id)
            if item is None:
                continue
            self.delete_item(item)
            logger.info('deleted %s %s' % (self.type_id, item_id))
            deleted += 1
        return deleted

    # list screen ------------------------------------------------------

    def list_url(self):
        return reverse('crud-%s' % self.type_id)

    def form_url(self, item_id=None):
        url = reverse('crud-%s-form' % self.type_id)
        if item_id:
            url = '%s?%s' % (url, urlencode({'id': item_id}))
        return url

    def get_bulk_actions(self):
        return OrderedDict([
            ('delete', 'Delete'),
        ])

    def get_columns(self):
        columns = OrderedDict()
        columns['cb'] = mark_safe('<input type="checkbox" class="crud-toggle-all" />')
        for field in self.get_list_fields():
            columns[field] = self.get_field_spec(field).label
        return columns

    def column_cb(self, item):
        return format_html(
            '<input type="checkbox" name="_bulkid" value="{}" />',
            self.get_item_id(item)
        )

    def row_actions(self, item):
        item_id = self.get_item_id(item)
        delete_url = '%s?%s' % (
            self.list_url(), urlencode({'action': 'delete', 'id': item_id})
        )
        return format_html(
            '<div class="row-actions">'
            '<span class="edit"><a href="{}">Edit</a></span> | '
            '<span class="delete"><a href="{}" onclick="return confirm(\'{}\');">Delete</a></span>'
            '</div>',
            self.form_url(item_id),
            delete_url,
            CRUD_MESSAGES['LIST_DELETE_CONFIRM'],
        )

    def column_default(self, item, column_name):
        """Value shown for item in the given column of the list screen.
        """
        value = self.get_field_value(item, column_name)
        list_fields = self.get_list_fields()
        if list_fields and (column_name == list_fields[0]):
            if value is None:
                value = ''
            return format_html('{} {}', value, self.row_actions(item))

        fieldspec = self.get_field_spec(column_name)
        if fieldspec.type == 'select':
            label = fieldspec.option_label(value)
            if label is None:
                logger.warning('%s.%s: no option for value %r' % (
                    self.type_id, column_name, value
                ))
                return ''
            return label
        if fieldspec.type == 'timestamp':
            return format_timestamp(value, self.get_timezone())
        return value

    def render_list(self, request):
        """List screen, with single and bulk delete.
        """
        data = request.POST if request.method == 'POST' else request.GET

        if (data.get('action') == 'delete') and data.get('id'):
            if self.delete_items([data['id']]):
                messages.success(request, CRUD_MESSAGES['LIST_ITEM_DELETED'])

        if (data.get('bulk_action') == 'delete') and data.getlist('_bulkid'):
            num = self.delete_items(data.getlist('_bulkid'))
            messages.success(request, CRUD_MESSAGES['LIST_ITEMS_DELETED'].format(num))

        items = self.fetch_all_items()
        columns = self.get_columns()
        column_names = list(columns.keys())[1:]
        rows = [
            [self.column_cb(item)] + [
                self.column_default(item, name) for name in column_names
            ]
            for item in items
        ]
        return render(request, 'crud/itemlist.html', {
            'title': self.type_name,
            'description': self.description,
            'type_id': self.type_id,
            'columns': columns,
            'rows': rows,
            'bulk_actions': self.get_bulk_actions(),
            'addlink': self.form_url(),
        })

    # edit screen ------------------------------------------------------

    def form_prep(self, item):
        """Current values of the edit fields, formatted for the form.

        @param item
        @returns: OrderedDict
        """
        data = OrderedDict()
        for field in self.get_edit_fields():
            fieldspec = self.get_field_spec(field)
            value = self.get_field_value(item, field)
            if fieldspec.type == 'timestamp':
                value = format_timestamp(value, self.get_timezone())
            data[field] = value
        return data

    def form_post(self, item, data):
        """Apply submitted edit-field values to item.

        @param item
        @param data: QueryDict or dict of submitted raw values
        """
        for field in self.get_edit_fields():
            fieldspec = self.get_field_spec(field)
            value = data.get(field, '')
            if fieldspec.type == 'timestamp':
                try:
                    value = parse_timestamp(value, self.get_timezone())
                except ValueError:
                    logger.warning('%s.%s: bad timestamp %r' % (self.type_id, field, value))
                    raise InvalidFieldValue(
                        CRUD_MESSAGES['FORM_BAD_TIMESTAMP'].format(fieldspec.label, value)
                    )
            self.set_field_value(item, field, value)

    def form_fields(self, values):
        """Per-field dicts for the edit box template.
        """
        fields = []
        for field in self.get_edit_fields():
            fieldspec = self.get_field_spec(field)
            fields.append({
                'spec': fieldspec,
                'field': fieldspec.field,
                'label': fieldspec.label,
                'description': fieldspec.description,
                'value': values.get(field),
            })
        return fields

    def render_form(self, request):
        """Edit screen; saves the item on POST.
        """
        item_id = request.POST.get('id') if request.method == 'POST' else request.GET.get('id')
        item = None
        if item_id:
            item = self.resolve_item(item_id)
        if item is None:
            item = self.create_item()

        if request.method == 'POST':
            try:
                self.form_post(item, request.POST)
                notice = self.validate_item(item)
            except InvalidFieldValue as err:
                notice = str(err)
            if not notice:
                self.save_item(item)
                logger.info('saved %s %s' % (self.type_id, self.get_item_id(item)))
                messages.success(request, CRUD_MESSAGES['FORM_SAVED'].format(self.type_name))
                saved_id = self.get_item_id(item)
                if saved_id:
                    return HttpResponseRedirect(self.form_url(saved_id))
                return HttpResponseRedirect(self.list_url())
            messages.error(request, notice)
            values = OrderedDict([
                (field, request.POST.get(field, ''))
                for field in self.get_edit_fields()
            ])
        else:
            values = self.form_prep(item)

        fields = self.form_fields(values)
        form = CrudForm(initial=values, fields=[f['spec'] for f in fields])
        for f in fields:
            f['input'] = form[f['field']]
        return render(request, 'crud/itemformpage.html', {
            'title': self.type_name,
            'type_id': self.type_id,
            'item_id': item_id or '',
            'item': item,
            'form': form,
            'fields': fields,
            'backlink': self.list_url(),
        })

    # registration -----------------------------------------------------

    @classmethod
    def admin_menu(cls):
        """Instantiate controller, add its menu entry, return its URL patterns.

        The list screen appears in the menu; the edit screen does not.

            urlpatterns = [
                path('manage/', include(ArticleCrud.admin_menu())),
            ]
        """
        instance = cls()
        if instance.submenu_slug:
            title = CRUD_MESSAGES['MENU_MANAGE'].format(instance.type_name)
        else:
            title = instance.type_name
        entry = {
            'title': title,
            'slug': instance.type_id,
            'parent': instance.submenu_slug,
            'url_name': 'crud-%s' % instance.type_id,
        }
        MENU[:] = [e for e in MENU if e['slug'] != entry['slug']] + [entry]
        logger.debug('registered %r' % instance)
        return [
            path('%s/' % instance.type_id,
                 crudview(instance.render_list),
                 name='crud-%s' % instance.type_id),
            path('%s/form/' % instance.type_id,
                 crudview(instance.render_form),
                 name='crud-%s-form' % instance.type_id),
        ]
