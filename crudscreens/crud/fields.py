import logging
logger = logging.getLogger(__name__)


FIELD_TYPES = ('text', 'select', 'timestamp')


class InvalidFieldType(ValueError):
    pass


class FieldSpec(object):
    """Describes one listable/editable attribute of a managed type.

    Specs are meant to be built in CrudController.configure() by chaining:

        self.add_field('status').with_label('Status').with_options({
            1: 'Active',
            2: 'Inactive',
        })
    """

    def __init__(self, field):
        self.field = field
        self.label = field
        self.type = 'text'
        self.options = None
        self.description = None

    def __repr__(self):
        return "<%s.%s '%s' %s>" % (
            self.__module__, self.__class__.__name__, self.field, self.type
        )

    def with_label(self, label):
        self.label = label
        return self

    def with_description(self, description):
        self.description = description
        return self

    def with_type(self, type):
        """Set field type; must be one of FIELD_TYPES.

        @param type: str
        @returns: FieldSpec
        """
        if type not in FIELD_TYPES:
            raise InvalidFieldType('Unknown type: %s' % type)
        self.type = type
        return self

    def with_options(self, options):
        """Set choices for a select field.

        Setting options always turns the field into a select field.

        @param options: dict stored value -> display text
        @returns: FieldSpec
        """
        self.options = options
        self.type = 'select'
        return self

    def option_label(self, value):
        """Display text for a stored select value, or None if not an option.

        Values submitted through a form arrive as strings so keys are
        also matched by their string form.
        """
        if not self.options:
            return None
        try:
            return self.options[value]
        except (KeyError, TypeError):
            pass
        for key,label in self.options.items():
            if str(key) == str(value):
                return label
        return None
