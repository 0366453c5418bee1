from collections import OrderedDict
import logging
logger = logging.getLogger(__name__)

from django import forms


class CrudForm(forms.Form):
    def __init__(self, *args, **kwargs):
        """Build a form from a list of FieldSpec objects.

        The form is used to render the edit box. Submitted values are
        post-processed by CrudController.form_post rather than by the
        form's clean() methods, so the form never rejects anything.

        Examples:
            form = CrudForm(initial=controller.form_prep(item), fields=specs)

        @param fields: list of FieldSpec
        """
        specs = kwargs.pop('fields', None) or []
        super(CrudForm, self).__init__(*args, **kwargs)
        self.fields = construct_form(specs)


def construct_form(specs):
    fields = []
    for spec in specs:
        fkwargs = {
            'label': spec.label,
            'help_text': spec.description or '',
            'required': False,
        }
        if spec.type == 'select':
            choices = [('', '')]
            for key,label in (spec.options or {}).items():
                choices.append((key, label))
            fobject = forms.ChoiceField(choices=choices, **fkwargs)
        elif spec.type == 'timestamp':
            fobject = forms.CharField(
                widget=forms.TextInput(attrs={
                    'class': 'datetimepicker',
                    'autocomplete': 'off',
                }),
                **fkwargs
            )
        else:
            fobject = forms.CharField(**fkwargs)
        fields.append((spec.field, fobject))
    return OrderedDict(fields)
