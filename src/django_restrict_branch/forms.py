"""Forms for assigning branch parents."""

from django import forms
from django.utils.translation import gettext_lazy as _

from .models import InputWidget, Page, RoleBranchParent, UserBranchParent
from .services import get_branch_parent_field


def branch_parent_form_field(required: bool = False) -> forms.Field:
    """Build a form field for the branch parent field configuration.

    Uses a multi-select when the field is configured with the multiple
    page list widget, a single select otherwise.
    """
    field = get_branch_parent_field()
    queryset = Page.objects.all()
    label = _("Branch parent")

    if field is not None and field.input_widget == InputWidget.PAGE_LIST_SELECT_MULTIPLE:
        return forms.ModelMultipleChoiceField(
            queryset=queryset,
            required=required,
            label=label,
            widget=forms.SelectMultiple,
        )
    return forms.ModelChoiceField(
        queryset=queryset,
        required=required,
        label=label,
        widget=forms.Select,
    )


class BranchParentAssignmentForm(forms.ModelForm):
    """Assign one or more branch parents to an owner at once.

    The branch_parent input follows the field configuration, so it turns
    into a multi-select once the field allows multiple pages.
    """

    owner_field = None

    # Replaced per instance by branch_parent_form_field()
    branch_parent = forms.ModelChoiceField(queryset=Page.objects.all())

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["branch_parent"] = branch_parent_form_field(required=True)

    def selected_pages(self) -> list[Page]:
        value = self.cleaned_data.get("branch_parent")
        if value is None:
            return []
        if isinstance(value, Page):
            return [value]
        return list(value)

    def save_assignments(self) -> list:
        """Create one assignment per selected page.

        Pages already assigned to the owner are kept as they are; new ones
        are appended after the existing assignments.
        """
        model = self._meta.model
        owner = self.cleaned_data[self.owner_field]
        start = model.objects.filter(**{self.owner_field: owner}).count()

        assignments = []
        for offset, page in enumerate(self.selected_pages()):
            obj, _ = model.objects.get_or_create(
                **{self.owner_field: owner, "page": page},
                defaults={"sort_order": start + offset},
            )
            assignments.append(obj)
        return assignments


class UserBranchParentForm(BranchParentAssignmentForm):
    owner_field = "user"

    class Meta:
        model = UserBranchParent
        fields = ["user"]


class RoleBranchParentForm(BranchParentAssignmentForm):
    owner_field = "role"

    class Meta:
        model = RoleBranchParent
        fields = ["role"]
