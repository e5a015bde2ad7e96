"""Django admin configuration for django-restrict-branch."""

from django.contrib import admin

from .forms import RoleBranchParentForm, UserBranchParentForm
from .models import FieldConfig, Page, RestrictBranchSettings, RoleBranchParent, UserBranchParent


@admin.register(Page)
class PageAdmin(admin.ModelAdmin):
    """Admin for Page model."""

    list_display = ["title", "parent", "sort_order", "updated_at"]
    search_fields = ["title"]
    readonly_fields = ["created_at", "updated_at", "deleted_at"]


@admin.register(FieldConfig)
class FieldConfigAdmin(admin.ModelAdmin):
    """Admin for FieldConfig model."""

    list_display = ["name", "deref_mode", "input_widget"]


@admin.register(RestrictBranchSettings)
class RestrictBranchSettingsAdmin(admin.ModelAdmin):
    """Admin for the settings singleton."""

    list_display = ["__str__", "match_type"]

    def has_add_permission(self, request):
        return not RestrictBranchSettings.objects.exists()

    def has_delete_permission(self, request, obj=None):
        return False


class BranchParentAssignmentAdmin(admin.ModelAdmin):
    """Base admin for branch parent assignments.

    Adding uses an assignment form whose page input follows the branch
    parent field configuration; one row is created per selected page.
    """

    add_form = None
    list_display = ["__str__", "page", "sort_order"]
    list_select_related = ["page"]

    def get_form(self, request, obj=None, **kwargs):
        if obj is None:
            kwargs["form"] = self.add_form
        return super().get_form(request, obj, **kwargs)

    def save_model(self, request, obj, form, change):
        if change:
            return super().save_model(request, obj, form, change)

        first = form.save_assignments()[0]
        obj.pk = first.pk
        obj.page = first.page
        obj.sort_order = first.sort_order


@admin.register(UserBranchParent)
class UserBranchParentAdmin(BranchParentAssignmentAdmin):
    """Admin for UserBranchParent model."""

    add_form = UserBranchParentForm
    list_filter = ["user"]


@admin.register(RoleBranchParent)
class RoleBranchParentAdmin(BranchParentAssignmentAdmin):
    """Admin for RoleBranchParent model."""

    add_form = RoleBranchParentForm
    list_filter = ["role"]
