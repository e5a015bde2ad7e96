"""Models for django-restrict-branch.

Page tree, branch parent assignments and the restriction settings that
decide which branch of the tree an editor may work in.
"""

from django.conf import settings
from django.contrib.auth.models import Group
from django.db import IntegrityError, models, transaction
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class MatchType(models.TextChoices):
    """How a user's branch parent is matched."""

    NONE = "none", _("None")
    SINGLE_SPECIFIED_PARENT = "single_specified_parent", _("Specified parent")
    SPECIFIED_PARENT_BY_ROLE = "specified_parent_by_role", _("Specified parent by role")


class DerefMode(models.TextChoices):
    """How many pages a page reference field resolves to."""

    SINGLE_PAGE = "single", _("Single page")
    PAGE_ARRAY = "multiple", _("Multiple pages")


class InputWidget(models.TextChoices):
    """Input widgets for page reference fields."""

    PAGE_LIST_SELECT = "page_list_select", _("Page list select")
    PAGE_LIST_SELECT_MULTIPLE = "page_list_select_multiple", _("Page list select (multiple)")


class SoftDeleteManager(models.Manager):
    """Manager that excludes soft-deleted pages."""

    def get_queryset(self):
        return super().get_queryset().filter(deleted_at__isnull=True)


class Page(models.Model):
    """Node in the content tree.

    A page without a parent is a tree root. Soft-deleted pages are hidden
    from the default manager, so a removed page no longer resolves by id.
    """

    title = models.CharField(_("title"), max_length=255)
    parent = models.ForeignKey(
        "self",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="children",
        verbose_name=_("parent"),
    )
    sort_order = models.IntegerField(_("sort order"), default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(null=True, blank=True)

    objects = SoftDeleteManager()
    all_objects = models.Manager()

    class Meta:
        verbose_name = _("page")
        verbose_name_plural = _("pages")
        ordering = ["sort_order", "id"]

    def __str__(self):
        return self.title

    def delete(self, using=None, keep_parents=False):
        """Soft delete the page by setting deleted_at timestamp."""
        self.deleted_at = timezone.now()
        self.save(update_fields=["deleted_at"])

    def restore(self):
        """Restore a soft-deleted page."""
        self.deleted_at = None
        self.save(update_fields=["deleted_at"])


class UserBranchParent(models.Model):
    """A page a user is allowed to use as branch root."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="branch_parents",
        verbose_name=_("user"),
    )
    page = models.ForeignKey(
        Page,
        on_delete=models.CASCADE,
        related_name="user_assignments",
        verbose_name=_("page"),
    )
    sort_order = models.IntegerField(_("sort order"), default=0)

    class Meta:
        verbose_name = _("user branch parent")
        verbose_name_plural = _("user branch parents")
        ordering = ["sort_order", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "page"],
                name="unique_user_branch_parent",
            ),
        ]

    def __str__(self):
        return f"{self.user} -> {self.page_id}"


class RoleBranchParent(models.Model):
    """A page every member of a role is allowed to use as branch root."""

    role = models.ForeignKey(
        Group,
        on_delete=models.CASCADE,
        related_name="branch_parents",
        verbose_name=_("role"),
    )
    page = models.ForeignKey(
        Page,
        on_delete=models.CASCADE,
        related_name="role_assignments",
        verbose_name=_("page"),
    )
    sort_order = models.IntegerField(_("sort order"), default=0)

    class Meta:
        verbose_name = _("role branch parent")
        verbose_name_plural = _("role branch parents")
        ordering = ["sort_order", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["role", "page"],
                name="unique_role_branch_parent",
            ),
        ]

    def __str__(self):
        return f"{self.role} -> {self.page_id}"


class FieldConfig(models.Model):
    """Configuration of a named page reference field.

    The branch parent field starts out single-valued: only the first
    assigned page is dereferenced until it is switched to PAGE_ARRAY.
    """

    name = models.SlugField(_("name"), max_length=100, unique=True)
    deref_mode = models.CharField(
        _("dereference mode"),
        max_length=20,
        choices=DerefMode.choices,
        default=DerefMode.SINGLE_PAGE,
    )
    input_widget = models.CharField(
        _("input widget"),
        max_length=50,
        choices=InputWidget.choices,
        default=InputWidget.PAGE_LIST_SELECT,
    )

    class Meta:
        verbose_name = _("field configuration")
        verbose_name_plural = _("field configurations")
        ordering = ["name"]

    def __str__(self):
        return f"{self.name} ({self.deref_mode})"

    @property
    def allows_multiple(self) -> bool:
        return self.deref_mode == DerefMode.PAGE_ARRAY


class RestrictBranchSettings(models.Model):
    """Site-wide restriction settings (singleton, pk=1)."""

    match_type = models.CharField(
        _("match type"),
        max_length=50,
        choices=MatchType.choices,
        default=MatchType.NONE,
    )

    class Meta:
        verbose_name = _("restrict branch settings")
        verbose_name_plural = _("restrict branch settings")

    def __str__(self):
        return f"Restrict Branch Settings ({self.match_type})"

    def save(self, *args, **kwargs):
        self.pk = 1
        super().save(*args, **kwargs)

    @classmethod
    def get_instance(cls):
        """Get or create the singleton instance."""
        try:
            with transaction.atomic():
                obj, _ = cls.objects.get_or_create(pk=1)
                return obj
        except IntegrityError:
            # Race condition: another process created it
            return cls.objects.get(pk=1)
