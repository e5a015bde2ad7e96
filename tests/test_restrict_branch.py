"""Tests for django-restrict-branch hooks, services and views."""

import pytest
from django import forms
from django.contrib.auth.models import Group

from django_restrict_branch.exceptions import BranchHookError
from django_restrict_branch.forms import branch_parent_form_field
from django_restrict_branch.hooks import BranchRootEvent, HookRegistry
from django_restrict_branch.models import (
    FieldConfig,
    MatchType,
    RestrictBranchSettings,
    RoleBranchParent,
    UserBranchParent,
)
from django_restrict_branch.services import (
    apply_page_list_processors,
    build_page_tree,
    get_branch_root,
    get_branch_root_parent_id,
    get_default_branch_root_parent_id,
    get_match_type,
    render_page_list,
)


@pytest.fixture
def clean_registry():
    """Empty hook registry, restored after the test."""
    saved_hooks = list(HookRegistry._branch_root_hooks)
    saved_processors = list(HookRegistry._page_list_processors)
    HookRegistry.clear()
    yield HookRegistry
    HookRegistry.clear()
    HookRegistry._branch_root_hooks.extend(saved_hooks)
    HookRegistry._page_list_processors.extend(saved_processors)


class TestHookRegistry:
    """Tests for HookRegistry."""

    def test_branch_select_hooks_registered(self):
        """Branch select wires itself in on app ready."""
        from django_branch_select.injector import inject_branch_selector
        from django_branch_select.resolver import resolve_branch_root

        assert HookRegistry.branch_root_hooks()[0] is resolve_branch_root
        assert inject_branch_selector in HookRegistry.page_list_processors()

    def test_priority_order(self, clean_registry):
        def late(event):
            pass

        def early(event):
            pass

        clean_registry.register_branch_root_hook(late)
        clean_registry.register_branch_root_hook(early, priority=1)

        assert clean_registry.branch_root_hooks() == [early, late]

    def test_equal_priority_keeps_registration_order(self, clean_registry):
        def first(request, markup):
            return markup

        def second(request, markup):
            return markup

        clean_registry.register_page_list_processor(first)
        clean_registry.register_page_list_processor(second)

        assert clean_registry.page_list_processors() == [first, second]

    def test_duplicate_registration_ignored(self, clean_registry):
        def hook(event):
            pass

        clean_registry.register_branch_root_hook(hook)
        clean_registry.register_branch_root_hook(hook)

        assert clean_registry.branch_root_hooks() == [hook]

    def test_unregister(self, clean_registry):
        def hook(event):
            pass

        clean_registry.register_branch_root_hook(hook)
        clean_registry.unregister(hook)

        assert clean_registry.branch_root_hooks() == []

    def test_non_callable_rejected(self, clean_registry):
        with pytest.raises(BranchHookError):
            clean_registry.register_branch_root_hook("not callable")


@pytest.mark.django_db
class TestBranchRootLookup:
    """Tests for the host branch root lookup."""

    def test_match_type_defaults_to_none(self):
        assert get_match_type() == MatchType.NONE

    def test_settings_singleton(self):
        first = RestrictBranchSettings.get_instance()
        second = RestrictBranchSettings.get_instance()
        assert first.pk == second.pk == 1

    def test_no_restriction(self, user, pages, make_request):
        assert get_branch_root_parent_id(make_request()) is None

    def test_default_single_parent(self, user, pages, set_match_type):
        set_match_type(MatchType.SINGLE_SPECIFIED_PARENT)
        UserBranchParent.objects.create(user=user, page=pages["b"])

        assert get_default_branch_root_parent_id(user) == 20

    def test_default_by_role(self, user, pages, set_match_type):
        set_match_type(MatchType.SPECIFIED_PARENT_BY_ROLE)
        empty = Group.objects.create(name="empty")
        writers = Group.objects.create(name="writers")
        RoleBranchParent.objects.create(role=writers, page=pages["a"])
        user.groups.add(empty, writers)

        assert get_default_branch_root_parent_id(user) == 10

    def test_hook_replaces_result(self, clean_registry, user, pages, make_request):
        def hook(event):
            event.return_value = 20
            event.replace = True

        clean_registry.register_branch_root_hook(hook)

        assert get_branch_root_parent_id(make_request()) == 20

    def test_hook_without_replace_falls_through(self, clean_registry, user, pages, set_match_type, make_request):
        seen = []

        def hook(event):
            seen.append(event)
            event.return_value = 20

        clean_registry.register_branch_root_hook(hook)
        set_match_type(MatchType.SINGLE_SPECIFIED_PARENT)
        UserBranchParent.objects.create(user=user, page=pages["a"])

        assert get_branch_root_parent_id(make_request()) == 10
        assert isinstance(seen[0], BranchRootEvent)
        assert seen[0].user == user

    def test_get_branch_root(self, user, pages, set_match_type, make_request):
        set_match_type(MatchType.SINGLE_SPECIFIED_PARENT)
        UserBranchParent.objects.create(user=user, page=pages["a"])

        assert get_branch_root(make_request()) == pages["a"]


@pytest.mark.django_db
class TestPageTree:
    """Tests for page tree building and rendering."""

    def test_full_tree(self, pages):
        tree = build_page_tree()

        assert len(tree) == 1
        root, children = tree[0]
        assert root == pages["root"]
        assert [child.pk for child, _ in children] == [10, 20]

    def test_branch_tree(self, pages):
        tree = build_page_tree(pages["b"])

        page, children = tree[0]
        assert page == pages["b"]
        assert [child.pk for child, _ in children] == [21]

    def test_deleted_pages_hidden(self, pages):
        pages["a"].delete()

        _, children = build_page_tree()[0]
        assert [child.pk for child, _ in children] == [20]

    def test_render_restricted_branch(self, user, pages, set_match_type, make_request):
        set_match_type(MatchType.SINGLE_SPECIFIED_PARENT)
        UserBranchParent.objects.create(user=user, page=pages["b"])

        html = render_page_list(make_request())

        assert 'class="PageListContainer"' in html
        assert 'data-root="20"' in html
        assert "B child" in html
        assert "Branch A" not in html

    def test_render_escapes_titles(self, user, pages, make_request):
        pages["a"].title = "<b>bold</b>"
        pages["a"].save()

        html = render_page_list(make_request())

        assert "&lt;b&gt;bold&lt;/b&gt;" in html

    def test_processors_applied(self, clean_registry, make_request):
        clean_registry.register_page_list_processor(lambda request, markup: "<p>x</p>" + markup)

        assert apply_page_list_processors(make_request(), "<div></div>") == "<p>x</p><div></div>"


@pytest.mark.django_db
class TestPageListView:
    """Tests for PageListView with branch select installed."""

    def test_requires_login(self, client):
        response = client.get("/pages/")
        assert response.status_code == 302

    def test_selector_and_switching(self, client, user, pages, branch_field, set_match_type):
        set_match_type(MatchType.SINGLE_SPECIFIED_PARENT)
        UserBranchParent.objects.create(user=user, page=pages["a"], sort_order=1)
        UserBranchParent.objects.create(user=user, page=pages["b"], sort_order=2)
        client.force_login(user)

        html = client.get("/pages/").content.decode()
        assert html.startswith('<form method="get"')
        assert '<option value="10" selected="selected">Branch A</option>' in html
        assert 'data-root="10"' in html
        assert client.session["BranchParentID"] == 10

        html = client.get("/pages/", {"branch_parent": 20}).content.decode()
        assert '<option value="20" selected="selected">Branch B</option>' in html
        assert 'data-root="20"' in html
        assert client.session["BranchParentID"] == 20

        # Remembered without the parameter
        html = client.get("/pages/").content.decode()
        assert 'data-root="20"' in html

    def test_no_selector_for_single_branch(self, client, user, pages, branch_field, set_match_type):
        set_match_type(MatchType.SINGLE_SPECIFIED_PARENT)
        UserBranchParent.objects.create(user=user, page=pages["a"])
        client.force_login(user)

        html = client.get("/pages/").content.decode()

        assert "<form" not in html
        assert 'data-root="10"' in html


@pytest.mark.django_db
class TestBranchParentFormField:
    """Tests for branch_parent_form_field()."""

    def test_single_select_by_default(self, db):
        FieldConfig.objects.create(name="branch_parent")

        field = branch_parent_form_field()

        assert isinstance(field, forms.ModelChoiceField)
        assert not isinstance(field, forms.ModelMultipleChoiceField)
        assert isinstance(field.widget, forms.Select)

    def test_missing_config_is_single_select(self, db):
        assert not isinstance(branch_parent_form_field(), forms.ModelMultipleChoiceField)

    def test_multi_select_after_install(self, branch_field):
        field = branch_parent_form_field(required=True)

        assert isinstance(field, forms.ModelMultipleChoiceField)
        assert isinstance(field.widget, forms.SelectMultiple)
        assert field.required is True
