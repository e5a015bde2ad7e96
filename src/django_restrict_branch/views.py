"""Views for django-restrict-branch."""

from django.contrib.auth.mixins import LoginRequiredMixin
from django.http import HttpResponse
from django.views import View

from .services import apply_page_list_processors, render_page_list


class PageListView(LoginRequiredMixin, View):
    """Render the page tree for the requesting user's branch.

    Registered page list processors may rewrite the markup before it is
    returned.
    """

    def get(self, request):
        markup = render_page_list(request)
        markup = apply_page_list_processors(request, markup)
        return HttpResponse(markup)
