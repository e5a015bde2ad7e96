"""Management command to install branch select."""

from django.core.management.base import BaseCommand, CommandError

from django_branch_select.exceptions import BranchSelectError
from django_branch_select.install import install_branch_select


class Command(BaseCommand):
    help = 'Check prerequisites and allow multiple pages in the branch parent field'

    def handle(self, *args, **options):
        try:
            report = install_branch_select()
        except BranchSelectError as e:
            raise CommandError(str(e)) from e

        for message in report.messages:
            self.stdout.write(self.style.SUCCESS(message))
        for warning in report.warnings:
            self.stdout.write(self.style.WARNING(warning))
        if not report.messages and not report.warnings:
            self.stdout.write('Branch parent field already allows multiple pages')
