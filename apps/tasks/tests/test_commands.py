from io import StringIO

from django.core.management import call_command
from django.test import TestCase

from apps.tasks.models import Task


class SeedTasksCommandTest(TestCase):
    def test_seeds_sample_tasks(self):
        out = StringIO()
        call_command("seed_tasks", stdout=out)
        self.assertEqual(Task.objects.count(), 3)
        self.assertIn("Created task: Learn GraphQL", out.getvalue())

    def test_custom_titles_and_clear(self):
        Task.objects.create(title="old")
        out = StringIO()
        call_command("seed_tasks", "alpha", "  ", "beta", "--clear", stdout=out)
        self.assertEqual(sorted(Task.objects.values_list("title", flat=True)), ["alpha", "beta"])
        self.assertIn("Skipped", out.getvalue())
