from django.core.management.base import BaseCommand

from apps.tasks.exceptions import TaskError
from apps.tasks.models import Task
from apps.tasks.services import TaskService
from apps.tasks.store import DjangoTaskStore


SAMPLE_TITLES = [
    'Learn REST',
    'Learn GraphQL',
    'Compare both APIs',
]


class Command(BaseCommand):
    help = 'Seeds the database with sample tasks'

    def add_arguments(self, parser):
        parser.add_argument('titles', nargs='*', help='Task titles (defaults to a sample set)')
        parser.add_argument('--clear', action='store_true', help='Delete all tasks first')

    def handle(self, *args, **options):
        store = DjangoTaskStore()
        store.connect()
        service = TaskService(store)

        if options['clear']:
            deleted, _ = Task.objects.all().delete()
            self.stdout.write(self.style.WARNING(f'Deleted {deleted} existing tasks'))

        for title in options['titles'] or SAMPLE_TITLES:
            try:
                task = service.create_task(title)
            except TaskError as e:
                self.stdout.write(self.style.ERROR(f'Skipped {title!r}: {e}'))
                continue
            self.stdout.write(self.style.SUCCESS(f'Created task: {task.title} ({task.id})'))
