from django.core.management.base import BaseCommand

from presence.services import cleanup_offline


class Command(BaseCommand):
    help = "Marks users offline when their last heartbeat is older than the stale window"

    def handle(self, *args, **options):
        swept = cleanup_offline()
        self.stdout.write(self.style.SUCCESS(f"Marked {swept} users offline."))
